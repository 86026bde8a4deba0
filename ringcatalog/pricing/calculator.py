"""Ring price and rating arithmetic.

Price formula: (popularity_score + 1) * weight_g * gold_usd_per_gram.
The +1 keeps a ring with zero popularity priced at its raw gold value.
"""

from __future__ import annotations

import math

from ringcatalog.models import CatalogEntry, PricedEntry

TROY_OUNCE_GRAMS = 31.1035
RATING_SCALE = 5


def round_half_away(value: float, places: int = 2) -> float:
    """Round to `places` decimals, ties away from zero.

    Mirrors ``round(value * 10**places) / 10**places`` on the scaled value
    rather than Python's banker's rounding.

    Example:
        >>> round_half_away(0.125)
        0.13
        >>> round_half_away(-0.125)
        -0.13
    """
    factor = 10**places
    scaled = value * factor
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / factor


def ounce_to_gram_price(price_per_ounce: float) -> float:
    """Convert a USD per troy ounce quote to USD per gram (2 decimals)."""
    return round_half_away(price_per_ounce / TROY_OUNCE_GRAMS, 2)


def calculate_price(popularity_score: float, weight: float, gold_price: float) -> float:
    return round_half_away((popularity_score + 1) * weight * gold_price, 2)


def convert_popularity(popularity_score: float) -> float:
    """Rescale a [0, 1] popularity score to a one-decimal 5-point rating."""
    return round_half_away(popularity_score * RATING_SCALE, 1)


def price_entry(entry: CatalogEntry, gold_price: float) -> PricedEntry:
    """Enrich a catalog entry with its price and rating for one gold price."""
    return PricedEntry(
        name=entry.name,
        popularity_score=entry.popularity_score,
        weight=entry.weight,
        images=entry.images,
        price=calculate_price(entry.popularity_score, entry.weight, gold_price),
        popularity=convert_popularity(entry.popularity_score),
    )
