"""Range filters over priced catalog entries."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from ringcatalog.errors import InvalidFilterValue
from ringcatalog.models import FilterCriteria, PricedEntry

FILTER_FIELDS = ("minPrice", "maxPrice", "minPopularity", "maxPopularity")


def _parse_bound(field_name: str, value: object) -> float | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        # Empty query values mean "no bound", same as leaving the field out
        if value == "":
            return None
    if isinstance(value, bool):
        raise InvalidFilterValue(field_name, value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidFilterValue(field_name, value) from None
    if not math.isfinite(number):
        raise InvalidFilterValue(field_name, value)
    return number


def parse_filters(raw: Mapping[str, object]) -> FilterCriteria:
    """Build FilterCriteria from loosely typed input (query string, CLI options).

    Keys are the wire names (minPrice, maxPrice, minPopularity, maxPopularity);
    unknown keys are ignored.

    Raises:
        InvalidFilterValue: If a provided bound is not a finite number
    """
    bounds = {name: _parse_bound(name, raw.get(name)) for name in FILTER_FIELDS}
    return FilterCriteria(**bounds)


def apply_filters(
    entries: Iterable[PricedEntry], criteria: FilterCriteria | None
) -> list[PricedEntry]:
    """Keep entries satisfying every provided bound (inclusive, conjunctive)."""
    if criteria is None or criteria.is_empty:
        return list(entries)
    return [entry for entry in entries if criteria.matches(entry)]
