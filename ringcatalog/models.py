"""RingCatalog Pydantic models for type-safe data validation.

Python attributes are snake_case; the JSON contract consumed by the
storefront keeps its camelCase field names through aliases.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ColorVariant(str, Enum):
    """Gold colour variants every ring is photographed in."""

    YELLOW = "yellow"
    WHITE = "white"
    ROSE = "rose"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} Gold"


class RingImages(BaseModel):
    """Image URL per colour variant. All three variants are required."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    yellow: str = Field(min_length=1, strict=True)
    white: str = Field(min_length=1, strict=True)
    rose: str = Field(min_length=1, strict=True)

    def for_color(self, color: ColorVariant) -> str:
        return getattr(self, color.value)


class CatalogEntry(BaseModel):
    """Ring as stored in the static catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1, strict=True)
    popularity_score: float = Field(alias="popularityScore", ge=0.0, le=1.0, strict=True)
    weight: float = Field(gt=0.0, strict=True)  # grams
    images: RingImages

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v

    @field_validator("popularity_score", "weight")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v


class PricedEntry(CatalogEntry):
    """Catalog entry enriched with its gold-derived price and display rating."""

    price: float = Field(ge=0.0)  # USD
    popularity: float = Field(ge=0.0, le=5.0)  # out of 5


class PriceSnapshot(BaseModel):
    """Gold spot price captured for one pricing call."""

    model_config = ConfigDict(frozen=True)

    price_per_gram: float  # USD
    captured_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class FilterCriteria(BaseModel):
    """Optional inclusive bounds on price and popularity.

    No ordering is enforced between min and max; an inverted range simply
    matches nothing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    min_price: float | None = Field(default=None, alias="minPrice")
    max_price: float | None = Field(default=None, alias="maxPrice")
    min_popularity: float | None = Field(default=None, alias="minPopularity")
    max_popularity: float | None = Field(default=None, alias="maxPopularity")

    @property
    def is_empty(self) -> bool:
        return all(
            bound is None
            for bound in (self.min_price, self.max_price, self.min_popularity, self.max_popularity)
        )

    def matches(self, entry: PricedEntry) -> bool:
        if self.min_price is not None and entry.price < self.min_price:
            return False
        if self.max_price is not None and entry.price > self.max_price:
            return False
        if self.min_popularity is not None and entry.popularity < self.min_popularity:
            return False
        if self.max_popularity is not None and entry.popularity > self.max_popularity:
            return False
        return True


class PricingResult(BaseModel):
    """Output of one pricing pipeline call."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[PricedEntry]
    gold_price: float = Field(alias="goldPrice")
    timestamp: str
    rejected: int = 0
