"""Response models for the RingCatalog web API.

Field names follow the storefront's JSON contract (camelCase).

Usage:
    from ringcatalog.web.models import ProductListResponse

    @router.get("/products", response_model=ProductListResponse)
    async def list_products():
        ...
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ringcatalog.models import FilterCriteria, PricedEntry, PricingResult


class ProductListResponse(BaseModel):
    """Priced products with the gold price they were computed from.

    Used by: GET /api/products
    """

    model_config = ConfigDict(populate_by_name=True)

    products: list[PricedEntry]
    gold_price: float = Field(alias="goldPrice")
    timestamp: str

    @classmethod
    def from_result(cls, result: PricingResult) -> ProductListResponse:
        return cls(products=result.items, gold_price=result.gold_price, timestamp=result.timestamp)


class FilteredProductListResponse(ProductListResponse):
    """Priced products after range filtering, echoing the applied bounds.

    Used by: GET /api/products/filtered
    """

    filters: FilterCriteria

    @classmethod
    def from_filtered(
        cls, result: PricingResult, filters: FilterCriteria
    ) -> FilteredProductListResponse:
        return cls(
            products=result.items,
            gold_price=result.gold_price,
            timestamp=result.timestamp,
            filters=filters,
        )


class ErrorResponse(BaseModel):
    """Error body for every non-2xx API response."""

    error: str


__all__ = ["ProductListResponse", "FilteredProductListResponse", "ErrorResponse"]
