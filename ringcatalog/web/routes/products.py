"""Product catalog routes.

Routes:
- GET /api/products           - All products priced at the current gold price
- GET /api/products/filtered  - Products within optional price/popularity bounds
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ringcatalog.pricing.filters import parse_filters
from ringcatalog.pricing.pipeline import PricingPipeline
from ringcatalog.web.dependencies import get_pipeline
from ringcatalog.web.models import (
    ErrorResponse,
    FilteredProductListResponse,
    ProductListResponse,
)

router = APIRouter(prefix="/api/products", tags=["products"])

_ERROR_RESPONSES = {
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
    503: {"model": ErrorResponse, "description": "Gold price unavailable"},
}


@router.get("", response_model=ProductListResponse, responses=_ERROR_RESPONSES)
async def list_products(pipeline: PricingPipeline = Depends(get_pipeline)):
    """List every catalog product with its computed price and rating."""
    result = await pipeline.compute()
    return ProductListResponse.from_result(result)


@router.get(
    "/filtered",
    response_model=FilteredProductListResponse,
    responses={400: {"model": ErrorResponse, "description": "Malformed filter"}, **_ERROR_RESPONSES},
)
async def list_filtered_products(
    min_price: str | None = Query(default=None, alias="minPrice"),
    max_price: str | None = Query(default=None, alias="maxPrice"),
    min_popularity: str | None = Query(default=None, alias="minPopularity"),
    max_popularity: str | None = Query(default=None, alias="maxPopularity"),
    pipeline: PricingPipeline = Depends(get_pipeline),
):
    """List products within inclusive price and popularity bounds.

    Bounds are optional and independent. Values that are not finite numbers
    are rejected with 400 before any pricing happens.
    """
    filters = parse_filters(
        {
            "minPrice": min_price,
            "maxPrice": max_price,
            "minPopularity": min_popularity,
            "maxPopularity": max_popularity,
        }
    )
    result = await pipeline.compute(filters)
    return FilteredProductListResponse.from_filtered(result, filters)
