"""Shared dependencies for RingCatalog web routes.

Dependencies are injected using FastAPI's Depends() system and can be
replaced in tests through ``app.dependency_overrides``.

Usage:
    from fastapi import Depends
    from ringcatalog.web.dependencies import get_pipeline

    @router.get("/products")
    async def products(pipeline: PricingPipeline = Depends(get_pipeline)):
        result = await pipeline.compute()
"""

from __future__ import annotations

from ringcatalog.config import get_config
from ringcatalog.pricing.oracle import PriceOracle
from ringcatalog.pricing.pipeline import PricingPipeline

# Global singleton so the oracle's price cache spans requests
_oracle: PriceOracle | None = None


def get_oracle() -> PriceOracle:
    """Get the process-wide PriceOracle built from configuration."""
    global _oracle
    if _oracle is None:
        _oracle = PriceOracle.from_config(get_config().oracle)
    return _oracle


def get_pipeline() -> PricingPipeline:
    """Build a PricingPipeline over the shared oracle and configured catalog.

    The pipeline itself holds no state, so a fresh one per request is fine.
    """
    return PricingPipeline(get_oracle(), get_config().catalog.path)


async def close_oracle() -> None:
    """Close the shared oracle's HTTP client (application shutdown)."""
    global _oracle
    if _oracle is not None:
        await _oracle.close()
        _oracle = None
