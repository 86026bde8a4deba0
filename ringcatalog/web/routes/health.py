"""Health check API routes.

Reports whether the catalog file can be read and whether the gold price
oracle has credentials. Does not call the upstream price API.
"""

from fastapi import APIRouter, status

from ringcatalog.catalog.loader import load_catalog
from ringcatalog.config import get_config
from ringcatalog.errors import CatalogUnreadable

router = APIRouter(prefix="/api/health", tags=["Health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Check application health."""
    config = get_config()
    catalog_status = {"path": str(config.catalog.path), "readable": True}

    try:
        result = load_catalog(config.catalog.path)
        catalog_status["products"] = len(result.entries)
        catalog_status["rejected"] = len(result.rejected)
    except CatalogUnreadable as e:
        catalog_status["readable"] = False
        catalog_status["detail"] = e.reason

    return {
        "status": "ok",
        "service": "ringcatalog",
        "catalog": catalog_status,
        "oracle": {"api_key_configured": bool(config.oracle.api_key)},
    }
