"""Startup validation for RingCatalog.

Fails fast on configuration that can never work (non-positive timeouts,
negative cache windows). Conditions the running service already tolerates
(missing API key, unreadable catalog) are reported as warnings only, since the
catalog is fail-open and the oracle reports its own unavailability per request.
"""

from __future__ import annotations

import logging

from ringcatalog.catalog.loader import CatalogLoadResult, load_catalog
from ringcatalog.config import AppConfig, get_config
from ringcatalog.errors import CatalogUnreadable, StartupValidationError

logger = logging.getLogger(__name__)


def validate_oracle_config(config: AppConfig) -> None:
    """Validate gold price oracle settings.

    Raises:
        StartupValidationError: If timeout or cache window is unusable
    """
    oracle = config.oracle
    if oracle.timeout_seconds <= 0:
        raise StartupValidationError(
            f"ORACLE_TIMEOUT_SECONDS must be positive, got {oracle.timeout_seconds}"
        )
    if oracle.cache_ttl_seconds < 0:
        raise StartupValidationError(
            f"ORACLE_CACHE_TTL_SECONDS must be >= 0, got {oracle.cache_ttl_seconds}"
        )
    if not oracle.base_url.startswith(("http://", "https://")):
        raise StartupValidationError(
            f"METALPRICE_BASE_URL must be an http(s) URL, got {oracle.base_url!r}"
        )

    if not oracle.api_key:
        logger.warning(
            "⚠ METALPRICE_API_KEY not set: every product request will report the "
            "gold price as unavailable"
        )
    else:
        logger.info(
            f"✓ Gold price oracle configured (timeout {oracle.timeout_seconds}s, "
            f"cache {oracle.cache_ttl_seconds}s)"
        )


def validate_catalog_source(config: AppConfig) -> CatalogLoadResult | None:
    """Check the catalog can be read; warn about skipped records.

    Returns:
        The load result, or None if the catalog is currently unreadable
    """
    try:
        result = load_catalog(config.catalog.path)
    except CatalogUnreadable as e:
        logger.warning(f"⚠ {e}. Product listings will be empty until it is fixed.")
        return None

    if result.rejected:
        logger.warning(
            f"⚠ {len(result.rejected)} of {result.total_records} catalog records "
            "are malformed and will be skipped"
        )
    logger.info(f"✓ Catalog OK ({len(result.entries)} products from {result.source})")
    return result


def run_startup_validation(config: AppConfig | None = None) -> None:
    """Run all startup checks.

    Raises:
        StartupValidationError: If configuration is unusable
    """
    config = config or get_config()
    logger.info("Running startup validation...")

    validate_oracle_config(config)
    validate_catalog_source(config)

    logger.info("✓ Startup validation complete")
