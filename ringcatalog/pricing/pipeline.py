"""Pricing pipeline: static catalog + gold price -> priced, filtered ring list.

Failure policies:
- Catalog (fail-open): an unreadable catalog is logged and priced as empty.
- Oracle (fail-closed): no gold price means no result at all.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from ringcatalog.catalog.loader import CatalogLoadResult, load_catalog
from ringcatalog.errors import CatalogUnreadable, OracleUnavailable
from ringcatalog.models import FilterCriteria, PricingResult
from ringcatalog.pricing.calculator import price_entry, round_half_away
from ringcatalog.pricing.filters import apply_filters
from ringcatalog.pricing.oracle import PriceOracle

logger = logging.getLogger(__name__)


def utc_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class PricingPipeline:
    """Prices every catalog entry against one gold price snapshot.

    Stateless between calls: the catalog is re-read and the oracle consulted
    on every compute().
    """

    def __init__(self, oracle: PriceOracle, catalog_path: str | Path):
        self.oracle = oracle
        self.catalog_path = Path(catalog_path)

    def _load_catalog_fail_open(self) -> CatalogLoadResult:
        try:
            return load_catalog(self.catalog_path)
        except CatalogUnreadable as e:
            logger.error(f"Error reading products file: {e}")
            return CatalogLoadResult(source=str(self.catalog_path))

    async def _fetch_price_fail_closed(self) -> float:
        try:
            return await self.oracle.fetch_price_per_gram()
        except OracleUnavailable:
            logger.error("Pricing aborted: gold price unavailable")
            raise

    async def compute(self, filters: FilterCriteria | None = None) -> PricingResult:
        """Price the catalog and apply optional range filters.

        Args:
            filters: Inclusive price/popularity bounds; None returns everything

        Returns:
            PricingResult with priced entries, gold price and timestamp

        Raises:
            OracleUnavailable: If the gold price cannot be fetched
        """
        catalog = self._load_catalog_fail_open()
        gold_price = await self._fetch_price_fail_closed()

        priced = [price_entry(entry, gold_price) for entry in catalog.entries]
        items = apply_filters(priced, filters)

        logger.info(
            f"Priced {len(priced)} products at ${gold_price:.2f}/gram, "
            f"{len(items)} after filters"
        )
        return PricingResult(
            items=items,
            gold_price=round_half_away(gold_price, 2),
            timestamp=utc_timestamp(),
            rejected=len(catalog.rejected),
        )
