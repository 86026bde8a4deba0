"""Gold price oracle: USD per gram, optionally cached for a short window."""

from __future__ import annotations

import asyncio
import logging

import httpx

from ringcatalog.config import OracleConfig
from ringcatalog.integration.metalprice_client import MetalPriceClient
from ringcatalog.models import PriceSnapshot
from ringcatalog.pricing.calculator import TROY_OUNCE_GRAMS, ounce_to_gram_price
from ringcatalog.utils.price_cache import PriceCache

logger = logging.getLogger(__name__)


class PriceOracle:
    """Spot price source for the pricing pipeline.

    Each call performs a fresh upstream lookup unless the owned cache holds a
    snapshot younger than its TTL. Concurrent callers that miss the cache wait
    on one shared upstream request instead of issuing their own.

    Example:
        >>> oracle = PriceOracle.from_config(get_config().oracle)
        >>> price = await oracle.fetch_price_per_gram()
    """

    def __init__(self, client: MetalPriceClient, cache: PriceCache | None = None):
        self.client = client
        self.cache = cache or PriceCache(ttl_seconds=0)
        self._refresh_lock = asyncio.Lock()

    @classmethod
    def from_config(
        cls, config: OracleConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> PriceOracle:
        client = MetalPriceClient(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
            transport=transport,
        )
        return cls(client, PriceCache(ttl_seconds=config.cache_ttl_seconds))

    async def fetch_snapshot(self) -> PriceSnapshot:
        """Return the current gold price snapshot.

        Raises:
            OracleUnavailable: If the upstream price cannot be obtained
        """
        if not self.cache.enabled:
            return await self._fetch_fresh()

        cached = self.cache.get()
        if cached is not None:
            return cached

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited
            cached = self.cache.get()
            if cached is not None:
                return cached
            snapshot = await self._fetch_fresh()
            self.cache.set(snapshot)
            return snapshot

    async def fetch_price_per_gram(self) -> float:
        snapshot = await self.fetch_snapshot()
        return snapshot.price_per_gram

    async def _fetch_fresh(self) -> PriceSnapshot:
        price_per_ounce = await self.client.fetch_usd_per_ounce()
        price_per_gram = ounce_to_gram_price(price_per_ounce)

        logger.info(
            f"Current gold price: ${price_per_ounce:.2f}/oz = "
            f"${price_per_gram:.2f}/gram ({TROY_OUNCE_GRAMS} g/oz)"
        )
        return PriceSnapshot(price_per_gram=price_per_gram)

    async def close(self) -> None:
        self.cache.clear()
        await self.client.close()
