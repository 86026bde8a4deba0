"""Unit tests for PriceOracle: per-gram conversion and the owned TTL cache."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from ringcatalog.config import OracleConfig
from ringcatalog.errors import OracleUnavailable
from ringcatalog.integration.metalprice_client import MetalPriceClient
from ringcatalog.pricing.oracle import PriceOracle
from ringcatalog.utils.price_cache import PriceCache


def mock_client(*prices_or_errors) -> AsyncMock:
    client = AsyncMock(spec=MetalPriceClient)
    client.fetch_usd_per_ounce.side_effect = list(prices_or_errors)
    return client


class TestFetchPricePerGram:
    @pytest.mark.asyncio
    async def test_converts_ounce_to_gram(self):
        oracle = PriceOracle(mock_client(1866.21))

        assert await oracle.fetch_price_per_gram() == 60.0

    @pytest.mark.asyncio
    async def test_rounds_to_cents(self):
        oracle = PriceOracle(mock_client(2650.0))

        price = await oracle.fetch_price_per_gram()

        assert price == 85.2
        assert round(price, 2) == price

    @pytest.mark.asyncio
    async def test_failure_propagates(self):
        oracle = PriceOracle(mock_client(OracleUnavailable()))

        with pytest.raises(OracleUnavailable):
            await oracle.fetch_price_per_gram()

    @pytest.mark.asyncio
    async def test_logs_fetched_price(self, caplog):
        oracle = PriceOracle(mock_client(1866.21))

        with caplog.at_level("INFO"):
            await oracle.fetch_price_per_gram()

        assert "$1866.21/oz = $60.00/gram" in caplog.text


class TestCaching:
    """Tests for the oracle-owned freshness window."""

    @pytest.mark.asyncio
    async def test_no_cache_by_default_every_call_hits_upstream(self):
        client = mock_client(1866.21, 1897.32)
        oracle = PriceOracle(client)

        first = await oracle.fetch_price_per_gram()
        second = await oracle.fetch_price_per_gram()

        assert (first, second) == (60.0, 61.0)
        assert client.fetch_usd_per_ounce.await_count == 2

    @pytest.mark.asyncio
    async def test_cached_within_ttl(self):
        client = mock_client(1866.21, 1897.32)
        oracle = PriceOracle(client, PriceCache(ttl_seconds=60))

        assert await oracle.fetch_price_per_gram() == 60.0
        assert await oracle.fetch_price_per_gram() == 60.0
        assert client.fetch_usd_per_ounce.await_count == 1

    @pytest.mark.asyncio
    async def test_failure_not_cached(self):
        client = mock_client(OracleUnavailable(), 1866.21)
        oracle = PriceOracle(client, PriceCache(ttl_seconds=60))

        with pytest.raises(OracleUnavailable):
            await oracle.fetch_price_per_gram()
        assert await oracle.fetch_price_per_gram() == 60.0

    @pytest.mark.asyncio
    async def test_concurrent_cold_callers_share_one_request(self):
        calls = 0

        async def slow_fetch():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.05)
            return 1866.21

        client = AsyncMock(spec=MetalPriceClient)
        client.fetch_usd_per_ounce.side_effect = slow_fetch
        oracle = PriceOracle(client, PriceCache(ttl_seconds=60))

        prices = await asyncio.gather(*(oracle.fetch_price_per_gram() for _ in range(5)))

        assert prices == [60.0] * 5
        assert calls == 1


class TestFromConfig:
    @pytest.mark.asyncio
    async def test_builds_client_and_cache_from_config(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "rates": {"USDXAU": 1866.21}})

        config = OracleConfig(
            api_key="k",
            base_url="https://metals.test/v1",
            timeout_seconds=3.0,
            user_agent="RingTest/1.0",
            cache_ttl_seconds=30,
        )
        oracle = PriceOracle.from_config(config, transport=httpx.MockTransport(handler))

        assert await oracle.fetch_price_per_gram() == 60.0
        assert await oracle.fetch_price_per_gram() == 60.0
        await oracle.close()

        assert len(seen) == 1
        assert seen[0].headers["User-Agent"] == "RingTest/1.0"
        assert oracle.cache.ttl == 30
        assert oracle.client.client.timeout.read == 3.0


@pytest.mark.asyncio
async def test_close_drops_cached_price_and_closes_client():
    client = mock_client(1866.21, 1897.32)
    oracle = PriceOracle(client, PriceCache(ttl_seconds=60))
    await oracle.fetch_price_per_gram()

    await oracle.close()

    assert oracle.cache.get() is None
    client.close.assert_awaited_once()
