"""MetalpriceAPI client for the gold spot price.

API documentation: https://metalpriceapi.com/documentation
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

import httpx

from ringcatalog.errors import OracleUnavailable

logger = logging.getLogger(__name__)

# httpx logs full request URLs at INFO, and the API key travels as a query parameter
logging.getLogger("httpx").setLevel(logging.WARNING)

# USDXAU is the USD price of one troy ounce of gold
GOLD_RATE_KEY = "USDXAU"


class MetalPriceClient:
    """Async client for the MetalpriceAPI ``/latest`` endpoint.

    Every failure mode (missing key, timeout, transport error, non-2xx status,
    unexpected payload) surfaces as OracleUnavailable with the public message.
    Details are logged without the API key or request URL.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.metalpriceapi.com/v1",
        timeout: float = 8.0,
        user_agent: str = "EngagementRings-PriceCalculator/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            transport=transport,
        )

    async def fetch_usd_per_ounce(self) -> float:
        """Fetch the latest gold price in USD per troy ounce.

        Raises:
            OracleUnavailable: On any failure to obtain a usable price
        """
        if not self.api_key:
            logger.error("Gold price lookup skipped: METALPRICE_API_KEY is not configured")
            raise OracleUnavailable()

        logger.info("Fetching real-time gold price from MetalpriceAPI...")
        try:
            # httpx timeouts bound each read, not the whole response
            data = await asyncio.wait_for(self._request_latest(), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.error(f"MetalpriceAPI response not complete within {self.timeout}s")
            raise OracleUnavailable() from exc
        except httpx.TimeoutException as exc:
            logger.error(f"MetalpriceAPI request timed out ({type(exc).__name__})")
            raise OracleUnavailable() from exc
        except httpx.HTTPStatusError as exc:
            logger.error(f"MetalpriceAPI returned HTTP {exc.response.status_code}")
            raise OracleUnavailable() from exc
        except httpx.RequestError as exc:
            logger.error(f"MetalpriceAPI request failed ({type(exc).__name__})")
            raise OracleUnavailable() from exc
        except ValueError as exc:
            logger.error("MetalpriceAPI returned a body that is not valid JSON")
            raise OracleUnavailable() from exc

        price = self._extract_ounce_price(data)
        if price is None:
            logger.error("Invalid API response format from MetalpriceAPI")
            raise OracleUnavailable()
        return price

    async def _request_latest(self) -> Any:
        response = await self.client.get(
            "/latest",
            params={"api_key": self.api_key, "base": "USD", "currencies": "XAU"},
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _extract_ounce_price(data: Any) -> float | None:
        if not isinstance(data, dict) or not data.get("success"):
            return None
        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None
        rate = rates.get(GOLD_RATE_KEY)
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            return None
        if not math.isfinite(rate) or rate <= 0:
            return None
        return float(rate)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> MetalPriceClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
