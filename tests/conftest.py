"""Pytest configuration and fixtures for RingCatalog tests.

Provides common fixtures for testing.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from ringcatalog.config import reset_config
from ringcatalog.errors import OracleUnavailable
from ringcatalog.models import CatalogEntry
from ringcatalog.pricing.oracle import PriceOracle


@pytest.fixture
def ring_images() -> dict:
    """Image URLs for the three gold colours."""
    return {
        "yellow": "https://cdn.example.com/ring-a-yellow.jpg",
        "white": "https://cdn.example.com/ring-a-white.jpg",
        "rose": "https://cdn.example.com/ring-a-rose.jpg",
    }


@pytest.fixture
def ring_a_record(ring_images: dict) -> dict:
    """Raw catalog record: popularity 0.6, 2.0 g."""
    return {
        "name": "Ring A",
        "popularityScore": 0.6,
        "weight": 2.0,
        "images": ring_images,
    }


@pytest.fixture
def ring_a(ring_a_record: dict) -> CatalogEntry:
    return CatalogEntry.model_validate(ring_a_record)


@pytest.fixture
def catalog_records(ring_a_record: dict, ring_images: dict) -> list[dict]:
    """Three-ring catalog spanning low, mid and high popularity."""
    return [
        ring_a_record,
        {"name": "Ring B", "popularityScore": 0.2, "weight": 1.5, "images": ring_images},
        {"name": "Ring C", "popularityScore": 0.9, "weight": 3.0, "images": ring_images},
    ]


@pytest.fixture
def write_catalog(tmp_path: Path):
    """Factory writing records (or raw text) to a catalog file."""

    def _write(content, name: str = "products.json") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def catalog_file(write_catalog, catalog_records: list[dict]) -> Path:
    return write_catalog(catalog_records)


@pytest.fixture
def mock_oracle() -> AsyncMock:
    """PriceOracle stub quoting 60.00 USD/gram."""
    oracle = AsyncMock(spec=PriceOracle)
    oracle.fetch_price_per_gram.return_value = 60.0
    return oracle


@pytest.fixture
def failing_oracle() -> AsyncMock:
    """PriceOracle stub whose lookups always fail."""
    oracle = AsyncMock(spec=PriceOracle)
    oracle.fetch_price_per_gram.side_effect = OracleUnavailable()
    return oracle


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate every test from the developer's environment and the config singleton."""
    for var in (
        "METALPRICE_API_KEY",
        "METALPRICE_BASE_URL",
        "ORACLE_TIMEOUT_SECONDS",
        "ORACLE_CACHE_TTL_SECONDS",
        "ORACLE_USER_AGENT",
        "CATALOG_PATH",
        "CORS_ORIGINS",
        "LOG_LEVEL",
        "JSON_LOGS",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()
