"""Tests for ringcatalog.web.dependencies."""

from unittest.mock import AsyncMock

import pytest

from ringcatalog.pricing.oracle import PriceOracle
from ringcatalog.pricing.pipeline import PricingPipeline
from ringcatalog.web import dependencies


@pytest.fixture(autouse=True)
def reset_oracle(monkeypatch):
    monkeypatch.setattr(dependencies, "_oracle", None)


def test_get_oracle_is_singleton():
    oracle = dependencies.get_oracle()

    assert isinstance(oracle, PriceOracle)
    assert dependencies.get_oracle() is oracle


def test_get_pipeline_uses_configured_catalog(monkeypatch, catalog_file):
    monkeypatch.setenv("CATALOG_PATH", str(catalog_file))

    pipeline = dependencies.get_pipeline()

    assert isinstance(pipeline, PricingPipeline)
    assert pipeline.catalog_path == catalog_file
    assert pipeline.oracle is dependencies.get_oracle()


@pytest.mark.asyncio
async def test_close_oracle_releases_singleton(monkeypatch):
    oracle = AsyncMock(spec=PriceOracle)
    monkeypatch.setattr(dependencies, "_oracle", oracle)

    await dependencies.close_oracle()

    oracle.close.assert_awaited_once()
    assert dependencies._oracle is None


@pytest.mark.asyncio
async def test_close_oracle_without_oracle_is_noop():
    await dependencies.close_oracle()

    assert dependencies._oracle is None
