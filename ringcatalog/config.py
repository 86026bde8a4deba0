"""RingCatalog configuration management.

Loads configuration from environment variables with sensible defaults.
Prices are always quoted in USD; weights are grams.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "products.json"


@dataclass
class OracleConfig:
    """Gold price oracle (MetalpriceAPI) settings."""

    api_key: str | None = None
    base_url: str = "https://api.metalpriceapi.com/v1"
    timeout_seconds: float = 8.0
    user_agent: str = "EngagementRings-PriceCalculator/1.0"

    # Freshness window for the per-oracle price cache (0 disables caching)
    cache_ttl_seconds: float = 60.0


@dataclass
class CatalogConfig:
    """Static catalog source."""

    path: Path = DEFAULT_CATALOG_PATH


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    json_logs: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    oracle: OracleConfig = field(default_factory=OracleConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - METALPRICE_API_KEY: MetalpriceAPI key (price lookups fail without it)
        - METALPRICE_BASE_URL: API base URL
        - ORACLE_TIMEOUT_SECONDS: Upstream request timeout (default: 8)
        - ORACLE_CACHE_TTL_SECONDS: Price cache freshness window (default: 60)
        - CATALOG_PATH: Catalog JSON file (default: bundled products.json)
        - CORS_ORIGINS: Comma-separated allowed origins (default: "*")
        - LOG_LEVEL / JSON_LOGS: Logging verbosity and renderer

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        cors = os.getenv("CORS_ORIGINS", "*")

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=os.getenv("JSON_LOGS", "false").lower() == "true",
            cors_origins=[origin.strip() for origin in cors.split(",") if origin.strip()],
            oracle=OracleConfig(
                api_key=os.getenv("METALPRICE_API_KEY") or None,
                base_url=os.getenv(
                    "METALPRICE_BASE_URL", "https://api.metalpriceapi.com/v1"
                ).rstrip("/"),
                timeout_seconds=float(os.getenv("ORACLE_TIMEOUT_SECONDS", "8.0")),
                user_agent=os.getenv(
                    "ORACLE_USER_AGENT", "EngagementRings-PriceCalculator/1.0"
                ),
                cache_ttl_seconds=float(os.getenv("ORACLE_CACHE_TTL_SECONDS", "60")),
            ),
            catalog=CatalogConfig(
                path=Path(os.getenv("CATALOG_PATH", str(DEFAULT_CATALOG_PATH))),
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config
    _config = None
