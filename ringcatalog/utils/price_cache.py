"""In-process TTL cache for the gold price snapshot."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ringcatalog.models import PriceSnapshot

logger = logging.getLogger(__name__)


class PriceCache:
    """Holds at most one PriceSnapshot for a bounded freshness window.

    A ttl of 0 disables caching: get() always misses and set() is a no-op.

    Example:
        >>> cache = PriceCache(ttl_seconds=60)
        >>> cache.set(PriceSnapshot(price_per_gram=60.0))
        >>> cache.get().price_per_gram
        60.0
    """

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic):
        """Initialize price cache.

        Args:
            ttl_seconds: How long a stored snapshot stays fresh
            clock: Monotonic time source (injectable for tests)
        """
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be non-negative")
        self.ttl = ttl_seconds
        self._clock = clock
        self._snapshot: PriceSnapshot | None = None
        self._stored_at: float = 0.0

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def get(self) -> PriceSnapshot | None:
        """Return the stored snapshot if still fresh, else None."""
        if not self.enabled or self._snapshot is None:
            return None

        age = self._clock() - self._stored_at
        if age >= self.ttl:
            logger.debug(f"Gold price cache expired ({age:.1f}s old)")
            self._snapshot = None
            return None
        return self._snapshot

    def set(self, snapshot: PriceSnapshot) -> None:
        if not self.enabled:
            return
        self._snapshot = snapshot
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._snapshot = None
        self._stored_at = 0.0
