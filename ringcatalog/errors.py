"""Exception taxonomy for RingCatalog.

Two failure policies coexist in the pricing pipeline:
- CatalogUnreadable is recovered locally (the catalog degrades to empty).
- OracleUnavailable aborts the whole pricing call.
"""

from __future__ import annotations

ORACLE_UNAVAILABLE_MESSAGE = "Unable to fetch current gold price. Please try again later."


class RingCatalogError(Exception):
    """Base class for all RingCatalog exceptions."""


class CatalogUnreadable(RingCatalogError):
    """Raised when the catalog source cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Catalog {path} unreadable: {reason}")


class PipelineError(RingCatalogError):
    """Raised when a pricing pipeline call cannot produce a result."""


class OracleUnavailable(PipelineError):
    """Raised when the gold price cannot be fetched.

    The message is always the same public text; transport details stay in the logs.
    """

    def __init__(self, message: str = ORACLE_UNAVAILABLE_MESSAGE):
        super().__init__(message)


class InvalidFilterValue(RingCatalogError):
    """Raised when a filter bound is not a finite number."""

    def __init__(self, field_name: str, value: object):
        self.field_name = field_name
        self.value = value
        super().__init__(f"Invalid value for {field_name}: {value!r} is not a finite number")


class StartupValidationError(RingCatalogError):
    """Raised when startup validation fails."""
