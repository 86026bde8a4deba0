"""Static ring catalog source.

Reads the catalog JSON file and validates each record.
"""

from ringcatalog.catalog.loader import (
    CatalogLoadResult,
    RejectedRecord,
    load_catalog,
    validate_records,
)

__all__ = ["CatalogLoadResult", "RejectedRecord", "load_catalog", "validate_records"]
