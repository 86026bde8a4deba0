"""Static ring catalog loader.

The catalog file is a JSON array of records. Each record is validated
against CatalogEntry; malformed records are skipped and reported rather
than passed downstream with missing fields.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ringcatalog.errors import CatalogUnreadable
from ringcatalog.models import CatalogEntry

logger = logging.getLogger(__name__)


@dataclass
class RejectedRecord:
    """Catalog record that failed validation."""

    index: int
    name: str | None
    reason: str


@dataclass
class CatalogLoadResult:
    """Entries accepted from one catalog read, plus the rejected records."""

    source: str
    entries: list[CatalogEntry] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)

    @property
    def total_records(self) -> int:
        return len(self.entries) + len(self.rejected)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "record"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def _read_records(path: Path) -> list[Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogUnreadable(str(path), e.strerror or str(e)) from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogUnreadable(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise CatalogUnreadable(
            str(path), f"expected a JSON array, got {type(data).__name__}"
        )
    return data


def validate_records(records: list[Any], source: str = "<memory>") -> CatalogLoadResult:
    """Validate raw catalog records, splitting them into entries and rejects."""
    result = CatalogLoadResult(source=source)

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            result.rejected.append(
                RejectedRecord(index, None, f"expected an object, got {type(record).__name__}")
            )
            continue
        try:
            result.entries.append(CatalogEntry.model_validate(record))
        except ValidationError as e:
            name = record.get("name")
            result.rejected.append(
                RejectedRecord(
                    index,
                    name if isinstance(name, str) else None,
                    _format_validation_error(e),
                )
            )

    for rejected in result.rejected:
        logger.warning(
            f"Skipping catalog record #{rejected.index} "
            f"({rejected.name or 'unnamed'}): {rejected.reason}"
        )

    return result


def load_catalog(path: str | Path) -> CatalogLoadResult:
    """Read and validate every record of the catalog file.

    Args:
        path: Catalog JSON file

    Returns:
        CatalogLoadResult with accepted entries and rejected records

    Raises:
        CatalogUnreadable: If the file is missing, unreadable, not JSON or not an array
    """
    catalog_path = Path(path)
    records = _read_records(catalog_path)
    result = validate_records(records, source=str(catalog_path))

    logger.debug(
        f"Loaded {len(result.entries)}/{result.total_records} catalog entries "
        f"from {catalog_path}"
    )
    return result
