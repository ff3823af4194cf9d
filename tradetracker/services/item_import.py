# tradetracker/services/item_import.py
"""
Item catalog import adapter.

Parses the bulk import document, a JSON object keyed by market hash name:

    {
        "AK-47 | Redline (Field-Tested)": {
            "en_name": "AK-47 | Redline (Field-Tested)",
            "cn_name": "AK-47 | 红线 (久经沙场)",
            "name_id": 1001
        },
        ...
    }

The whole document is validated before anything is written: a payload that
is not JSON, not an object, or that has an entry with missing fields or a
non-integer name_id raises FormatError and the import is abandoned.

Deduplication against the database happens in ItemService.import_items.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from tradetracker.services.constants import (
    ALLOWED_IMPORT_EXTENSIONS,
    IMPORT_ENTRY_FIELDS,
    MAX_ITEM_NAME_LENGTH,
    MAX_MARKET_HASH_NAME_LENGTH,
)
from tradetracker.services.exceptions import FormatError, ValidationError


@dataclass(frozen=True)
class ImportEntry:
    """One validated catalog entry."""

    market_hash_name: str
    en_name: str
    cn_name: str
    name_id: int


@dataclass
class ImportResult:
    """
    Outcome of a bulk import.

    Attributes:
        total_items: Entries in the document
        imported_count: Entries written
        skipped_count: Entries skipped as duplicates
        skipped_items: Market hash names that were skipped
    """

    total_items: int = 0
    imported_count: int = 0
    skipped_count: int = 0
    skipped_items: list[str] = field(default_factory=list)


def check_import_filename(filename: str | None) -> None:
    """
    Only .json documents are accepted.

    Raises:
        ValidationError: For a missing name or another extension
    """
    if not filename or not filename.lower().endswith(ALLOWED_IMPORT_EXTENSIONS):
        raise ValidationError(
            f"Invalid file type: {filename!r}. Only .json files are accepted",
            field="file",
        )


def check_import_size(size_bytes: int, max_bytes: int) -> None:
    """
    Raises:
        ValidationError: If the document is larger than max_bytes
    """
    if size_bytes > max_bytes:
        raise ValidationError(
            f"File too large: {size_bytes / (1024 * 1024):.1f}MB exceeds maximum of "
            f"{max_bytes // (1024 * 1024)}MB",
            field="file",
        )


def _require_text(key: str, entry: dict[str, Any], name: str, max_length: int) -> str:
    value = entry.get(name)
    if not isinstance(value, str):
        raise FormatError(f"Entry '{key}': '{name}' must be a string", key=key)
    if len(value) > max_length:
        raise FormatError(f"Entry '{key}': '{name}' exceeds {max_length} characters", key=key)
    return value


def _parse_entry(key: str, entry: Any) -> ImportEntry:
    if not isinstance(entry, dict):
        raise FormatError(f"Entry '{key}' must be an object", key=key)

    missing = [name for name in IMPORT_ENTRY_FIELDS if name not in entry]
    if missing:
        raise FormatError(f"Entry '{key}' is missing fields: {', '.join(missing)}", key=key)

    if not key or len(key) > MAX_MARKET_HASH_NAME_LENGTH:
        raise FormatError(f"Invalid market hash name: {key[:40]!r}", key=key)

    name_id = entry["name_id"]
    # bool is an int subclass; "true" is not an id
    if isinstance(name_id, bool) or not isinstance(name_id, int):
        raise FormatError(f"Entry '{key}': 'name_id' must be an integer", key=key)

    return ImportEntry(
        market_hash_name=key,
        en_name=_require_text(key, entry, "en_name", MAX_ITEM_NAME_LENGTH),
        cn_name=_require_text(key, entry, "cn_name", MAX_ITEM_NAME_LENGTH),
        name_id=name_id,
    )


def parse_import_document(content: str | bytes) -> list[ImportEntry]:
    """
    Parse and validate a whole import document.

    Args:
        content: JSON text (bytes are decoded as UTF-8, BOM tolerated)

    Returns:
        Entries in document order

    Raises:
        FormatError: On any shape problem; nothing is partially returned
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise FormatError(f"Import file is not valid UTF-8: {e}")

    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})")

    if not isinstance(document, dict):
        raise FormatError("Import document must be a JSON object keyed by market hash name")

    return [_parse_entry(key, entry) for key, entry in document.items()]
