# tests/services/test_item_import.py
"""
Unit tests for the import document parser and file checks.
"""

import json

import pytest

from tradetracker.services.exceptions import FormatError, ValidationError
from tradetracker.services.item_import import (
    check_import_filename,
    check_import_size,
    parse_import_document,
)

REDLINE = "AK-47 | Redline (Field-Tested)"
ASIIMOV = "AWP | Asiimov (Field-Tested)"


def document(**overrides) -> str:
    entries = {
        REDLINE: {"en_name": REDLINE, "cn_name": "AK-47 | 红线 (久经沙场)", "name_id": 1001},
        ASIIMOV: {"en_name": ASIIMOV, "cn_name": "AWP | 二西莫夫 (久经沙场)", "name_id": 2002},
    }
    entries.update(overrides)
    return json.dumps(entries, ensure_ascii=False)


class TestParseImportDocument:
    """Tests for document validation."""

    def test_parses_entries_in_order(self):
        """Keys become market hash names; order is preserved."""
        entries = parse_import_document(document())

        assert [e.market_hash_name for e in entries] == [REDLINE, ASIIMOV]
        assert entries[0].name_id == 1001
        assert entries[0].cn_name == "AK-47 | 红线 (久经沙场)"

    def test_accepts_utf8_bytes_with_bom(self):
        """Uploaded bytes may carry a UTF-8 BOM."""
        content = "\ufeff".encode("utf-8") + document().encode("utf-8")
        assert len(parse_import_document(content)) == 2

    def test_empty_object(self):
        """An empty object is a valid, empty document."""
        assert parse_import_document("{}") == []

    def test_invalid_json(self):
        """Syntax errors are FormatError."""
        with pytest.raises(FormatError) as exc_info:
            parse_import_document('{"a": ')
        assert "Invalid JSON" in str(exc_info.value)

    def test_top_level_array_rejected(self):
        """The document must be an object keyed by market hash name."""
        with pytest.raises(FormatError):
            parse_import_document("[]")

    def test_missing_field(self):
        """Every entry needs en_name, cn_name and name_id."""
        with pytest.raises(FormatError) as exc_info:
            parse_import_document(document(**{"Broken": {"en_name": "x", "cn_name": "y"}}))
        assert exc_info.value.key == "Broken"
        assert "name_id" in str(exc_info.value)

    @pytest.mark.parametrize("name_id", ["1001", 10.5, True, None])
    def test_non_integer_name_id(self, name_id):
        """name_id must be a JSON integer."""
        with pytest.raises(FormatError):
            parse_import_document(document(**{"Broken": {"en_name": "x", "cn_name": "y", "name_id": name_id}}))

    def test_entry_not_an_object(self):
        """An entry value must itself be an object."""
        with pytest.raises(FormatError):
            parse_import_document(document(**{"Broken": "AK-47"}))

    def test_non_string_name(self):
        """Display names must be strings."""
        with pytest.raises(FormatError):
            parse_import_document(document(**{"Broken": {"en_name": 5, "cn_name": "y", "name_id": 1}}))

    def test_invalid_utf8(self):
        """Undecodable bytes are FormatError, not a crash."""
        with pytest.raises(FormatError):
            parse_import_document(b"\xff\xfe{}")


class TestImportFileChecks:
    """Tests for filename and size checks."""

    def test_json_extension_accepted(self):
        """Extension matching is case-insensitive."""
        check_import_filename("items.JSON")

    @pytest.mark.parametrize("filename", ["items.csv", "items.json.txt", "", None])
    def test_other_extensions_rejected(self, filename):
        """Only .json is accepted."""
        with pytest.raises(ValidationError) as exc_info:
            check_import_filename(filename)
        assert exc_info.value.field == "file"

    def test_size_within_limit(self):
        """Exactly at the limit is fine."""
        check_import_size(50 * 1024 * 1024, 50 * 1024 * 1024)

    def test_size_over_limit(self):
        """The message names the actual and allowed size."""
        with pytest.raises(ValidationError) as exc_info:
            check_import_size(51 * 1024 * 1024, 50 * 1024 * 1024)
        assert str(exc_info.value) == "File too large: 51.0MB exceeds maximum of 50MB"
