# tests/utils/test_sql.py
"""
Tests for SQL utility functions.
"""

from tradetracker.utils.sql import contains_pattern, escape_like_pattern


class TestEscapeLikePattern:
    """Tests for escape_like_pattern function."""

    def test_escape_percent_wildcard(self):
        """Should escape % wildcard."""
        assert escape_like_pattern("100%") == "100\\%"

    def test_escape_underscore_wildcard(self):
        """Should escape _ wildcard."""
        assert escape_like_pattern("AK_47") == "AK\\_47"

    def test_escape_backslash(self):
        """Should escape backslash."""
        assert escape_like_pattern("a\\b") == "a\\\\b"

    def test_escape_order_matters(self):
        """Backslash is escaped before the wildcards, so no double escaping."""
        assert escape_like_pattern("\\%") == "\\\\\\%"

    def test_no_escape_needed(self):
        """Item names with only ordinary punctuation pass through."""
        assert escape_like_pattern("AWP | Asiimov (Field-Tested)") == "AWP | Asiimov (Field-Tested)"

    def test_empty_string(self):
        """Should handle empty string."""
        assert escape_like_pattern("") == ""


class TestContainsPattern:
    """Tests for contains_pattern."""

    def test_wraps_in_wildcards(self):
        """The keyword becomes a substring pattern."""
        assert contains_pattern("redline") == "%redline%"

    def test_inner_wildcards_escaped(self):
        """Only the outer % are wildcards."""
        assert contains_pattern("50%") == "%50\\%%"
