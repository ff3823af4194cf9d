# tradetracker/utils/sql.py
"""
SQL utility functions.

- escape_like_pattern: Escape special characters in LIKE patterns
- contains_pattern: Build an escaped "%keyword%" pattern for ILIKE search

Usage:
    from tradetracker.utils.sql import contains_pattern

    query = select(Item).where(Item.en_name.ilike(contains_pattern(keyword), escape="\\"))
"""

LIKE_ESCAPE_CHAR = "\\"


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in a SQL LIKE pattern.

    % and _ are wildcards and the backslash is the escape character;
    a keyword such as "100%" must match literally.

    Example:
        >>> escape_like_pattern("test%value")
        'test\\\\%value'
        >>> escape_like_pattern("AK_47")
        'AK\\\\_47'
    """
    # Backslash first, it is the escape character
    return (
        value
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def contains_pattern(keyword: str) -> str:
    """Substring pattern with the keyword's wildcards escaped."""
    return f"%{escape_like_pattern(keyword)}%"
