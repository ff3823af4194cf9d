# tradetracker/utils/__init__.py
"""
Cross-cutting utilities:
- logging: Logging configuration with correlation ID support
- context: Request-scoped correlation ID storage
- sql: LIKE pattern escaping for item search
- money: Decimal rounding, formatting and parsing
- date_utils: UTC normalization

The logging module reads application settings, so it is imported from
its own module rather than re-exported here; the API client uses the
other helpers without a server configuration.

Usage:
    from tradetracker.utils.logging import setup_logging
    from tradetracker.utils import get_correlation_id, set_correlation_id
    from tradetracker.utils.money import to_price, format_money
"""

from tradetracker.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
)
from tradetracker.utils.sql import escape_like_pattern

__all__ = [
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    # SQL
    "escape_like_pattern",
]
