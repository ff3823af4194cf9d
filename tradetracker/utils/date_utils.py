# tradetracker/utils/date_utils.py
"""
Datetime helpers shared by the aggregators and the trade queries.

All instants are compared in UTC. SQLite returns naive datetimes for
DateTime(timezone=True) columns; those values were written as UTC.

Usage:
    from tradetracker.utils.date_utils import to_utc, inclusive_day_span

    to_utc(datetime(2024, 1, 1, 12))  # 2024-01-01 12:00:00+00:00
"""

from datetime import datetime, timezone


def to_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def inclusive_day_span(first: datetime, last: datetime) -> int:
    """
    Number of UTC calendar days from first to last, both ends counted.

    Example:
        >>> inclusive_day_span(datetime(2024, 1, 1, 23), datetime(2024, 1, 2, 1))
        2
    """
    return (to_utc(last).date() - to_utc(first).date()).days + 1
