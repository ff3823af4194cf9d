# tradetracker/services/daily_flow.py
"""
Daily flow aggregator.

Buckets trades of a half-open range [start, end) by UTC calendar day and
sums the BUY and SELL amounts of each day. net = total_sell - total_buy,
so a positive net means more money came in than went out that day.

Only days that had trades appear, in ascending order.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal

from tradetracker.models import TradeType
from tradetracker.services.constants import ZERO
from tradetracker.services.exceptions import ValidationError
from tradetracker.services.types import DailyFlow, TradeLike
from tradetracker.utils.date_utils import to_utc
from tradetracker.utils.money import to_currency


def validate_range(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    """
    Normalize both bounds to UTC and check start <= end.

    Raises:
        ValidationError: If start is after end
    """
    start_utc, end_utc = to_utc(start), to_utc(end)
    if start_utc > end_utc:
        raise ValidationError(
            f"start ({start_utc.isoformat()}) must not be after end ({end_utc.isoformat()})",
            field="start",
        )
    return start_utc, end_utc


def aggregate_daily_flows(
        trades: Iterable[TradeLike],
        start: datetime,
        end: datetime,
) -> list[DailyFlow]:
    """
    Per-day buy/sell totals for trades with start <= created_at < end.

    Raises:
        ValidationError: If start is after end
    """
    start_utc, end_utc = validate_range(start, end)

    buys: dict[date, Decimal] = defaultdict(lambda: ZERO)
    sells: dict[date, Decimal] = defaultdict(lambda: ZERO)

    for trade in trades:
        if trade.created_at is None:
            continue
        moment = to_utc(trade.created_at)
        if not (start_utc <= moment < end_utc):
            continue
        amount = Decimal(trade.unit_price) * trade.quantity
        if trade.trade_type == TradeType.BUY:
            buys[moment.date()] += amount
        else:
            sells[moment.date()] += amount

    flows = []
    for day in sorted(buys.keys() | sells.keys()):
        total_buy = to_currency(buys[day])
        total_sell = to_currency(sells[day])
        flows.append(DailyFlow(day=day, total_buy=total_buy, total_sell=total_sell, net=total_sell - total_buy))
    return flows
