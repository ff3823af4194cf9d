# tradetracker/services/pool.py
"""
Investment pool valuation calculator.

Rolls the full trade history and the current positions up into one
PoolSummary. Two valuation modes:

- COST_BASIS (no manual value): currentHoldingValue = sum(WAC x quantity)
- MANUAL: currentHoldingValue = the caller's manual value, taken as the
  liquidation value of the whole held portfolio (not per item)

Principal is measured with the high-water-mark convention: peakNetInvestment
is the maximum of cumulative(buys) - cumulative(sells) over the history, so
proceeds of a sale that are reinvested do not count as new principal.

The calculator is pure. It never mutates its inputs and never reads the
clock, so identical inputs yield identical summaries.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from tradetracker.models import TradeType
from tradetracker.services.constants import RATE_PRECISION, ZERO
from tradetracker.services.exceptions import ValidationError
from tradetracker.services.ledger import replay
from tradetracker.services.types import (
    PoolSummary,
    PositionLike,
    TradeLike,
    ValuationMode,
)
from tradetracker.utils.date_utils import inclusive_day_span, to_utc
from tradetracker.utils.money import to_currency

logger = logging.getLogger(__name__)


def _empty_summary(mode: ValuationMode) -> PoolSummary:
    zero = to_currency(ZERO)
    return PoolSummary(
        total_buy_trades=0,
        total_sell_trades=0,
        peak_net_investment=zero,
        current_holding_value=zero,
        current_cost_basis=zero,
        total_withdrawal=zero,
        realized_profit=zero,
        unrealized_profit=zero,
        total_profit=zero,
        real_return_rate=ZERO.quantize(RATE_PRECISION),
        first_investment_date=None,
        last_trade_date=None,
        total_investment_days=0,
        total_items=0,
        current_holding_items=0,
        valuation_mode=mode,
    )


def peak_net_investment(trades: Iterable[TradeLike]) -> Decimal:
    """
    High-water mark of cumulative buys minus cumulative sells.

    Never negative: an empty history (or one that only ever took money
    out) has a peak of zero.
    """
    running = ZERO
    peak = ZERO
    for trade in trades:
        amount = Decimal(trade.unit_price) * trade.quantity
        if trade.trade_type == TradeType.BUY:
            running += amount
            peak = max(peak, running)
        else:
            running -= amount
    return peak


def calculate_pool_summary(
        trades: Sequence[TradeLike],
        positions: Iterable[PositionLike],
        manual_value: Decimal | None = None,
) -> PoolSummary:
    """
    Build the pool summary.

    Args:
        trades: Every trade, in creation order
        positions: Current inventory positions
        manual_value: Optional whole-portfolio market value (>= 0)

    Returns:
        PoolSummary with 2 dp money fields and a 4 dp return rate

    Raises:
        ValidationError: If manual_value is negative
        InsufficientInventoryError: If the stored history contains an oversell
    """
    if manual_value is not None and (not manual_value.is_finite() or manual_value < ZERO):
        raise ValidationError("manualValue must be a non-negative amount", field="manualValue")

    mode = ValuationMode.COST_BASIS if manual_value is None else ValuationMode.MANUAL

    if not trades:
        return _empty_summary(mode)

    buy_count = 0
    sell_count = 0
    withdrawal = ZERO
    by_item: dict[int, list[TradeLike]] = defaultdict(list)
    timestamps: list[datetime] = []

    for trade in trades:
        by_item[trade.name_id].append(trade)
        if trade.created_at is not None:
            timestamps.append(to_utc(trade.created_at))
        if trade.trade_type == TradeType.BUY:
            buy_count += 1
        else:
            sell_count += 1
            withdrawal += Decimal(trade.unit_price) * trade.quantity

    realized = ZERO
    for name_id in sorted(by_item):
        realized += replay(by_item[name_id], name_id=name_id).realized_profit

    cost_basis = ZERO
    holding_items = 0
    for position in positions:
        cost_basis += Decimal(position.weighted_average_cost) * position.current_quantity
        if position.current_quantity > 0:
            holding_items += 1

    peak = to_currency(peak_net_investment(trades))
    cost_basis = to_currency(cost_basis)
    holding_value = cost_basis if manual_value is None else to_currency(manual_value)
    realized = to_currency(realized)
    unrealized = holding_value - cost_basis
    total_profit = realized + unrealized

    if peak > ZERO:
        rate = (total_profit / peak).quantize(RATE_PRECISION, rounding=ROUND_HALF_UP)
    else:
        rate = ZERO.quantize(RATE_PRECISION)

    first = min(timestamps) if timestamps else None
    last = max(timestamps) if timestamps else None
    days = inclusive_day_span(first, last) if first is not None else 0

    summary = PoolSummary(
        total_buy_trades=buy_count,
        total_sell_trades=sell_count,
        peak_net_investment=peak,
        current_holding_value=holding_value,
        current_cost_basis=cost_basis,
        total_withdrawal=to_currency(withdrawal),
        realized_profit=realized,
        unrealized_profit=unrealized,
        total_profit=total_profit,
        real_return_rate=rate,
        first_investment_date=first,
        last_trade_date=last,
        total_investment_days=days,
        total_items=len(by_item),
        current_holding_items=holding_items,
        valuation_mode=mode,
    )

    logger.debug(
        f"Pool summary ({mode.value}): peak={peak}, holding={holding_value}, "
        f"realized={realized}, rate={rate}"
    )
    return summary
