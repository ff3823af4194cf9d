# tradetracker/services/ledger.py
"""
Weighted-average-cost ledger.

Pure functions that move an inventory position through BUY and SELL trades:

    BUY  q @ p into (Q, C, T):  T' = T + q*p  (exact)
                                C' = T' / (Q + q)  rounded half-up to 4 dp
                                Q' = Q + q
    SELL q @ p from (Q, C, T):  Q' = Q - q, C unchanged
                                T' = T * Q' / Q  (10 dp)
                                realized = (p - C) * q

T is the running purchase cost of the units held. A BUY-only history
therefore ends at sum(q*p) / sum(q) whatever the order of its BUYs.
Interleaved SELLs change the quantity the next BUY blends into, so mixed
histories are order-dependent: replaying stored trades in creation order
reproduces the stored position exactly.

A SELL larger than the held quantity is rejected, never clamped.

Nothing here touches the database. TradeService persists the results.

Usage:
    step = apply_trade(PositionState(name_id=1), trade)
    result = replay(trades_in_creation_order, name_id=1)
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from tradetracker.models import TradeType
from tradetracker.services.constants import ZERO
from tradetracker.services.exceptions import InsufficientInventoryError, ValidationError
from tradetracker.services.types import (
    LedgerResult,
    LedgerStep,
    PositionState,
    SellPreview,
    TradeLike,
)
from tradetracker.utils.money import to_cost_total, to_price

logger = logging.getLogger(__name__)


def validate_trade_parameters(quantity: int, unit_price: Decimal) -> None:
    """
    Reject a nonpositive quantity or a negative (or non-finite) price.

    Raises:
        ValidationError: "invalid trade parameters"
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("invalid trade parameters", field="quantity")
    if not isinstance(unit_price, Decimal) or not unit_price.is_finite() or unit_price < ZERO:
        raise ValidationError("invalid trade parameters", field="unitPrice")


def _check_stock(position: PositionState, quantity: int) -> None:
    if quantity > position.current_quantity:
        raise InsufficientInventoryError(
            name_id=position.name_id,
            requested=quantity,
            available=position.current_quantity,
        )


def apply_trade(position: PositionState, trade: TradeLike) -> LedgerStep:
    """
    Apply one trade to a position.

    Args:
        position: Position before the trade
        trade: BUY or SELL with quantity > 0 and unit_price >= 0

    Returns:
        LedgerStep with the new position and the step's realized profit

    Raises:
        ValidationError: Invalid quantity or price
        InsufficientInventoryError: SELL quantity exceeds current quantity
    """
    unit_price = Decimal(trade.unit_price)
    validate_trade_parameters(trade.quantity, unit_price)

    held = position.current_quantity
    cost = position.weighted_average_cost

    if trade.trade_type == TradeType.BUY:
        new_quantity = held + trade.quantity
        new_total = to_cost_total(position.cost_total + trade.quantity * unit_price)
        return LedgerStep(
            position=PositionState(position.name_id, new_quantity, to_price(new_total / new_quantity), new_total),
            realized_profit=ZERO,
        )

    _check_stock(position, trade.quantity)
    remaining = held - trade.quantity
    remaining_total = to_cost_total(position.cost_total * remaining / held) if remaining else ZERO
    return LedgerStep(
        position=PositionState(position.name_id, remaining, cost, remaining_total),
        realized_profit=to_price((unit_price - cost) * trade.quantity),
    )


def replay(trades: Iterable[TradeLike], name_id: int) -> LedgerResult:
    """
    Left fold of apply_trade over an item's trades, starting from an empty position.

    The caller supplies the trades in creation order.

    Raises:
        InsufficientInventoryError: If the history contains an oversell
    """
    position = PositionState(name_id=name_id)
    realized = ZERO
    count = 0
    for trade in trades:
        step = apply_trade(position, trade)
        position = step.position
        realized += step.realized_profit
        count += 1

    logger.debug(
        f"Replayed {count} trades for item {name_id}: "
        f"quantity={position.current_quantity}, wac={position.weighted_average_cost}"
    )
    return LedgerResult(position=position, realized_profit=realized, trade_count=count)


def preview_sell(position: PositionState, unit_price: Decimal, quantity: int) -> SellPreview:
    """
    Profit a SELL would realize, computed with the same rule as apply_trade.

    Raises:
        ValidationError: Invalid quantity or price
        InsufficientInventoryError: quantity exceeds current quantity
    """
    validate_trade_parameters(quantity, unit_price)
    _check_stock(position, quantity)

    cost = position.weighted_average_cost
    proceeds = unit_price * quantity
    cost_basis = cost * quantity
    return SellPreview(
        name_id=position.name_id,
        unit_price=unit_price,
        quantity=quantity,
        weighted_average_cost=cost,
        proceeds=to_price(proceeds),
        cost_basis=to_price(cost_basis),
        profit=to_price(proceeds - cost_basis),
        remaining_quantity=position.current_quantity - quantity,
    )
