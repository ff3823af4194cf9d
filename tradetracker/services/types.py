# tradetracker/services/types.py
"""
Internal data types for the ledger, pool and daily flow calculators.

These dataclasses are NOT Pydantic schemas; the API representations live
in tradetracker/schemas/. The calculators accept anything shaped like a
trade or a position (ORM rows included), described by the protocols below.

Design Principles:
- Immutable value objects (frozen=True)
- Decimal for ALL money values (never float)
- Timestamps are timezone-aware UTC datetimes once normalized

Type Hierarchy:
    TradeLike / PositionLike  - Structural inputs (ORM rows or TradeFact/PositionState)
    TradeFact                 - In-memory trade value object
    PositionState             - Quantity + weighted-average cost of one item
    LedgerStep                - Result of applying one trade
    LedgerResult              - Result of replaying a trade history
    SellPreview               - What a SELL would realize, without mutating anything
    DailyFlow                 - One day's buy/sell totals
    PoolSummary               - Whole-portfolio rollup
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from tradetracker.models import TradeType
from tradetracker.services.constants import ZERO


class ValuationMode(str, enum.Enum):
    """How currentHoldingValue was obtained."""
    COST_BASIS = "COST_BASIS"
    MANUAL = "MANUAL"


# =============================================================================
# STRUCTURAL INPUTS
# =============================================================================

class TradeLike(Protocol):
    name_id: int
    trade_type: TradeType
    unit_price: Decimal
    quantity: int
    created_at: datetime | None


class PositionLike(Protocol):
    name_id: int
    current_quantity: int
    weighted_average_cost: Decimal


# =============================================================================
# LEDGER VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class TradeFact:
    """
    A trade that is not (or not yet) a database row.

    Used for previews, replays in tests, and by the API client.
    """

    name_id: int
    trade_type: TradeType
    unit_price: Decimal
    quantity: int
    created_at: datetime | None = None

    @property
    def total_amount(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PositionState:
    """
    Inventory position of one item.

    Attributes:
        name_id: Item key
        current_quantity: Units held (never negative)
        weighted_average_cost: Average unit cost at 4 dp; kept when
            the quantity drops to zero
        cost_total: Unrounded purchase cost of the units held. BUYs
            accumulate it exactly and the average is derived from it once
            per BUY, so the order of BUYs cannot change the average.
            Defaults to weighted_average_cost x current_quantity.
    """

    name_id: int
    current_quantity: int = 0
    weighted_average_cost: Decimal = ZERO
    cost_total: Decimal | None = None

    def __post_init__(self) -> None:
        if self.cost_total is None:
            object.__setattr__(self, "cost_total", self.weighted_average_cost * self.current_quantity)

    @property
    def total_investment_cost(self) -> Decimal:
        """WAC x quantity; exact because WAC has 4 dp and quantity is an integer."""
        return self.weighted_average_cost * self.current_quantity

    @classmethod
    def of(cls, position: PositionLike | None, name_id: int) -> PositionState:
        """Snapshot an ORM row or API response (None for a never-traded item)."""
        if position is None:
            return cls(name_id=name_id)
        cost_total = getattr(position, "cost_total", None)
        return cls(
            name_id=position.name_id,
            current_quantity=position.current_quantity,
            weighted_average_cost=Decimal(position.weighted_average_cost),
            cost_total=Decimal(cost_total) if cost_total is not None else None,
        )


@dataclass(frozen=True)
class LedgerStep:
    """
    Outcome of applying one trade to a position.

    Attributes:
        position: Position after the trade
        realized_profit: (sellPrice - WAC) x quantity for a SELL, zero for a BUY
    """

    position: PositionState
    realized_profit: Decimal


@dataclass(frozen=True)
class LedgerResult:
    """Outcome of replaying a full trade history for one item."""

    position: PositionState
    realized_profit: Decimal
    trade_count: int


@dataclass(frozen=True)
class SellPreview:
    """
    Profit a SELL would realize at the current weighted-average cost.

    Attributes:
        proceeds: unit_price x quantity
        cost_basis: WAC x quantity
        profit: proceeds - cost_basis
        remaining_quantity: Units left after the sell
    """

    name_id: int
    unit_price: Decimal
    quantity: int
    weighted_average_cost: Decimal
    proceeds: Decimal
    cost_basis: Decimal
    profit: Decimal
    remaining_quantity: int


# =============================================================================
# AGGREGATES
# =============================================================================

@dataclass(frozen=True)
class DailyFlow:
    """Buy and sell totals of one UTC calendar day; net = total_sell - total_buy."""

    day: date
    total_buy: Decimal
    total_sell: Decimal
    net: Decimal


@dataclass(frozen=True)
class PoolSummary:
    """
    Whole-portfolio rollup across all items and all time.

    Money fields are at 2 dp and real_return_rate at 4 dp. total_profit is
    the sum of the rounded realized and unrealized parts, so
    total_profit == realized_profit + (current_holding_value - current_cost_basis)
    holds exactly.
    """

    total_buy_trades: int
    total_sell_trades: int
    peak_net_investment: Decimal
    current_holding_value: Decimal
    current_cost_basis: Decimal
    total_withdrawal: Decimal
    realized_profit: Decimal
    unrealized_profit: Decimal
    total_profit: Decimal
    real_return_rate: Decimal
    first_investment_date: datetime | None
    last_trade_date: datetime | None
    total_investment_days: int
    total_items: int
    current_holding_items: int
    valuation_mode: ValuationMode
