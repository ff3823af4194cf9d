# tradetracker/schemas/stats.py
"""
Pydantic schemas for the statistics endpoints.

Money is serialized as fixed-point strings: 2 decimals for amounts,
4 decimals for realReturnRate (0.1234 = 12.34%).
"""

from datetime import date, datetime
from decimal import Decimal

from tradetracker.schemas.base import CamelModel
from tradetracker.services.types import ValuationMode


class DailyFlowResponse(CamelModel):
    """One UTC day; net = totalSell - totalBuy."""

    day: date
    total_buy: Decimal
    total_sell: Decimal
    net: Decimal


class PoolSummaryResponse(CamelModel):
    """
    Investment pool rollup.

    totalProfit == realizedProfit + (currentHoldingValue - currentCostBasis)
    realReturnRate == totalProfit / peakNetInvestment (0 when the peak is 0)
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
