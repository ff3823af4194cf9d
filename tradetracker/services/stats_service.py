# tradetracker/services/stats_service.py
"""
Statistics service.

Loads trades and positions and hands them to the pure calculators:
- daily flows over a half-open date range (daily_flow.aggregate_daily_flows)
- the investment pool summary (pool.calculate_pool_summary)

Both are recomputed from stored data on every call; nothing is cached.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from tradetracker.services.daily_flow import aggregate_daily_flows
from tradetracker.services.inventory_service import InventoryService
from tradetracker.services.pool import calculate_pool_summary
from tradetracker.services.trade_service import TradeService
from tradetracker.services.types import DailyFlow, PoolSummary

logger = logging.getLogger(__name__)


class StatsService:
    """
    Read-only aggregation over trades and positions.

    Example:
        stats = StatsService(TradeService(), InventoryService())
        summary = stats.get_pool_summary(db, manual_value=Decimal("1500"))
    """

    def __init__(self, trade_service: TradeService, inventory_service: InventoryService) -> None:
        self._trades = trade_service
        self._inventory = inventory_service
        logger.info("StatsService initialized")

    def get_daily_flows(self, db: Session, start: datetime, end: datetime) -> list[DailyFlow]:
        """
        Raises:
            ValidationError: If start is after end
        """
        trades = self._trades.get_trades_in_range(db, start, end)
        return aggregate_daily_flows(trades, start, end)

    def get_pool_summary(self, db: Session, manual_value: Decimal | None = None) -> PoolSummary:
        """
        Raises:
            ValidationError: If manual_value is negative
        """
        trades = self._trades.all_trades_in_creation_order(db)
        positions = self._inventory.list_positions(db)
        return calculate_pool_summary(trades, positions, manual_value=manual_value)
