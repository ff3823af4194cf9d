# tradetracker/services/trade_service.py
"""
Trade service: records trades and keeps inventory positions in step.

This service handles:
- Recording BUY and SELL trades
- Upserting the item's inventory position in the same transaction
- Deleting a trade and rebuilding the position from the remaining history
- Trade listing, per-item history and half-open date range queries

Every mutation commits exactly once. If the ledger rejects a trade
(invalid parameters, oversell) nothing is written.

Usage:
    from tradetracker.services.trade_service import TradeService

    service = TradeService()
    trade = service.create_trade(
        db, name_id=1001, trade_type=TradeType.BUY,
        unit_price=Decimal("2.5"), quantity=10,
    )
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from tradetracker.models import Inventory, Item, Trade, TradeType
from tradetracker.services.daily_flow import validate_range
from tradetracker.services.exceptions import ItemNotFoundError, TradeNotFoundError, ValidationError
from tradetracker.services.ledger import apply_trade, replay
from tradetracker.services.types import PositionState, TradeFact

logger = logging.getLogger(__name__)


def _creation_order():
    # id breaks ties between trades recorded within the same clock tick
    return Trade.created_at.asc(), Trade.id.asc()


class TradeService:
    """
    Transactional orchestration of the ledger over SQLAlchemy.

    Example:
        service = TradeService()
        service.create_trade(db, 1001, TradeType.BUY, Decimal("2"), 10)
        service.create_trade(db, 1001, TradeType.SELL, Decimal("4"), 5)
        service.delete_trade(db, trade_id=1)   # raises: the SELL would oversell
    """

    def __init__(self) -> None:
        logger.info("TradeService initialized")

    # =========================================================================
    # WRITES
    # =========================================================================

    def create_trade(
            self,
            db: Session,
            name_id: int,
            trade_type: TradeType,
            unit_price: Decimal,
            quantity: int,
            platform: str | None = None,
            counterparty: str | None = None,
    ) -> Trade:
        """
        Record a trade and update the item's position.

        Raises:
            ItemNotFoundError: Unknown nameId
            ValidationError: quantity <= 0 or unit_price < 0
            InsufficientInventoryError: SELL exceeds the current quantity
        """
        if db.scalar(select(Item.id).where(Item.name_id == name_id)) is None:
            raise ItemNotFoundError(name_id)

        inventory = db.scalar(select(Inventory).where(Inventory.name_id == name_id))
        before = PositionState.of(inventory, name_id)

        fact = TradeFact(name_id=name_id, trade_type=trade_type, unit_price=unit_price, quantity=quantity)
        try:
            step = apply_trade(before, fact)
        except ValidationError as e:
            logger.warning(f"Rejected {trade_type.value} of {quantity} for item {name_id}: {e}")
            raise

        trade = Trade(
            name_id=name_id,
            trade_type=trade_type,
            unit_price=unit_price,
            quantity=quantity,
            total_amount=fact.total_amount,
            platform=platform,
            counterparty=counterparty,
        )
        db.add(trade)

        if inventory is None:
            inventory = Inventory(name_id=name_id)
            db.add(inventory)
        self._store_position(inventory, step.position)

        db.commit()
        db.refresh(trade)

        logger.info(
            f"Recorded {trade_type.value} trade {trade.id} for item {name_id}: "
            f"{quantity} @ {unit_price}; position now "
            f"{step.position.current_quantity} @ {step.position.weighted_average_cost}"
        )
        return trade

    def create_sell_trade(
            self,
            db: Session,
            name_id: int,
            unit_price: Decimal,
            quantity: int,
            platform: str | None = None,
            counterparty: str | None = None,
    ) -> Trade:
        """SELL shortcut; same validation as create_trade."""
        return self.create_trade(
            db, name_id, TradeType.SELL, unit_price, quantity,
            platform=platform, counterparty=counterparty,
        )

    def delete_trade(self, db: Session, trade_id: int) -> None:
        """
        Delete a trade and rebuild the item's position by replaying the rest.

        Raises:
            TradeNotFoundError: Unknown trade id
            InsufficientInventoryError: The remaining history would oversell
                (for example deleting a BUY that a later SELL depended on);
                nothing is changed
        """
        trade = db.get(Trade, trade_id)
        if trade is None:
            raise TradeNotFoundError(trade_id)

        name_id = trade.name_id
        remaining = db.scalars(
            select(Trade)
            .where(Trade.name_id == name_id, Trade.id != trade_id)
            .order_by(*_creation_order())
        ).all()

        try:
            result = replay(remaining, name_id=name_id)
        except ValidationError as e:
            logger.warning(f"Refused to delete trade {trade_id}: {e}")
            raise

        inventory = db.scalar(select(Inventory).where(Inventory.name_id == name_id))
        if inventory is None:
            inventory = Inventory(name_id=name_id)
            db.add(inventory)
        self._store_position(inventory, result.position)
        db.delete(trade)
        db.commit()

        logger.info(
            f"Deleted trade {trade_id}; item {name_id} rebuilt from {result.trade_count} trades "
            f"to {result.position.current_quantity} @ {result.position.weighted_average_cost}"
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def list_trades(self, db: Session) -> list[Trade]:
        """All trades, newest first, with their items loaded."""
        return list(db.scalars(
            select(Trade)
            .options(joinedload(Trade.item))
            .order_by(Trade.created_at.desc(), Trade.id.desc())
        ).all())

    def all_trades_in_creation_order(self, db: Session) -> list[Trade]:
        return list(db.scalars(select(Trade).order_by(*_creation_order())).all())

    def get_trade_history(self, db: Session, name_id: int) -> list[Trade]:
        """
        Trades of one item, oldest first.

        Raises:
            ItemNotFoundError: Unknown nameId
        """
        if db.scalar(select(Item.id).where(Item.name_id == name_id)) is None:
            raise ItemNotFoundError(name_id)
        return list(db.scalars(
            select(Trade)
            .options(joinedload(Trade.item))
            .where(Trade.name_id == name_id)
            .order_by(*_creation_order())
        ).all())

    def get_trades_in_range(self, db: Session, start: datetime, end: datetime) -> list[Trade]:
        """
        Trades with start <= created_at < end, oldest first.

        Raises:
            ValidationError: If start is after end
        """
        start_utc, end_utc = validate_range(start, end)
        return list(db.scalars(
            select(Trade)
            .options(joinedload(Trade.item))
            .where(Trade.created_at >= start_utc, Trade.created_at < end_utc)
            .order_by(*_creation_order())
        ).all())

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _store_position(inventory: Inventory, position: PositionState) -> None:
        inventory.current_quantity = position.current_quantity
        inventory.weighted_average_cost = position.weighted_average_cost
        inventory.total_investment_cost = position.total_investment_cost
        inventory.cost_total = position.cost_total
