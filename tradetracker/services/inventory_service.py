# tradetracker/services/inventory_service.py
"""
Inventory read service.

Positions are written only by TradeService; this service reads them.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from tradetracker.models import Inventory
from tradetracker.services.exceptions import InventoryNotFoundError

logger = logging.getLogger(__name__)


class InventoryService:
    """Queries over the inventory table."""

    def __init__(self) -> None:
        logger.info("InventoryService initialized")

    def list_inventory(self, db: Session) -> list[Inventory]:
        """All positions (zero-quantity ones included), most recently updated first."""
        return list(db.scalars(
            select(Inventory)
            .options(joinedload(Inventory.item))
            .order_by(Inventory.last_updated_at.desc(), Inventory.id.desc())
        ).all())

    def list_positions(self, db: Session) -> list[Inventory]:
        return list(db.scalars(select(Inventory).order_by(Inventory.name_id)).all())

    def get_inventory(self, db: Session, name_id: int) -> Inventory:
        """
        Raises:
            InventoryNotFoundError: If the item was never bought
        """
        inventory = db.scalar(
            select(Inventory)
            .options(joinedload(Inventory.item))
            .where(Inventory.name_id == name_id)
        )
        if inventory is None:
            raise InventoryNotFoundError(name_id)
        return inventory

    def get_current_quantity(self, db: Session, name_id: int) -> int:
        """Units held; 0 when there is no position."""
        quantity = db.scalar(
            select(Inventory.current_quantity).where(Inventory.name_id == name_id)
        )
        return quantity or 0
