# tradetracker/schemas/inventory.py
"""
Pydantic schemas for inventory positions.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import field_validator

from tradetracker.schemas.base import CamelModel
from tradetracker.schemas.trades import ItemRef
from tradetracker.utils.date_utils import to_utc


class InventoryResponse(CamelModel):
    """
    One position. totalInvestmentCost equals weightedAverageCost x currentQuantity.
    """

    id: int
    name_id: int
    current_quantity: int
    weighted_average_cost: Decimal
    total_investment_cost: Decimal
    created_at: datetime
    last_updated_at: datetime
    item: ItemRef | None = None

    @field_validator("created_at", "last_updated_at")
    @classmethod
    def timestamps_utc(cls, v: datetime) -> datetime:
        return to_utc(v)


class QuantityResponse(CamelModel):
    """Body of GET /api/inventory/{nameId}/quantity."""

    name_id: int
    quantity: int
