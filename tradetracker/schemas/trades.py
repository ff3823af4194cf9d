# tradetracker/schemas/trades.py
"""
Pydantic schemas for trades.

- TradeCreate: POST /api/trades
- SellTradeCreate: POST /api/trades/sell
- TradeResponse: every trade read

totalAmount and createdAt are never accepted from the client; the
backend derives the first and stamps the second.

IMPORTANT: All financial values use Decimal. Never use float for money!
"""

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, Field, field_validator

from tradetracker.models import TradeType
from tradetracker.schemas.base import CamelModel
from tradetracker.services.constants import MAX_COUNTERPARTY_LENGTH, MAX_PLATFORM_LENGTH
from tradetracker.utils.date_utils import to_utc


class ItemRef(CamelModel):
    """Item names embedded in trade and inventory responses."""

    market_hash_name: str
    en_name: str
    cn_name: str


# =============================================================================
# CREATE SCHEMAS
# =============================================================================

class SellTradeCreate(CamelModel):
    """Sell from inventory: the direction is implied."""

    name_id: int = Field(
        ...,
        description="Item key",
        examples=[1001]
    )
    unit_price: Decimal = Field(
        ...,
        ge=0,
        max_digits=19,
        decimal_places=4,
        description="Price per unit (0 or positive, up to 4 decimals)",
        examples=["2.5000", "0.03"]
    )
    quantity: int = Field(
        ...,
        gt=0,
        description="Units traded (must be positive)",
        examples=[1, 10]
    )
    platform: str | None = Field(
        default=None,
        max_length=MAX_PLATFORM_LENGTH,
        description="Where the trade happened",
        examples=["Steam", "Buff"]
    )
    counterparty: str | None = Field(
        default=None,
        max_length=MAX_COUNTERPARTY_LENGTH,
        description="Who the trade was with",
    )

    @field_validator("platform", "counterparty")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class TradeCreate(SellTradeCreate):
    trade_type: TradeType = Field(
        ...,
        validation_alias=AliasChoices("type", "tradeType", "trade_type"),
        serialization_alias="type",
        description="BUY or SELL",
        examples=["BUY"]
    )


# =============================================================================
# RESPONSE SCHEMA
# =============================================================================

class TradeResponse(CamelModel):
    id: int
    name_id: int
    trade_type: TradeType = Field(
        ...,
        validation_alias=AliasChoices("type", "trade_type"),
        serialization_alias="type",
    )
    unit_price: Decimal
    quantity: int
    total_amount: Decimal
    platform: str | None = None
    counterparty: str | None = None
    created_at: datetime
    item: ItemRef | None = None

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return to_utc(v)
