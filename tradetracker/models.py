# tradetracker/models.py
import enum
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, DateTime, ForeignKey, Enum, Numeric, Integer, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TradeType(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


class Item(Base):
    """
    Catalog entry for a tradable skin.

    nameId is the stable key everything else refers to; marketHashName is
    the marketplace identifier and is unique as well.
    """
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    market_hash_name: Mapped[str] = mapped_column(String(512), unique=True, index=True)
    en_name: Mapped[str] = mapped_column(String(512))
    cn_name: Mapped[str] = mapped_column(String(512))
    name_id: Mapped[int] = mapped_column(Integer, unique=True, index=True)

    trades: Mapped[list["Trade"]] = relationship(back_populates="item")
    inventory: Mapped[Optional["Inventory"]] = relationship(back_populates="item")


class Trade(Base):
    """
    One BUY or SELL fact. Never edited; deleting one rebuilds the position.
    """
    __tablename__ = "trades"
    __table_args__ = (
        # Replay and history queries: "all trades for item X in creation order"
        Index('ix_trade_name_id_created_at', 'name_id', 'created_at'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name_id: Mapped[int] = mapped_column(ForeignKey("items.name_id"))
    trade_type: Mapped[TradeType] = mapped_column(Enum(TradeType))

    # Numeric(19, 4): prices up to 999,999,999,999,999.9999
    unit_price: Mapped[Decimal] = mapped_column(Numeric(19, 4))
    quantity: Mapped[int] = mapped_column(Integer)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(19, 4))

    platform: Mapped[str | None] = mapped_column(String(128), nullable=True)
    counterparty: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)

    item: Mapped["Item"] = relationship(back_populates="trades")


class Inventory(Base):
    """
    Current position per item, maintained by trade processing.

    Invariant at rest: total_investment_cost == weighted_average_cost * current_quantity.
    cost_total is the unrounded purchase cost of the units held; the ledger
    derives weighted_average_cost from it on every BUY.
    A position that was sold down to zero is kept.
    """
    __tablename__ = "inventory"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name_id: Mapped[int] = mapped_column(ForeignKey("items.name_id"), unique=True, index=True)
    current_quantity: Mapped[int] = mapped_column(Integer, default=0)
    weighted_average_cost: Mapped[Decimal] = mapped_column(Numeric(19, 4), default=Decimal(0))
    total_investment_cost: Mapped[Decimal] = mapped_column(Numeric(19, 4), default=Decimal(0))
    cost_total: Mapped[Decimal] = mapped_column(Numeric(28, 10), default=Decimal(0))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    last_updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    item: Mapped["Item"] = relationship(back_populates="inventory")
