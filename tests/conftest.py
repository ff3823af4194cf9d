# tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Database session fixtures (in-memory SQLite)
- TestClient wired to the test session
- Sample data factories
"""

import os

# Settings are read at import time; test mode allows in-memory SQLite
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("APP_NAME", "Test App")

from datetime import datetime
from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tradetracker.database import get_db
from tradetracker.main import app
from tradetracker.middleware.rate_limit import limiter
from tradetracker.models import Base, Item, Trade, TradeType


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Iterator[TestClient]:
    """Create TestClient with database dependency override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """The limiter keeps counters in memory across tests."""
    limiter.reset()
    yield


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

def make_item(
        db: Session,
        name_id: int = 1001,
        market_hash_name: str = "AK-47 | Redline (Field-Tested)",
        en_name: str | None = None,
        cn_name: str = "AK-47 | 红线 (久经沙场)",
) -> Item:
    """Create a catalog item."""
    item = Item(
        market_hash_name=market_hash_name,
        en_name=en_name or market_hash_name,
        cn_name=cn_name,
        name_id=name_id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def make_trade_row(
        db: Session,
        name_id: int,
        trade_type: TradeType,
        unit_price: str,
        quantity: int,
        created_at: datetime,
) -> Trade:
    """
    Insert a trade row directly, bypassing the ledger.

    Used to place trades at fixed instants for range and daily-flow queries.
    """
    price = Decimal(unit_price)
    trade = Trade(
        name_id=name_id,
        trade_type=trade_type,
        unit_price=price,
        quantity=quantity,
        total_amount=price * quantity,
        created_at=created_at,
    )
    db.add(trade)
    db.commit()
    db.refresh(trade)
    return trade


@pytest.fixture
def item(db: Session) -> Item:
    """One catalog item with nameId 1001."""
    return make_item(db)


@pytest.fixture
def second_item(db: Session) -> Item:
    """A second catalog item with nameId 2002."""
    return make_item(
        db,
        name_id=2002,
        market_hash_name="AWP | Asiimov (Field-Tested)",
        cn_name="AWP | 二西莫夫 (久经沙场)",
    )


@pytest.fixture
def trade_row(db: Session):
    """make_trade_row bound to the test session."""

    def _make(name_id: int, trade_type: TradeType, unit_price: str, quantity: int, created_at: datetime) -> Trade:
        return make_trade_row(db, name_id, trade_type, unit_price, quantity, created_at)

    return _make
