# tradetracker/routers/trades.py
"""
Trade endpoints.

- POST   /api/trades                 record a BUY or SELL
- POST   /api/trades/sell            record a SELL from inventory
- GET    /api/trades                 all trades, newest first
- GET    /api/trades/history/{id}    one item's trades, oldest first
- GET    /api/trades/date-range      trades in [start, end)
- DELETE /api/trades/{id}            delete and rebuild the item's position

Every write updates the inventory position in the same database
transaction. A SELL larger than the current quantity is rejected (400),
never clamped.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from tradetracker.database import get_db
from tradetracker.dependencies import get_trade_service
from tradetracker.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT, RATE_LIMIT_WRITE
from tradetracker.schemas.trades import SellTradeCreate, TradeCreate, TradeResponse
from tradetracker.services.trade_service import TradeService

logger = logging.getLogger(__name__)

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/api/trades",
    tags=["Trades"],
)

DbSession = Annotated[Session, Depends(get_db)]
Trades = Annotated[TradeService, Depends(get_trade_service)]


# =============================================================================
# WRITE ENDPOINTS
# =============================================================================

@router.post(
    "",
    response_model=TradeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a trade",
    responses={
        400: {"description": "Invalid parameters or insufficient inventory"},
        404: {"description": "Unknown nameId"},
    },
)
@limiter.limit(RATE_LIMIT_WRITE)
def create_trade(request: Request, payload: TradeCreate, db: DbSession, service: Trades) -> TradeResponse:
    """
    Record a BUY or SELL and update the item's weighted-average cost.

    **BUY** of q @ p into (Q, C): C' = (Q*C + q*p) / (Q + q), Q' = Q + q

    **SELL** of q: Q' = Q - q, C unchanged

    totalAmount is computed server-side.
    """
    return service.create_trade(
        db,
        name_id=payload.name_id,
        trade_type=payload.trade_type,
        unit_price=payload.unit_price,
        quantity=payload.quantity,
        platform=payload.platform,
        counterparty=payload.counterparty,
    )


@router.post(
    "/sell",
    response_model=TradeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sell from inventory",
    responses={
        400: {"description": "Invalid parameters or insufficient inventory"},
        404: {"description": "Unknown nameId"},
    },
)
@limiter.limit(RATE_LIMIT_WRITE)
def create_sell_trade(
        request: Request,
        payload: SellTradeCreate,
        db: DbSession,
        service: Trades,
) -> TradeResponse:
    return service.create_sell_trade(
        db,
        name_id=payload.name_id,
        unit_price=payload.unit_price,
        quantity=payload.quantity,
        platform=payload.platform,
        counterparty=payload.counterparty,
    )


@router.delete(
    "/{trade_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a trade",
    responses={
        400: {"description": "Remaining history would oversell; nothing deleted"},
        404: {"description": "Unknown trade id"},
    },
)
@limiter.limit(RATE_LIMIT_WRITE)
def delete_trade(request: Request, trade_id: int, db: DbSession, service: Trades) -> None:
    """
    Delete a trade. The item's position is rebuilt by replaying its
    remaining trades in creation order.
    """
    service.delete_trade(db, trade_id)


# =============================================================================
# READ ENDPOINTS
# =============================================================================

@router.get(
    "",
    response_model=list[TradeResponse],
    summary="List trades (newest first)",
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def list_trades(request: Request, db: DbSession, service: Trades) -> list[TradeResponse]:
    return service.list_trades(db)


@router.get(
    "/history/{name_id}",
    response_model=list[TradeResponse],
    summary="Trade history of one item (oldest first)",
    responses={404: {"description": "Unknown nameId"}},
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_trade_history(request: Request, name_id: int, db: DbSession, service: Trades) -> list[TradeResponse]:
    return service.get_trade_history(db, name_id)


@router.get(
    "/date-range",
    response_model=list[TradeResponse],
    summary="Trades in a half-open date range",
    responses={400: {"description": "start is after end"}},
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_trades_in_range(
        request: Request,
        db: DbSession,
        service: Trades,
        start: datetime = Query(
            ...,
            description="Inclusive lower bound (ISO instant; naive means UTC)",
            examples=["2024-01-01T00:00:00Z"]
        ),
        end: datetime = Query(
            ...,
            description="Exclusive upper bound (ISO instant; naive means UTC)",
            examples=["2024-02-01T00:00:00Z"]
        ),
) -> list[TradeResponse]:
    return service.get_trades_in_range(db, start, end)
