# tradetracker/routers/stats.py
"""
Statistics endpoints.

- GET /api/stats/daily?start=&end=    per-day buy/sell totals in [start, end)
- GET /api/stats/pool?manualValue=    investment pool summary

Both are recomputed from stored trades and positions on every request.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from tradetracker.database import get_db
from tradetracker.dependencies import get_stats_service
from tradetracker.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT
from tradetracker.schemas.stats import DailyFlowResponse, PoolSummaryResponse
from tradetracker.services.stats_service import StatsService

router = APIRouter(
    prefix="/api/stats",
    tags=["Statistics"],
)

DbSession = Annotated[Session, Depends(get_db)]
Stats = Annotated[StatsService, Depends(get_stats_service)]


@router.get(
    "/daily",
    response_model=list[DailyFlowResponse],
    summary="Daily buy/sell flows",
    responses={400: {"description": "start is after end"}},
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_daily_stats(
        request: Request,
        db: DbSession,
        service: Stats,
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
) -> list[DailyFlowResponse]:
    """
    Days are UTC calendar days; days without trades are omitted.
    net = totalSell - totalBuy.
    """
    return [
        DailyFlowResponse.model_validate(flow)
        for flow in service.get_daily_flows(db, start, end)
    ]


@router.get(
    "/pool",
    response_model=PoolSummaryResponse,
    summary="Investment pool summary",
    responses={422: {"description": "manualValue is negative or not a number"}},
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_pool_stats(
        request: Request,
        db: DbSession,
        service: Stats,
        manual_value: Decimal | None = Query(
            default=None,
            alias="manualValue",
            ge=0,
            description=(
                "Optional market value of the whole held portfolio. "
                "When given, it replaces the cost basis as currentHoldingValue."
            ),
            examples=["1500.00"]
        ),
) -> PoolSummaryResponse:
    """
    **Principal:** peakNetInvestment is the high-water mark of cumulative
    buys minus cumulative sells.

    **Profit:** totalProfit = realizedProfit + (currentHoldingValue - currentCostBasis);
    realReturnRate = totalProfit / peakNetInvestment (0 when the peak is 0).
    """
    return PoolSummaryResponse.model_validate(service.get_pool_summary(db, manual_value=manual_value))
