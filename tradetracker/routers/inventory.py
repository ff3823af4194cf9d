# tradetracker/routers/inventory.py
"""
Inventory endpoints.

- GET /api/inventory                     all positions
- GET /api/inventory/{nameId}            one position (404 if never bought)
- GET /api/inventory/{nameId}/quantity   {nameId, quantity}, 0 if none
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from tradetracker.database import get_db
from tradetracker.dependencies import get_inventory_service
from tradetracker.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT
from tradetracker.schemas.inventory import InventoryResponse, QuantityResponse
from tradetracker.services.inventory_service import InventoryService

router = APIRouter(
    prefix="/api/inventory",
    tags=["Inventory"],
)

DbSession = Annotated[Session, Depends(get_db)]
Positions = Annotated[InventoryService, Depends(get_inventory_service)]


@router.get(
    "",
    response_model=list[InventoryResponse],
    summary="List positions",
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def list_inventory(request: Request, db: DbSession, service: Positions) -> list[InventoryResponse]:
    """Positions sold down to zero are included."""
    return service.list_inventory(db)


@router.get(
    "/{name_id}",
    response_model=InventoryResponse,
    summary="Position of one item",
    responses={404: {"description": "No position for this item"}},
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_inventory(request: Request, name_id: int, db: DbSession, service: Positions) -> InventoryResponse:
    return service.get_inventory(db, name_id)


@router.get(
    "/{name_id}/quantity",
    response_model=QuantityResponse,
    summary="Current quantity of one item",
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_current_quantity(request: Request, name_id: int, db: DbSession, service: Positions) -> QuantityResponse:
    return QuantityResponse(name_id=name_id, quantity=service.get_current_quantity(db, name_id))
