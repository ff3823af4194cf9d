# tradetracker/routers/items.py
"""
Item catalog endpoints.

- GET  /api/items               list the catalog
- GET  /api/items/search        keyword search (trade entry autocomplete)
- POST /api/items               add one item (409 on duplicate)
- POST /api/items/import        bulk import from inline JSON text
- POST /api/items/import-file   bulk import from an uploaded .json file

Imports are all-or-nothing: a malformed document is rejected with 400
before anything is written; duplicates are skipped and reported.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile, status
from sqlalchemy.orm import Session

from tradetracker.config import settings
from tradetracker.database import get_db
from tradetracker.dependencies import get_item_service
from tradetracker.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT, RATE_LIMIT_UPLOAD, RATE_LIMIT_WRITE
from tradetracker.schemas.items import (
    ItemCreate,
    ItemImportRequest,
    ItemImportResponse,
    ItemResponse,
)
from tradetracker.services.item_import import ImportResult, check_import_filename
from tradetracker.services.item_service import ItemService

logger = logging.getLogger(__name__)

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/api/items",
    tags=["Items"],
)

DbSession = Annotated[Session, Depends(get_db)]
Items = Annotated[ItemService, Depends(get_item_service)]


def _import_response(result: ImportResult) -> ItemImportResponse:
    return ItemImportResponse(
        total_items=result.total_items,
        imported_count=result.imported_count,
        skipped_count=result.skipped_count,
        skipped_items=result.skipped_items,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "",
    response_model=list[ItemResponse],
    summary="List catalog items",
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def list_items(request: Request, db: DbSession, service: Items) -> list[ItemResponse]:
    return service.list_items(db)


@router.get(
    "/search",
    response_model=list[ItemResponse],
    summary="Search items by name or nameId",
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def search_items(
        request: Request,
        db: DbSession,
        service: Items,
        keyword: str = Query(
            default="",
            max_length=200,
            description="Substring of the market hash name, English or localized name; digits also match nameId",
        ),
        limit: int = Query(
            default=settings.search_default_limit,
            ge=1,
            description=f"Maximum results (capped at {settings.search_max_limit})",
        ),
) -> list[ItemResponse]:
    """
    Case-insensitive keyword search. Limits above the cap are clamped
    rather than rejected.
    """
    return service.search_items(db, keyword=keyword, limit=limit)


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an item",
    responses={409: {"description": "marketHashName or nameId already exists"}},
)
@limiter.limit(RATE_LIMIT_WRITE)
def create_item(request: Request, payload: ItemCreate, db: DbSession, service: Items) -> ItemResponse:
    return service.create_item(
        db,
        market_hash_name=payload.market_hash_name,
        en_name=payload.en_name,
        cn_name=payload.cn_name,
        name_id=payload.name_id,
    )


@router.post(
    "/import",
    response_model=ItemImportResponse,
    summary="Bulk import items from JSON text",
    responses={400: {"description": "Malformed import document; nothing imported"}},
)
@limiter.limit(RATE_LIMIT_UPLOAD)
def import_items(
        request: Request,
        payload: ItemImportRequest,
        db: DbSession,
        service: Items,
) -> ItemImportResponse:
    """
    **Document format:**
    ```json
    {
        "AK-47 | Redline (Field-Tested)": {
            "en_name": "AK-47 | Redline (Field-Tested)",
            "cn_name": "AK-47 | 红线 (久经沙场)",
            "name_id": 1001
        }
    }
    ```
    """
    logger.info(f"Inline import request: {len(payload.json_data)} characters")
    return _import_response(service.import_items(db, payload.json_data))


@router.post(
    "/import-file",
    response_model=ItemImportResponse,
    summary="Bulk import items from a .json file",
    responses={
        400: {"description": "Not a .json file, or malformed document"},
        413: {"description": "File larger than the configured maximum"},
    },
)
@limiter.limit(RATE_LIMIT_UPLOAD)
def import_items_file(
        request: Request,
        db: DbSession,
        service: Items,
        file: UploadFile = File(..., description="Catalog document (.json)"),
) -> ItemImportResponse:
    check_import_filename(file.filename)

    content = file.file.read()
    file_size = len(content)
    max_bytes = settings.max_import_file_size_bytes
    if file_size > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=(
                f"File too large: {file_size / (1024 * 1024):.1f}MB exceeds maximum of "
                f"{settings.max_import_file_size_mb}MB"
            ),
        )

    logger.info(f"File import request: {file.filename} ({file_size} bytes)")
    return _import_response(service.import_items(db, content))
