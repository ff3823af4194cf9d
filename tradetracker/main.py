# tradetracker/main.py
"""
ASGI entry point for the trade tracker.

Wires logging, middleware, the /api routers and the error envelope. Every
failure leaves the API as {"error", "message", "details"}; the service
layer raises plain exceptions and the handlers below choose the status.

Run with:
    uvicorn tradetracker.main:app --reload
"""

import logging
from typing import Any

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from tradetracker import __version__
from tradetracker.config import settings
from tradetracker.database import get_db
from tradetracker.middleware import (
    CorrelationIdMiddleware,
    limiter,
    rate_limit_exceeded_handler,
    SlowAPIMiddleware,
    RATE_LIMIT_HEALTH,
)
from tradetracker.routers import (
    items_router,
    trades_router,
    inventory_router,
    stats_router,
)
from tradetracker.schemas.errors import ErrorDetail, ValidationErrorDetail
from tradetracker.services.exceptions import (
    ServiceError,
    ValidationError,
    InsufficientInventoryError,
    FormatError,
    NotFoundError,
    ConflictError,
)
from tradetracker.utils.logging import setup_logging

logger = logging.getLogger(__name__)

setup_logging()

app = FastAPI(
    title=settings.app_name,
    description="Skin inventory and trade tracker: weighted-average cost, daily flows, pool statistics",
    version=__version__,
)

# Last added runs first: correlation ID, then rate limiting, then CORS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(CorrelationIdMiddleware)


# =============================================================================
# ERROR ENVELOPE
# =============================================================================

HTTP_ERROR_NAMES = {
    400: "BadRequestError",
    404: "NotFoundError",
    405: "MethodNotAllowedError",
    409: "ConflictError",
    413: "PayloadTooLargeError",
    422: "ValidationError",
    429: "RateLimitError",
    500: "InternalServerError",
    503: "ServiceUnavailableError",
}


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorDetail(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# Starlette dispatches on the most specific registered class, so
# InsufficientInventoryError wins over its ValidationError parent.
@app.exception_handler(InsufficientInventoryError)
async def insufficient_inventory_handler(request: Request, exc: InsufficientInventoryError) -> JSONResponse:
    logger.warning(f"Rejected oversell: {exc}")
    return error_response(
        400,
        "InsufficientInventoryError",
        str(exc),
        {"name_id": exc.name_id, "requested": exc.requested, "available": exc.available},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected input: {exc}")
    return error_response(400, "ValidationError", str(exc), {"field": exc.field} if exc.field else None)


@app.exception_handler(FormatError)
async def format_error_handler(request: Request, exc: FormatError) -> JSONResponse:
    logger.warning(f"Rejected import document: {exc}")
    return error_response(400, "FormatError", str(exc), {"key": exc.key} if exc.key else None)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info(f"Lookup miss: {exc}")
    details = None
    if exc.resource_type:
        details = {"resource_type": exc.resource_type, "resource_id": exc.resource_id}
    return error_response(404, type(exc).__name__, str(exc), details)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning(f"Duplicate rejected: {exc}")
    return error_response(409, type(exc).__name__, str(exc))


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Anything the service layer raised without a more specific mapping."""
    logger.error(f"Unhandled service error: {exc}")
    return error_response(500, "ServiceError", str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Wraps HTTPException bodies in the envelope.

    Registered on Starlette's base class so that routing 404/405 responses
    are covered as well as exceptions raised by endpoints.
    """
    return error_response(
        exc.status_code,
        HTTP_ERROR_NAMES.get(exc.status_code, "HTTPError"),
        str(exc.detail) if exc.detail else "An error occurred",
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema violations: one entry per failing field, dotted location."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    body = ValidationErrorDetail(error="ValidationError", message="Request validation failed", details=details)
    return JSONResponse(status_code=422, content=body.model_dump())


app.include_router(items_router)
app.include_router(trades_router)
app.include_router(inventory_router)
app.include_router(stats_router)


# =============================================================================
# HEALTH
# =============================================================================

@app.get("/", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def root(request: Request):
    return {"name": settings.app_name, "version": __version__, "docs": "/docs"}


@app.get("/health", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Health check including the database.

    - 200: database reachable
    - 503: database unreachable, do not route traffic here
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "checks": {"database": {"status": "unhealthy", "error": str(e)}},
            },
        )

    return {
        "status": "healthy",
        "checks": {"database": {"status": "healthy"}},
    }


@app.get("/health/live", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def liveness_check(request: Request):
    """Liveness probe: succeeds whenever the process is running."""
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
@limiter.limit(RATE_LIMIT_HEALTH)
def readiness_check(request: Request, db: Session = Depends(get_db)):
    """Readiness probe: 503 until the database answers."""
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "not_ready", "database": "unreachable"})
    return {"status": "ready", "database": "connected"}
