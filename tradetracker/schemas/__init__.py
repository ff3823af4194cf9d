# tradetracker/schemas/__init__.py
"""
Pydantic schemas for API request/response validation.

- base: camelCase base model
- errors: Error response formats
- items: Catalog items and bulk import
- trades: Trade creation and responses
- inventory: Positions and quantity lookups
- stats: Daily flows and the investment pool summary

Usage:
    from tradetracker.schemas import TradeCreate, TradeResponse
"""

from tradetracker.schemas.errors import ErrorDetail, ValidationErrorDetail
from tradetracker.schemas.inventory import InventoryResponse, QuantityResponse
from tradetracker.schemas.items import (
    ItemCreate,
    ItemImportRequest,
    ItemImportResponse,
    ItemResponse,
)
from tradetracker.schemas.stats import DailyFlowResponse, PoolSummaryResponse
from tradetracker.schemas.trades import ItemRef, SellTradeCreate, TradeCreate, TradeResponse

__all__ = [
    "ErrorDetail",
    "ValidationErrorDetail",
    "InventoryResponse",
    "QuantityResponse",
    "ItemCreate",
    "ItemImportRequest",
    "ItemImportResponse",
    "ItemResponse",
    "DailyFlowResponse",
    "PoolSummaryResponse",
    "ItemRef",
    "SellTradeCreate",
    "TradeCreate",
    "TradeResponse",
]
