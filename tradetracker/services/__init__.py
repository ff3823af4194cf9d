# tradetracker/services/__init__.py
"""
Service layer for business logic.

Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise the domain exceptions defined in exceptions.py
- Receive database sessions as parameters (not via Depends)

Architecture:
    services/
    ├── __init__.py            # This file - exception exports
    ├── exceptions.py          # Domain exceptions
    ├── constants.py           # Precision, limits, rate limits
    ├── types.py               # Calculator value objects
    ├── ledger.py              # Weighted-average-cost ledger (pure)
    ├── pool.py                # Investment pool summary (pure)
    ├── daily_flow.py          # Daily buy/sell aggregation (pure)
    ├── item_import.py         # Catalog import document parsing (pure)
    ├── item_service.py        # Catalog queries, creation, bulk import
    ├── trade_service.py       # Trade recording, deletion, queries
    ├── inventory_service.py   # Position queries
    └── stats_service.py       # Daily flow and pool summary loading

Service classes are imported from their modules directly, e.g.
    from tradetracker.services.trade_service import TradeService
"""

from tradetracker.services.exceptions import (
    ServiceError,
    ValidationError,
    InsufficientInventoryError,
    FormatError,
    NotFoundError,
    ItemNotFoundError,
    TradeNotFoundError,
    InventoryNotFoundError,
    ConflictError,
    ItemExistsError,
)

__all__ = [
    "ServiceError",
    "ValidationError",
    "InsufficientInventoryError",
    "FormatError",
    "NotFoundError",
    "ItemNotFoundError",
    "TradeNotFoundError",
    "InventoryNotFoundError",
    "ConflictError",
    "ItemExistsError",
]
