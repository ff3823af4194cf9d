# tradetracker/routers/__init__.py
"""
API routers, all mounted under /api:
- items: Catalog listing, search, creation and bulk import
- trades: Trade recording, deletion and queries
- inventory: Position lookups
- stats: Daily flows and the investment pool summary
"""

from tradetracker.routers.inventory import router as inventory_router
from tradetracker.routers.items import router as items_router
from tradetracker.routers.stats import router as stats_router
from tradetracker.routers.trades import router as trades_router

__all__ = [
    "items_router",
    "trades_router",
    "inventory_router",
    "stats_router",
]
