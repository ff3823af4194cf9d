# tradetracker/dependencies.py
"""
Dependency injection for FastAPI services.

Services are stateless apart from their logger, so one instance of each
is shared by all requests. Instances are created lazily on first use.

Usage in routers:
    from tradetracker.dependencies import get_trade_service

    @router.post("")
    def create_trade(
        service: Annotated[TradeService, Depends(get_trade_service)],
    ):
        ...

Tests can swap an implementation with app.dependency_overrides.
"""

from functools import lru_cache

from tradetracker.services.inventory_service import InventoryService
from tradetracker.services.item_service import ItemService
from tradetracker.services.stats_service import StatsService
from tradetracker.services.trade_service import TradeService


# =============================================================================
# SINGLETON SERVICE INSTANCES
# =============================================================================
# Order matters: StatsService depends on the trade and inventory services

@lru_cache(maxsize=1)
def get_item_service() -> ItemService:
    return ItemService()


@lru_cache(maxsize=1)
def get_trade_service() -> TradeService:
    return TradeService()


@lru_cache(maxsize=1)
def get_inventory_service() -> InventoryService:
    return InventoryService()


@lru_cache(maxsize=1)
def get_stats_service() -> StatsService:
    """Shares the trade and inventory singletons."""
    return StatsService(get_trade_service(), get_inventory_service())
