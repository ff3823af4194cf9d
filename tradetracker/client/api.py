# tradetracker/client/api.py
"""
Async HTTP client for the trade tracker API.

One coroutine per REST operation. Inputs are validated locally before
any request goes out (the server repeats every check authoritatively);
responses are parsed into the API schemas, so money arrives as Decimal.

No retries, no cache: callers re-query after a mutation.

Usage:
    async with TrackerClient("http://localhost:8000") as api:
        await api.create_trade(1001, TradeType.BUY, Decimal("2.50"), 10)
        summary = await api.pool_stats(manual_value=Decimal("40"))
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import httpx

from tradetracker.client.exceptions import TransportError
from tradetracker.models import TradeType
from tradetracker.schemas.inventory import InventoryResponse, QuantityResponse
from tradetracker.schemas.items import ItemImportResponse, ItemResponse
from tradetracker.schemas.stats import DailyFlowResponse, PoolSummaryResponse
from tradetracker.schemas.trades import TradeResponse
from tradetracker.services.constants import CURRENCY_DECIMAL_PLACES, PRICE_DECIMAL_PLACES, ZERO
from tradetracker.services.daily_flow import validate_range
from tradetracker.services.exceptions import FormatError, InsufficientInventoryError, ValidationError
from tradetracker.services.item_import import (
    check_import_filename,
    check_import_size,
    parse_import_document,
)
from tradetracker.services.ledger import preview_sell, validate_trade_parameters
from tradetracker.services.types import PositionState, SellPreview
from tradetracker.utils.money import format_money, parse_money

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Client-side fast-fail; the server enforces its own configured limit
MAX_IMPORT_FILE_SIZE_BYTES = 50 * 1024 * 1024


def _amount(value: Decimal | str, field: str, message: str) -> Decimal:
    """Money typed as text (a form field) or already a Decimal."""
    if not isinstance(value, str):
        return value
    try:
        return parse_money(value)
    except FormatError as e:
        raise ValidationError(message, field=field) from e


def _unit_price(value: Decimal | str) -> Decimal:
    return _amount(value, "unitPrice", "invalid trade parameters")


def _instant(moment: datetime) -> str:
    return moment.isoformat()


class TrackerClient:
    """
    Async client for /api.

    Args:
        base_url: Server root, e.g. "http://localhost:8000"
        client: Pre-built httpx.AsyncClient (tests pass one with a MockTransport);
                the caller keeps ownership of it
        timeout: Request timeout in seconds when the client is built here
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> TrackerClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransportError(None, reason=str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise TransportError(response.status_code, response.text)
        return response

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return (await self._request("GET", path, params=params)).json()

    # =========================================================================
    # ITEMS
    # =========================================================================

    async def list_items(self) -> list[ItemResponse]:
        return [ItemResponse.model_validate(row) for row in await self._get_json("/api/items")]

    async def search_items(self, keyword: str, limit: int = 15) -> list[ItemResponse]:
        rows = await self._get_json("/api/items/search", {"keyword": keyword, "limit": limit})
        return [ItemResponse.model_validate(row) for row in rows]

    async def create_item(self, market_hash_name: str, en_name: str, cn_name: str, name_id: int) -> ItemResponse:
        response = await self._request("POST", "/api/items", json={
            "marketHashName": market_hash_name,
            "enName": en_name,
            "cnName": cn_name,
            "nameId": name_id,
        })
        return ItemResponse.model_validate(response.json())

    async def import_items(self, json_data: str) -> ItemImportResponse:
        """
        Raises:
            FormatError: The document does not parse; nothing is sent
        """
        parse_import_document(json_data)
        response = await self._request("POST", "/api/items/import", json={"jsonData": json_data})
        return ItemImportResponse.model_validate(response.json())

    async def import_file(self, path: str | Path) -> ItemImportResponse:
        """
        Upload a catalog document after local checks.

        Raises:
            ValidationError: Not a .json file, or larger than 50 MB
            FormatError: The document does not parse
        """
        path = Path(path)
        check_import_filename(path.name)
        check_import_size(path.stat().st_size, MAX_IMPORT_FILE_SIZE_BYTES)
        content = path.read_bytes()
        parse_import_document(content)

        response = await self._request(
            "POST",
            "/api/items/import-file",
            files={"file": (path.name, content, "application/json")},
        )
        return ItemImportResponse.model_validate(response.json())

    # =========================================================================
    # TRADES
    # =========================================================================

    async def create_trade(
        self,
        name_id: int,
        trade_type: TradeType,
        unit_price: Decimal | str,
        quantity: int,
        platform: str | None = None,
        counterparty: str | None = None,
    ) -> TradeResponse:
        """
        Raises:
            ValidationError: quantity <= 0, unit_price < 0 or not a number
            InsufficientInventoryError: SELL above the server-reported quantity
            TransportError: The server rejected the trade
        """
        unit_price = _unit_price(unit_price)
        validate_trade_parameters(quantity, unit_price)
        if trade_type == TradeType.SELL:
            await self._check_stock(name_id, quantity)

        response = await self._request("POST", "/api/trades", json={
            "nameId": name_id,
            "type": trade_type.value,
            "unitPrice": format_money(unit_price, PRICE_DECIMAL_PLACES),
            "quantity": quantity,
            "platform": platform,
            "counterparty": counterparty,
        })
        return TradeResponse.model_validate(response.json())

    async def sell(self, name_id: int, unit_price: Decimal | str, quantity: int) -> TradeResponse:
        """Sell from inventory; same local checks as a SELL through create_trade."""
        unit_price = _unit_price(unit_price)
        validate_trade_parameters(quantity, unit_price)
        await self._check_stock(name_id, quantity)

        response = await self._request("POST", "/api/trades/sell", json={
            "nameId": name_id,
            "unitPrice": format_money(unit_price, PRICE_DECIMAL_PLACES),
            "quantity": quantity,
        })
        return TradeResponse.model_validate(response.json())

    async def list_trades(self) -> list[TradeResponse]:
        return [TradeResponse.model_validate(row) for row in await self._get_json("/api/trades")]

    async def trade_history(self, name_id: int) -> list[TradeResponse]:
        rows = await self._get_json(f"/api/trades/history/{name_id}")
        return [TradeResponse.model_validate(row) for row in rows]

    async def trades_in_range(self, start: datetime, end: datetime) -> list[TradeResponse]:
        validate_range(start, end)
        rows = await self._get_json("/api/trades/date-range", {"start": _instant(start), "end": _instant(end)})
        return [TradeResponse.model_validate(row) for row in rows]

    async def delete_trade(self, trade_id: int) -> None:
        await self._request("DELETE", f"/api/trades/{trade_id}")

    # =========================================================================
    # INVENTORY
    # =========================================================================

    async def list_inventory(self) -> list[InventoryResponse]:
        return [InventoryResponse.model_validate(row) for row in await self._get_json("/api/inventory")]

    async def get_inventory(self, name_id: int) -> InventoryResponse:
        return InventoryResponse.model_validate(await self._get_json(f"/api/inventory/{name_id}"))

    async def get_current_quantity(self, name_id: int) -> int:
        body = await self._get_json(f"/api/inventory/{name_id}/quantity")
        return QuantityResponse.model_validate(body).quantity

    async def preview_sell(self, name_id: int, unit_price: Decimal | str, quantity: int) -> SellPreview:
        """
        Profit a SELL would realize at the item's current weighted-average cost.

        Raises:
            ValidationError: Invalid parameters
            InsufficientInventoryError: quantity above the held quantity
        """
        unit_price = _unit_price(unit_price)
        validate_trade_parameters(quantity, unit_price)
        try:
            inventory = await self.get_inventory(name_id)
        except TransportError as e:
            if e.status_code != 404:
                raise
            position = PositionState(name_id=name_id)
        else:
            position = PositionState.of(inventory, name_id)
        return preview_sell(position, unit_price, quantity)

    async def _check_stock(self, name_id: int, quantity: int) -> None:
        available = await self.get_current_quantity(name_id)
        if quantity > available:
            raise InsufficientInventoryError(name_id=name_id, requested=quantity, available=available)

    # =========================================================================
    # STATS
    # =========================================================================

    async def daily_stats(self, start: datetime, end: datetime) -> list[DailyFlowResponse]:
        validate_range(start, end)
        rows = await self._get_json("/api/stats/daily", {"start": _instant(start), "end": _instant(end)})
        return [DailyFlowResponse.model_validate(row) for row in rows]

    async def pool_stats(self, manual_value: Decimal | str | None = None) -> PoolSummaryResponse:
        """
        Raises:
            ValidationError: manual_value is negative or not a finite number
        """
        params = None
        if manual_value is not None:
            message = "manualValue must be a non-negative amount"
            manual_value = _amount(manual_value, "manualValue", message)
            if not manual_value.is_finite() or manual_value < ZERO:
                raise ValidationError(message, field="manualValue")
            params = {"manualValue": format_money(manual_value, CURRENCY_DECIMAL_PLACES)}
        return PoolSummaryResponse.model_validate(await self._get_json("/api/stats/pool", params))
