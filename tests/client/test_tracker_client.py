# tests/client/test_tracker_client.py
"""
Tests for the async API client.

Unit tests run against httpx.MockTransport and record every request, so
they can assert that local validation failures never reach the network.
The integration class drives the real application in-process through
httpx.ASGITransport.
"""

import json
from decimal import Decimal

import httpx
import pytest

from tradetracker.client import (
    FormatError,
    InsufficientInventoryError,
    TrackerClient,
    TransportError,
    ValidationError,
)
from tradetracker.database import get_db
from tradetracker.main import app
from tradetracker.models import TradeType
from tradetracker.services.types import ValuationMode


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, routes: dict[tuple[str, str], httpx.Response] | None = None) -> None:
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": "NotFoundError", "message": "no route", "details": None})
        return self.routes[key]


def make_client(recorder: Recorder) -> TrackerClient:
    transport = httpx.MockTransport(recorder)
    return TrackerClient(client=httpx.AsyncClient(transport=transport, base_url="http://tracker.test"))


TRADE_BODY = {
    "id": 1,
    "nameId": 1001,
    "type": "BUY",
    "unitPrice": "2.5000",
    "quantity": 10,
    "totalAmount": "25.0000",
    "platform": None,
    "counterparty": None,
    "createdAt": "2024-01-01T00:00:00Z",
    "item": None,
}


# =============================================================================
# LOCAL VALIDATION
# =============================================================================

class TestLocalValidation:
    """Invalid input is rejected before any request is sent."""

    @pytest.mark.asyncio
    async def test_zero_quantity(self):
        """quantity <= 0 never leaves the client."""
        recorder = Recorder()
        api = make_client(recorder)

        with pytest.raises(ValidationError):
            await api.create_trade(1001, TradeType.BUY, Decimal("1"), 0)

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_negative_price(self):
        """unit_price < 0 never leaves the client."""
        recorder = Recorder()
        api = make_client(recorder)

        with pytest.raises(ValidationError):
            await api.sell(1001, Decimal("-1"), 1)

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_oversell_checked_against_server_quantity(self):
        """A SELL above the reported quantity stops after the quantity lookup."""
        recorder = Recorder({
            ("GET", "/api/inventory/1001/quantity"): httpx.Response(200, json={"nameId": 1001, "quantity": 3}),
        })
        api = make_client(recorder)

        with pytest.raises(InsufficientInventoryError) as exc_info:
            await api.create_trade(1001, TradeType.SELL, Decimal("4"), 5)

        assert exc_info.value.available == 3
        assert [r.url.path for r in recorder.requests] == ["/api/inventory/1001/quantity"]

    @pytest.mark.asyncio
    async def test_inverted_range(self):
        """start after end is rejected locally."""
        from datetime import datetime, timezone

        recorder = Recorder()
        api = make_client(recorder)

        with pytest.raises(ValidationError):
            await api.daily_stats(datetime(2024, 2, 1, tzinfo=timezone.utc), datetime(2024, 1, 1, tzinfo=timezone.utc))

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_negative_manual_value(self):
        """manualValue < 0 is rejected locally."""
        api = make_client(Recorder())

        with pytest.raises(ValidationError):
            await api.pool_stats(manual_value=Decimal("-0.01"))

    @pytest.mark.asyncio
    async def test_nan_manual_value(self):
        """NaN is not an amount; it is rejected rather than crashing the comparison."""
        recorder = Recorder()
        api = make_client(recorder)

        with pytest.raises(ValidationError) as exc_info:
            await api.pool_stats(manual_value=Decimal("NaN"))

        assert exc_info.value.field == "manualValue"
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_unparseable_price_text(self):
        """A price typed as text must parse as a number before anything is sent."""
        recorder = Recorder()
        api = make_client(recorder)

        with pytest.raises(ValidationError) as exc_info:
            await api.create_trade(1001, TradeType.BUY, "2,50", 1)

        assert exc_info.value.field == "unitPrice"
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_malformed_import_text(self):
        """Unparseable documents raise FormatError and are not sent."""
        recorder = Recorder()
        api = make_client(recorder)

        with pytest.raises(FormatError):
            await api.import_items("{broken")

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_import_file_extension(self, tmp_path):
        """Only .json files are uploaded."""
        path = tmp_path / "items.csv"
        path.write_text("a,b")

        with pytest.raises(ValidationError):
            await make_client(Recorder()).import_file(path)

    @pytest.mark.asyncio
    async def test_import_file_size(self, tmp_path, monkeypatch):
        """Files above the size limit are not read or sent."""
        monkeypatch.setattr("tradetracker.client.api.MAX_IMPORT_FILE_SIZE_BYTES", 10)
        path = tmp_path / "items.json"
        path.write_text(json.dumps({"A": {"en_name": "A", "cn_name": "A", "name_id": 1}}))

        with pytest.raises(ValidationError) as exc_info:
            await make_client(Recorder()).import_file(path)

        assert str(exc_info.value).startswith("File too large")


# =============================================================================
# TRANSPORT
# =============================================================================

class TestTransport:
    """Requests, responses and transport failures."""

    @pytest.mark.asyncio
    async def test_money_sent_as_string(self):
        """Prices go over the wire as fixed-point strings."""
        recorder = Recorder({("POST", "/api/trades"): httpx.Response(201, json=TRADE_BODY)})
        api = make_client(recorder)

        trade = await api.create_trade(1001, TradeType.BUY, Decimal("2.50"), 10)

        sent = json.loads(recorder.requests[0].content)
        assert sent["unitPrice"] == "2.5000"
        assert sent["type"] == "BUY"
        assert trade.unit_price == Decimal("2.5")
        assert trade.trade_type == TradeType.BUY

    @pytest.mark.asyncio
    async def test_price_text_sent_at_four_places(self):
        """A price typed as text goes over the wire at price precision."""
        recorder = Recorder({("POST", "/api/trades"): httpx.Response(201, json=TRADE_BODY)})
        api = make_client(recorder)

        await api.create_trade(1001, TradeType.BUY, " 2.5 ", 10)

        assert json.loads(recorder.requests[0].content)["unitPrice"] == "2.5000"

    @pytest.mark.asyncio
    async def test_manual_value_sent_at_two_places(self):
        """manualValue is a summary amount and is sent with 2 places."""
        pool = {
            "totalBuyTrades": 0, "totalSellTrades": 0, "peakNetInvestment": "0.00",
            "currentHoldingValue": "40.00", "currentCostBasis": "0.00", "totalWithdrawal": "0.00",
            "realizedProfit": "0.00", "unrealizedProfit": "40.00", "totalProfit": "40.00",
            "realReturnRate": "0.00", "firstInvestmentDate": None, "lastTradeDate": None,
            "totalInvestmentDays": 0, "totalItems": 0, "currentHoldingItems": 0, "valuationMode": "MANUAL",
        }
        recorder = Recorder({("GET", "/api/stats/pool"): httpx.Response(200, json=pool)})

        await make_client(recorder).pool_stats(manual_value="40")

        assert recorder.requests[0].url.params["manualValue"] == "40.00"

    @pytest.mark.asyncio
    async def test_error_status_carries_body(self):
        """Non-2xx responses raise TransportError with the body as message."""
        body = json.dumps({"error": "ItemNotFoundError", "message": "Item with nameId 5 not found", "details": None})
        recorder = Recorder({("GET", "/api/trades/history/5"): httpx.Response(404, text=body)})

        with pytest.raises(TransportError) as exc_info:
            await make_client(recorder).trade_history(5)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == body

    @pytest.mark.asyncio
    async def test_error_without_body(self):
        """An empty error body falls back to 'HTTP <status>'."""
        recorder = Recorder({("GET", "/api/items"): httpx.Response(502)})

        with pytest.raises(TransportError) as exc_info:
            await make_client(recorder).list_items()

        assert str(exc_info.value) == "HTTP 502"

    @pytest.mark.asyncio
    async def test_network_failure(self):
        """Connection errors become TransportError without a status."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        api = TrackerClient(client=httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://x"))

        with pytest.raises(TransportError) as exc_info:
            await api.list_items()

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_preview_sell_without_position(self):
        """A 404 position reads as empty, so any preview oversells."""
        with pytest.raises(InsufficientInventoryError):
            await make_client(Recorder()).preview_sell(1001, Decimal("1"), 1)

    @pytest.mark.asyncio
    async def test_caller_keeps_injected_client_open(self):
        """aclose() only closes clients the TrackerClient created."""
        http = httpx.AsyncClient(transport=httpx.MockTransport(Recorder()), base_url="http://x")
        async with TrackerClient(client=http):
            pass

        assert not http.is_closed
        await http.aclose()


# =============================================================================
# IN-PROCESS INTEGRATION
# =============================================================================

class TestAgainstApp:
    """The client against the real application and a test database."""

    @pytest.fixture
    def api(self, db):
        def override_get_db():
            yield db

        app.dependency_overrides[get_db] = override_get_db
        transport = httpx.ASGITransport(app=app)
        yield TrackerClient(client=httpx.AsyncClient(transport=transport, base_url="http://tracker.test"))
        app.dependency_overrides.clear()

    @pytest.mark.asyncio
    async def test_worked_example(self, api, item):
        """Trades, positions, previews and the pool summary end to end."""
        await api.create_trade(item.name_id, TradeType.BUY, Decimal("2"), 10)
        await api.create_trade(item.name_id, TradeType.BUY, Decimal("5"), 5)

        preview = await api.preview_sell(item.name_id, Decimal("4"), 5)
        assert preview.profit == Decimal("5")

        await api.sell(item.name_id, Decimal("4"), 5)

        position = await api.get_inventory(item.name_id)
        assert position.current_quantity == 10
        assert position.weighted_average_cost == Decimal("3")

        with pytest.raises(InsufficientInventoryError):
            await api.sell(item.name_id, Decimal("4"), 11)

        summary = await api.pool_stats(manual_value=Decimal("40"))
        assert summary.valuation_mode == ValuationMode.MANUAL
        assert summary.total_profit == Decimal("15.00")
        assert summary.real_return_rate == Decimal("0.3333")

    @pytest.mark.asyncio
    async def test_search_and_import(self, api, item):
        """Catalog operations round trip through the API."""
        result = await api.import_items(json.dumps({"Fresh": {"en_name": "Fresh", "cn_name": "新", "name_id": 9}}))
        assert result.imported_count == 1

        found = await api.search_items("fresh")
        assert [i.name_id for i in found] == [9]
