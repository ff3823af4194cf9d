# tests/schemas/test_trade_schemas.py
"""
Tests for the API schemas: camelCase wire format, trade type aliases,
Decimal handling and request validation.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from tradetracker.models import TradeType
from tradetracker.schemas.items import ItemCreate
from tradetracker.schemas.stats import DailyFlowResponse
from tradetracker.schemas.trades import SellTradeCreate, TradeCreate, TradeResponse
from tradetracker.services.types import DailyFlow


class TestTradeCreate:
    """Tests for the trade request body."""

    def test_camel_case_body(self):
        """The wire format is camelCase with 'type' for the direction."""
        payload = TradeCreate.model_validate({
            "nameId": 1001,
            "type": "BUY",
            "unitPrice": "2.5",
            "quantity": 10,
        })

        assert payload.name_id == 1001
        assert payload.trade_type == TradeType.BUY
        assert payload.unit_price == Decimal("2.5")

    def test_trade_type_alias(self):
        """'tradeType' is accepted as well."""
        payload = TradeCreate.model_validate({
            "nameId": 1, "tradeType": "SELL", "unitPrice": "1", "quantity": 1,
        })
        assert payload.trade_type == TradeType.SELL

    def test_snake_case_accepted(self):
        """Python callers can use field names."""
        payload = TradeCreate(name_id=1, trade_type=TradeType.BUY, unit_price=Decimal("1"), quantity=1)
        assert payload.quantity == 1

    def test_price_string_keeps_precision(self):
        """A price string is never routed through float."""
        payload = SellTradeCreate.model_validate({"nameId": 1, "unitPrice": "0.1234", "quantity": 1})
        assert payload.unit_price == Decimal("0.1234")

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_nonpositive_quantity_rejected(self, quantity):
        """quantity must be > 0."""
        with pytest.raises(ValidationError):
            SellTradeCreate.model_validate({"nameId": 1, "unitPrice": "1", "quantity": quantity})

    def test_negative_price_rejected(self):
        """unitPrice must be >= 0."""
        with pytest.raises(ValidationError):
            SellTradeCreate.model_validate({"nameId": 1, "unitPrice": "-0.01", "quantity": 1})

    def test_too_many_decimals_rejected(self):
        """Prices carry at most 4 fractional digits."""
        with pytest.raises(ValidationError):
            SellTradeCreate.model_validate({"nameId": 1, "unitPrice": "1.23456", "quantity": 1})

    def test_unknown_type_rejected(self):
        """Only BUY and SELL exist."""
        with pytest.raises(ValidationError):
            TradeCreate.model_validate({"nameId": 1, "type": "HOLD", "unitPrice": "1", "quantity": 1})

    def test_blank_platform_becomes_none(self):
        """Whitespace-only optional text is dropped."""
        payload = SellTradeCreate.model_validate({
            "nameId": 1, "unitPrice": "1", "quantity": 1, "platform": "   ",
        })
        assert payload.platform is None


class TestTradeResponse:
    """Tests for trade serialization."""

    def _response(self, created_at: datetime) -> TradeResponse:
        return TradeResponse(
            id=1,
            name_id=1001,
            trade_type=TradeType.SELL,
            unit_price=Decimal("4.0000"),
            quantity=5,
            total_amount=Decimal("20.0000"),
            created_at=created_at,
        )

    def test_serializes_camel_case_with_type(self):
        """Output keys are camelCase and money is a string."""
        body = self._response(datetime(2024, 1, 1, tzinfo=timezone.utc)).model_dump(mode="json", by_alias=True)

        assert body["type"] == "SELL"
        assert body["nameId"] == 1001
        assert body["unitPrice"] == "4.0000"
        assert body["totalAmount"] == "20.0000"

    def test_naive_created_at_is_utc(self):
        """SQLite hands back naive datetimes; they are UTC."""
        response = self._response(datetime(2024, 1, 1, 12))
        assert response.created_at == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    def test_offset_created_at_converted(self):
        """Aware datetimes are normalized to UTC."""
        response = self._response(datetime(2024, 1, 1, 14, tzinfo=timezone(timedelta(hours=2))))
        assert response.created_at.utcoffset() == timedelta(0)
        assert response.created_at.hour == 12

    def test_round_trip_from_json(self):
        """The client parses what the server emits."""
        body = self._response(datetime(2024, 1, 1, tzinfo=timezone.utc)).model_dump(mode="json", by_alias=True)
        parsed = TradeResponse.model_validate(body)

        assert parsed.trade_type == TradeType.SELL
        assert parsed.unit_price == Decimal("4")


class TestOtherSchemas:
    """Tests for item and stats schemas."""

    def test_item_create_strips_hash_name(self):
        """Surrounding whitespace is removed from marketHashName."""
        payload = ItemCreate.model_validate({
            "marketHashName": "  AK-47 | Redline  ",
            "enName": "AK-47 | Redline",
            "cnName": "AK-47 | 红线",
            "nameId": 1,
        })
        assert payload.market_hash_name == "AK-47 | Redline"

    def test_item_create_blank_hash_name_rejected(self):
        """A blank marketHashName is invalid."""
        with pytest.raises(ValidationError):
            ItemCreate.model_validate({"marketHashName": "   ", "enName": "x", "cnName": "y", "nameId": 1})

    def test_daily_flow_from_dataclass(self):
        """Responses are built straight from calculator dataclasses."""
        flow = DailyFlow(day=date(2024, 1, 1), total_buy=Decimal("20.00"), total_sell=Decimal("8.00"), net=Decimal("-12.00"))
        body = DailyFlowResponse.model_validate(flow).model_dump(mode="json", by_alias=True)

        assert body == {"day": "2024-01-01", "totalBuy": "20.00", "totalSell": "8.00", "net": "-12.00"}
