# tests/test_correlation_id.py
"""
Tests for correlation ID middleware and context management.
"""

import uuid

from tradetracker.utils.context import clear_correlation_id, get_correlation_id, set_correlation_id


class TestCorrelationIdContext:
    """Tests for correlation ID context functions."""

    def test_get_returns_none_when_not_set(self):
        """Should return None when correlation ID is not set."""
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_set_and_get_correlation_id(self):
        """Should set and retrieve correlation ID."""
        set_correlation_id("trade-entry-42")
        assert get_correlation_id() == "trade-entry-42"
        clear_correlation_id()

    def test_clear_correlation_id(self):
        """Should clear correlation ID."""
        set_correlation_id("trade-entry-43")
        clear_correlation_id()
        assert get_correlation_id() is None


class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    def test_echoes_incoming_header(self, client):
        """A supplied X-Correlation-ID is returned unchanged."""
        response = client.get("/health/live", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_falls_back_to_request_id(self, client):
        """X-Request-ID is used when no correlation ID is sent."""
        response = client.get("/health/live", headers={"X-Request-ID": "req-9"})

        assert response.headers["X-Correlation-ID"] == "req-9"

    def test_generates_uuid(self, client):
        """Without either header a UUID4 is generated."""
        response = client.get("/health/live")

        assert uuid.UUID(response.headers["X-Correlation-ID"]).version == 4

    def test_present_on_error_responses(self, client):
        """Handled errors carry the header too."""
        response = client.get("/api/trades/history/5", headers={"X-Correlation-ID": "err-1"})

        assert response.status_code == 404
        assert response.headers["X-Correlation-ID"] == "err-1"

    def test_cleared_after_request(self, client):
        """The context does not leak past the request."""
        client.get("/health/live", headers={"X-Correlation-ID": "leak-check"})

        assert get_correlation_id() is None
