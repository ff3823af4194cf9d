# tradetracker/client/exceptions.py
"""
Client-side error taxonomy.

- ValidationError: bad input caught before any request is sent
  (nonpositive quantity, negative price, oversell, inverted date range)
- TransportError: non-2xx response or network failure
- FormatError: an import document that does not parse locally

ValidationError and FormatError are the service-layer classes, so code
that calls the services directly and code that goes through the client
handle the same exceptions.
"""

from tradetracker.services.exceptions import (
    FormatError,
    InsufficientInventoryError,
    ValidationError,
)


class TransportError(Exception):
    """
    A request that did not come back 2xx.

    Attributes:
        status_code: HTTP status, or None when no response was received
        body: Raw response body text (empty for network failures)
        message: body if there was one, else "HTTP <status>" or the network error
    """

    def __init__(self, status_code: int | None, body: str = "", reason: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        if body.strip():
            self.message = body
        elif status_code is not None:
            self.message = f"HTTP {status_code}"
        else:
            self.message = reason or "Network error"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


__all__ = [
    "TransportError",
    "ValidationError",
    "InsufficientInventoryError",
    "FormatError",
]
