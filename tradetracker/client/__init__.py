# tradetracker/client/__init__.py
"""
Python client for the trade tracker API.

- TrackerClient: async httpx client, one coroutine per endpoint
- SequencedSearch: debounced search that discards stale responses
- TransportError / ValidationError / FormatError: client error taxonomy

Usage:
    from tradetracker.client import TrackerClient, SequencedSearch
"""

from tradetracker.client.api import TrackerClient
from tradetracker.client.exceptions import (
    FormatError,
    InsufficientInventoryError,
    TransportError,
    ValidationError,
)
from tradetracker.client.search import SequencedSearch

__all__ = [
    "TrackerClient",
    "SequencedSearch",
    "TransportError",
    "ValidationError",
    "InsufficientInventoryError",
    "FormatError",
]
