# tradetracker/utils/context.py
"""
Request context management.

Holds the correlation ID of the request being served in a ContextVar so
that log records emitted anywhere during the request (routers, services,
the ledger) can be tied back to it. ContextVars propagate through
async/await and into FastAPI's threadpool for sync endpoints.

Usage:
    from tradetracker.utils.context import get_correlation_id, set_correlation_id

    # In middleware
    set_correlation_id("abc-123")

    # Anywhere downstream
    correlation_id = get_correlation_id()  # "abc-123"
"""

from contextvars import ContextVar

# =============================================================================
# CONTEXT VARIABLES
# =============================================================================

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """Return the current request's correlation ID, or None outside a request."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current request.

    Called by CorrelationIdMiddleware at the start of each request.
    """
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID once the request has completed."""
    _correlation_id_var.set(None)
