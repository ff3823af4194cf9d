# tradetracker/client/search.py
"""
Debounced, sequenced item search for interactive input.

Keystrokes are debounced on the trailing edge: each submit() cancels the
pending timer and starts a new one, so only the last keystroke of a burst
triggers a request. Requests already in flight are not cancelled; instead
every dispatched request takes the next sequence number and a response is
delivered only if its number is still the latest issued. A slow response
to an old keyword can therefore never overwrite the results of a newer one.

Usage:
    search = SequencedSearch(api.search_items, on_results=render)
    search.submit("awp")
    search.submit("awp asii")   # cancels the "awp" timer
    await search.wait_idle()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from tradetracker.client.exceptions import TransportError
from tradetracker.services.constants import SEARCH_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SequencedSearch(Generic[T]):
    """
    Args:
        fetch: Coroutine function running the search for a keyword
        on_results: Called with (keyword, results) for the latest response only
        on_error: Called with the TransportError of the latest request only (a
                  response that cannot be parsed arrives wrapped as one);
                  stale failures are dropped like stale results
        delay: Debounce window in seconds
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[list[T]]],
        on_results: Callable[[str, list[T]], None],
        *,
        on_error: Callable[[TransportError], None] | None = None,
        delay: float = SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        self._fetch = fetch
        self._on_results = on_results
        self._on_error = on_error
        self._delay = delay
        self._sequence = 0
        self._timer: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def latest_sequence(self) -> int:
        """Number of the most recently dispatched request (0 before the first)."""
        return self._sequence

    def submit(self, keyword: str) -> None:
        """Register a keystroke. Must be called from a running event loop."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._spawn(self._fire_after_delay(keyword))

    async def search_now(self, keyword: str) -> list[T] | None:
        """
        Skip the debounce (e.g. on Enter).

        Returns:
            The results, or None if a newer request superseded this one
        """
        self.cancel_pending()
        return await self._dispatch(keyword)

    def cancel_pending(self) -> None:
        """Drop the pending timer; requests in flight still complete."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no request is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _spawn(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fire_after_delay(self, keyword: str) -> None:
        await asyncio.sleep(self._delay)
        # Past this point a new keystroke must not cancel the request
        self._timer = None
        await self._dispatch(keyword)

    async def _dispatch(self, keyword: str) -> list[T] | None:
        self._sequence += 1
        sequence = self._sequence

        try:
            results = await self._fetch(keyword)
        except TransportError as e:
            self._fail(keyword, sequence, e)
            return None
        except Exception as e:
            # A 2xx whose body does not parse (pydantic) or any other fetch bug
            logger.exception(f"Search for '{keyword}' raised {type(e).__name__}")
            self._fail(keyword, sequence, TransportError(None, reason=f"Unusable search response: {e}"))
            return None

        if sequence != self._sequence:
            logger.debug(f"Dropped stale search response #{sequence} for '{keyword}'")
            return None

        self._on_results(keyword, results)
        return results

    def _fail(self, keyword: str, sequence: int, error: TransportError) -> None:
        if sequence != self._sequence:
            logger.debug(f"Dropped stale search failure #{sequence} for '{keyword}'")
            return
        if self._on_error is None:
            logger.warning(f"Search for '{keyword}' failed: {error}")
        else:
            self._on_error(error)
