"""Search-as-you-type helpers for a cooperative asyncio event loop.

- :class:`Debouncer` — every ``trigger()`` cancels a call still waiting and
  restarts the delay, so only the last value after a pause is dispatched.
- :class:`LatestGuard` — superseded lookups are not cancelled, their results
  are simply dropped (last-write-wins).

Examples:
    >>> guard = LatestGuard()
    >>> first = guard.issue()
    >>> second = guard.issue()
    >>> guard.is_current(first), guard.is_current(second)
    (False, True)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from termdict.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3


class LatestGuard:
    """Monotonic token issuer; only the newest token is current."""

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


class Debouncer:
    """Delay a callback until input has been quiet for *delay* seconds.

    Only a dispatch still waiting out its delay is cancelled by a new
    ``trigger()``. A callback already running is left to finish; its result
    is dropped (the task returns ``None``) if a newer value was triggered in
    the meantime.

    Parameters:
        callback: Async callable invoked with the last triggered value.
        delay: Quiet period in seconds.
    """

    def __init__(
        self,
        callback: Callable[[Any], Awaitable[Any]],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._callback = callback
        self._delay = delay
        self._guard = LatestGuard()
        self._pending: asyncio.Task[Any] | None = None
        self._waiting: asyncio.Task[Any] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def trigger(self, value: Any) -> asyncio.Task[Any]:
        """Cancel a dispatch still in its delay and schedule *value*."""
        self.cancel()
        token = self._guard.issue()
        self._pending = asyncio.get_running_loop().create_task(self._fire(value, token))
        self._waiting = self._pending
        return self._pending

    def cancel(self) -> None:
        if self._waiting is not None and not self._waiting.done():
            self._waiting.cancel()
        self._waiting = None

    async def _fire(self, value: Any, token: int) -> Any:
        await asyncio.sleep(self._delay)
        if self._waiting is asyncio.current_task():
            self._waiting = None

        logger.debug("debounce_fired", value=value)
        result = await self._callback(value)
        if not self._guard.is_current(token):
            logger.debug("debounce_result_superseded", value=value)
            return None
        return result


__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "Debouncer",
    "LatestGuard",
]
