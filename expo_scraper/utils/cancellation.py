"""Cooperative cancellation for long-running sessions."""

from __future__ import annotations

import asyncio

from expo_scraper.errors import SessionCancelled


class CancellationToken:
    """Set once by the owner of a session; checked at every wait and delay.

    ``sleep`` wakes early when the token fires, so a cancelled session does not
    sit out its rate-limit or settle delays.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SessionCancelled()

    async def sleep(self, seconds: float) -> None:
        self.raise_if_cancelled()
        if seconds <= 0:
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        raise SessionCancelled()
