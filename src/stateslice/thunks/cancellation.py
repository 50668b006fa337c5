"""Cancellation token observable from inside a payload creator.

Usage:
    async def fetch(arg, api):
        async with httpx.AsyncClient() as client:
            response = await client.get(url)
        api.cancellation_token.raise_if_cancelled()
        return response.json()
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class AbortError(Exception):
    """Raised by `raise_if_cancelled()` once the token was cancelled."""

    pass


class CancellationToken:
    """One-shot cancellation flag with an optional reason.

    Cancelling is idempotent: only the first reason is kept and callbacks run once.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None
        self._callbacks: list[Callable[[str | None], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Trigger cancellation and notify registered callbacks."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(reason)

    def add_callback(self, callback: Callable[[str | None], None]) -> None:
        """Run `callback(reason)` on cancellation (immediately if already cancelled)."""
        if self._event.is_set():
            callback(self._reason)
        else:
            self._callbacks.append(callback)

    async def wait(self) -> str | None:
        """Suspend until cancelled; returns the reason."""
        await self._event.wait()
        return self._reason

    def raise_if_cancelled(self) -> None:
        """Raise AbortError if cancellation was requested."""
        if self._event.is_set():
            raise AbortError(self._reason or "Aborted")
