"""Single-slot hand-off from board taps to the move source awaiting them."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .game.board import Position


LOG = logging.getLogger("beckers.relay")


class TapRelay:
    """Point-to-point tap channel with exactly one pending waiter at a time.

    A tap published while nobody is waiting is dropped; there is no buffer.
    Taps coming from another thread (a UI event loop, a stdin reader) must go
    through :meth:`publish_threadsafe`.
    """

    def __init__(self) -> None:
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._waiter: Optional[asyncio.Future] = None

    @property
    def has_waiter(self) -> bool:
        return self._waiter is not None and not self._waiter.done()

    async def next_tap(self) -> Position:
        if self.has_waiter:
            raise RuntimeError("another task is already waiting for a tap")

        loop = asyncio.get_running_loop()
        self._loop = loop
        waiter: asyncio.Future = loop.create_future()
        self._waiter = waiter
        try:
            return await waiter
        finally:
            if self._waiter is waiter:
                self._waiter = None

    def publish(self, position: Position) -> bool:
        # Must run on the relay's loop thread
        waiter = self._waiter
        if waiter is None or waiter.done():
            LOG.debug("Dropping tap at %s: nobody is waiting", position)
            return False
        self._waiter = None
        waiter.set_result(position)
        return True

    def publish_threadsafe(self, position: Position) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            self.publish(position)
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self.publish(position)
        else:
            loop.call_soon_threadsafe(self.publish, position)
