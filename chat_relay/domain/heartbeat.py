"""Typing indicator kept alive while the backend call is outstanding."""

import asyncio
from typing import Awaitable, Callable, Optional

from chat_relay import log

TYPING_INTERVAL_SECONDS = 8.0


class TypingHeartbeat:
    """Periodic "still working" signal bound to one backend call.

    Use as ``async with TypingHeartbeat(send):`` so the task is cancelled and
    awaited on every exit path. ``stop()`` is idempotent and safe before ``start()``.
    """

    def __init__(
        self,
        send_typing: Callable[[], Awaitable[None]],
        interval: float = TYPING_INTERVAL_SECONDS,
    ):
        self._send_typing = send_typing
        self._interval = interval
        self._task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _pulse(self):
        try:
            await self._send_typing()
        except Exception as e:
            log.debug(f"typing signal failed: {e}")

    async def _loop(self):
        while not self._stopped:
            await asyncio.sleep(self._interval)
            if self._stopped:
                return
            await self._pulse()

    async def start(self) -> "TypingHeartbeat":
        if self._stopped or self._task is not None:
            return self
        await self._pulse()
        if not self._stopped:
            self._task = asyncio.create_task(self._loop())
        return self

    def stop(self):
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def aclose(self):
        """Stop and wait for the loop task to finish."""
        self.stop()
        if self._task is not None:
            await asyncio.wait([self._task])

    async def __aenter__(self) -> "TypingHeartbeat":
        try:
            return await self.start()
        except BaseException:
            await self.aclose()
            raise

    async def __aexit__(self, *exc_info):
        await self.aclose()
        return False
