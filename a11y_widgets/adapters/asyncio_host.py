"""Asyncio-backed scheduling for hosts that run an asyncio event loop.

Example:
    async def main() -> None:
        timer = AsyncioTimer()
        carousel = CarouselController(count=3, timer=timer, media=media)
        await asyncio.sleep(15)  # three automatic advances
        carousel.dispose()
"""

import asyncio
from collections.abc import Callable


class AsyncioTimer:
    """Timer protocol implementation using loop.call_later."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the timer.

        Args:
            loop: Event loop to schedule on. Defaults to the running loop at
                the time of each schedule() call.
        """
        self._loop = loop

    def schedule(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(interval_ms / 1000, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class AsyncioPaintSignal:
    """PaintCommitSignal approximated by the next loop iteration.

    Hosts that render synchronously inside the current callback have
    committed their output by the time call_soon callbacks run.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def after_next_paint(self, callback: Callable[[], None]) -> asyncio.Handle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_soon(callback)

    def cancel(self, handle: asyncio.Handle) -> None:
        handle.cancel()
