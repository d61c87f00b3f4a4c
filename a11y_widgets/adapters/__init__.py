"""Adapters for host environments.

This module contains implementations of the host capability protocols
for headless use (tests, server-side rendering) and asyncio event loops.
"""

from a11y_widgets.adapters.asyncio_host import AsyncioPaintSignal, AsyncioTimer
from a11y_widgets.adapters.memory_host import (
    ManualPaintSignal,
    ManualTimer,
    MemoryDocument,
    MemoryElement,
    MemoryMediaQuery,
)

__all__ = [
    "AsyncioPaintSignal",
    "AsyncioTimer",
    "ManualPaintSignal",
    "ManualTimer",
    "MemoryDocument",
    "MemoryElement",
    "MemoryMediaQuery",
]
