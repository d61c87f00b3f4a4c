"""Shared pytest fixtures for widget controller tests."""

from collections.abc import Generator

import pytest
import structlog

from a11y_widgets.adapters.memory_host import (
    ManualPaintSignal,
    ManualTimer,
    MemoryDocument,
    MemoryMediaQuery,
)
from a11y_widgets.core.logging import clear_contextvars

# Configure pytest-asyncio for the asyncio adapter tests
pytest_plugins = ["pytest_asyncio"]


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Give every test default structlog settings and an empty context."""
    structlog.reset_defaults()
    clear_contextvars()
    yield
    clear_contextvars()


@pytest.fixture
def document() -> MemoryDocument:
    """Provide an in-memory document with an application root.

    Returns:
        MemoryDocument: Lenient document; stale focus targets return False.
    """
    return MemoryDocument()


@pytest.fixture
def timer() -> ManualTimer:
    """Provide a timer driven by a virtual clock.

    Example:
        def test_rotation(timer):
            ...
            timer.advance(5000)  # fires every callback due within 5s
    """
    return ManualTimer()


@pytest.fixture
def paint() -> ManualPaintSignal:
    """Provide a paint signal committed by calling paint.commit()."""
    return ManualPaintSignal()


@pytest.fixture
def media() -> MemoryMediaQuery:
    """Provide a reduced-motion signal that starts inactive."""
    return MemoryMediaQuery(matches=False)


@pytest.fixture
def reduced_media() -> MemoryMediaQuery:
    """Provide a reduced-motion signal that starts active."""
    return MemoryMediaQuery(matches=True)
