"""At-most-one-pending scheduling slots.

A slot wraps a host scheduler (Timer or PaintCommitSignal) so that each
controller owns at most one pending callback of each kind. Arming a slot
cancels whatever it already had pending before scheduling the new callback,
which keeps overlapping advance callbacks or duplicate focus transfers from
ever existing.
"""

from collections.abc import Callable

from a11y_widgets.core.logging import get_logger
from a11y_widgets.ports.host import Handle, PaintCommitSignal, Timer

logger = get_logger(__name__)


class ScheduledSlot:
    """Holds at most one pending callback on a host scheduler."""

    def __init__(
        self,
        name: str,
        schedule: Callable[[Callable[[], None]], Handle],
        cancel: Callable[[Handle], None],
    ) -> None:
        """Initialize the slot.

        Args:
            name: Label used in log entries.
            schedule: Schedules a callback and returns its handle.
            cancel: Cancels a handle returned by schedule.
        """
        self._name = name
        self._schedule = schedule
        self._cancel = cancel
        self._handle: Handle | None = None

    @property
    def pending(self) -> bool:
        """Whether a callback is scheduled and has not fired yet."""
        return self._handle is not None

    def arm(self, callback: Callable[[], None]) -> None:
        """Cancel any pending callback, then schedule this one."""
        self.cancel()

        def fire() -> None:
            # Cleared before running so the callback can re-arm the slot
            self._handle = None
            callback()

        self._handle = self._schedule(fire)
        logger.debug("slot_armed", slot=self._name)

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        self._cancel(handle)
        logger.debug("slot_cancelled", slot=self._name)


def timer_slot(timer: Timer, interval_ms: Callable[[], int]) -> ScheduledSlot:
    """Create a slot that schedules on a Timer.

    Args:
        timer: Host timer.
        interval_ms: Returns the interval to use each time the slot is armed.
    """
    return ScheduledSlot(
        "timer",
        lambda callback: timer.schedule(interval_ms(), callback),
        timer.cancel,
    )


def paint_slot(signal: PaintCommitSignal) -> ScheduledSlot:
    """Create a slot that waits for the next paint commit."""
    return ScheduledSlot("paint", signal.after_next_paint, signal.cancel)
