"""Tests for at-most-one-pending scheduling slots."""

from a11y_widgets.adapters.memory_host import ManualPaintSignal, ManualTimer
from a11y_widgets.core.scheduling import ScheduledSlot, paint_slot, timer_slot


class TestScheduledSlot:
    """Tests for ScheduledSlot class."""

    def test_arm_schedules_once(self):
        """Arming should schedule exactly one callback."""
        timer = ManualTimer()
        slot = timer_slot(timer, lambda: 100)
        slot.arm(lambda: None)
        assert slot.pending
        assert timer.pending_count == 1

    def test_rearm_cancels_previous(self):
        """Arming twice should leave only the newer callback pending."""
        timer = ManualTimer()
        fired: list[str] = []
        slot = timer_slot(timer, lambda: 100)

        slot.arm(lambda: fired.append("old"))
        slot.arm(lambda: fired.append("new"))
        timer.advance(100)

        assert fired == ["new"]
        assert timer.max_pending == 1

    def test_fire_clears_pending_before_callback(self):
        """The callback should be able to re-arm its own slot."""
        timer = ManualTimer()
        slot = timer_slot(timer, lambda: 10)
        observed: list[bool] = []

        def callback() -> None:
            observed.append(slot.pending)
            if len(observed) < 3:
                slot.arm(callback)

        slot.arm(callback)
        timer.advance(100)

        assert observed == [False, False, False]
        assert not slot.pending

    def test_cancel_without_pending_is_noop(self):
        """Cancelling an empty slot should not call the scheduler."""
        cancelled: list[object] = []
        slot = ScheduledSlot("test", lambda callback: "handle", cancelled.append)
        slot.cancel()
        assert cancelled == []

    def test_cancel_passes_handle(self):
        """Cancel should hand the scheduler's handle back to it."""
        cancelled: list[object] = []
        slot = ScheduledSlot("test", lambda callback: "handle-1", cancelled.append)
        slot.arm(lambda: None)
        slot.cancel()
        assert cancelled == ["handle-1"]
        assert not slot.pending

    def test_interval_read_on_each_arm(self):
        """Timer slots should use the current interval every time they arm."""
        timer = ManualTimer()
        interval = {"ms": 100}
        slot = timer_slot(timer, lambda: interval["ms"])

        slot.arm(lambda: None)
        interval["ms"] = 250
        slot.arm(lambda: None)

        assert timer.scheduled_intervals == [100, 250]


class TestPaintSlot:
    """Tests for paint_slot factory."""

    def test_fires_on_commit(self):
        """Callback should run only when the paint commits."""
        paint = ManualPaintSignal()
        fired: list[bool] = []
        slot = paint_slot(paint)

        slot.arm(lambda: fired.append(True))
        assert fired == []

        paint.commit()
        assert fired == [True]
        assert not slot.pending

    def test_cancelled_callback_never_fires(self):
        """A cancelled paint callback should be dropped."""
        paint = ManualPaintSignal()
        fired: list[bool] = []
        slot = paint_slot(paint)

        slot.arm(lambda: fired.append(True))
        slot.cancel()
        paint.commit()

        assert fired == []
