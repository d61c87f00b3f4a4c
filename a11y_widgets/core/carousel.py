"""Carousel rotation logic - toolkit agnostic.

The controller drives a wrapping active index over a fixed item set. While
playing, a single-shot timer advances the index and is re-armed after each
advance. Rotation stops for manual navigation, keyboard focus entering the
region, the pause control, and the reduced-motion preference.

Every change to what the timer depends on (playing, autoplay_enabled,
reduced_motion, interval_ms, count) goes through one reconciliation step:
cancel the current timer, then arm at most one new timer. At no point do two
ticks exist for one controller.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from a11y_widgets.core.config import CarouselConfig
from a11y_widgets.core.errors import ConfigurationError
from a11y_widgets.core.logging import get_logger
from a11y_widgets.core.scheduling import timer_slot
from a11y_widgets.ports.host import LiveAnnouncer, MediaQuerySignal, Timer

logger = get_logger(__name__)


class LivePoliteness(Enum):
    """aria-live value the host renders on the slide container."""

    OFF = "off"
    POLITE = "polite"


@dataclass(frozen=True)
class CarouselState:
    """Snapshot of a carousel for rendering."""

    active_index: int
    playing: bool
    count: int
    reduced_motion: bool
    autoplay_enabled: bool
    interval_ms: int
    timer_armed: bool

    @property
    def live(self) -> LivePoliteness:
        # Announcing every automatic advance would flood screen readers
        return LivePoliteness.OFF if self.playing else LivePoliteness.POLITE


class CarouselController:
    """Controls carousel navigation, auto-rotation and announcements.

    Example:
        carousel = CarouselController(
            count=3,
            timer=timer,
            media=reduced_motion_signal,
            announce=live_region.say,
        )
        carousel.go_next()  # pauses rotation, announces "Slide 2 of 3"
    """

    def __init__(
        self,
        count: int,
        timer: Timer,
        media: MediaQuerySignal,
        config: CarouselConfig | None = None,
        announce: LiveAnnouncer | None = None,
    ) -> None:
        """Initialize the controller.

        Starts paused if the reduced-motion preference is active, playing
        otherwise (when autoplay is enabled).

        Args:
            count: Number of slides.
            timer: Host timer used for auto-advance.
            media: Reduced-motion preference signal.
            config: Rotation settings. Defaults to CarouselConfig().
            announce: Receives slide-change messages while paused.

        Raises:
            ConfigurationError: If count is negative.
        """
        if count < 0:
            raise ConfigurationError(f"count must be >= 0, got {count}", field="count")
        config = config or CarouselConfig()

        self._count = count
        self._active_index = 0
        self._autoplay_enabled = config.autoplay_enabled
        self._interval_ms = config.interval_ms
        self._reduced_motion = media.matches()
        self._playing = self._autoplay_enabled and not self._reduced_motion
        self._announce = announce
        self._disposed = False
        self._timer = timer_slot(timer, lambda: self._interval_ms)
        self._unsubscribe: Callable[[], None] = media.subscribe(
            self.on_reduced_motion_change
        )

        logger.debug(
            "carousel_created",
            count=count,
            playing=self._playing,
            reduced_motion=self._reduced_motion,
        )
        self._reconcile()

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def active_index(self) -> int:
        return self._active_index

    def state(self) -> CarouselState:
        """Return a snapshot of the carousel."""
        return CarouselState(
            active_index=self._active_index,
            playing=self._playing,
            count=self._count,
            reduced_motion=self._reduced_motion,
            autoplay_enabled=self._autoplay_enabled,
            interval_ms=self._interval_ms,
            timer_armed=self._timer.pending,
        )

    # -- timer ---------------------------------------------------------------

    def tick(self) -> None:
        """Advance one slide. Invoked by the owned timer."""
        if not self._timer_should_run():
            logger.debug(
                "carousel_tick_ignored", playing=self._playing, count=self._count
            )
            return
        self._active_index = (self._active_index + 1) % self._count
        logger.debug("carousel_advanced", active_index=self._active_index)
        self._reconcile()

    # -- navigation ----------------------------------------------------------

    def go_to(self, index: int) -> None:
        """Show a slide by index, wrapping out-of-range values. Pauses rotation."""
        if self._count == 0:
            logger.debug("carousel_navigation_ignored", reason="empty")
            return
        self._set_playing(False, reason="navigation")
        self._show(((index % self._count) + self._count) % self._count)

    def go_next(self) -> None:
        """Show the following slide, wrapping to the first. Pauses rotation."""
        self.go_to(self._active_index + 1)

    def go_prev(self) -> None:
        """Show the preceding slide, wrapping to the last. Pauses rotation."""
        self.go_to(self._active_index - 1)

    # -- rotation control ----------------------------------------------------

    def pause(self) -> None:
        """Stop rotation."""
        self._set_playing(False, reason="pause")

    def toggle_play(self) -> None:
        """Flip between playing and paused.

        Choosing Play is an explicit user override: it clears the sticky
        reduced-motion suppression so rotation actually starts.
        """
        if self._playing:
            self._set_playing(False, reason="toggle")
            return
        if self._reduced_motion:
            logger.info("carousel_reduced_motion_overridden")
            self._reduced_motion = False
        self._set_playing(True, reason="toggle")

    def on_focus_enter(
        self,
        from_pointer: bool = False,
        on_rotation_control: bool = False,
    ) -> None:
        """Handle focus entering the carousel region.

        Pointer activation of the rotation control also moves focus into the
        region; that path is toggle_play() and must not pause here, or
        pressing Play would immediately pause again.

        Args:
            from_pointer: Focus came from a pointer press rather than keyboard.
            on_rotation_control: The focused element is the pause/play control.
        """
        if from_pointer and on_rotation_control:
            return
        self._set_playing(False, reason="focus")

    def on_reduced_motion_change(self, matches: bool) -> None:
        """Apply a reduced-motion preference change.

        Turning the preference on forces a pause. Turning it off does not
        resume rotation and leaves the suppression in place until the user
        presses Play.
        """
        if not matches:
            logger.debug("carousel_reduced_motion_released", playing=self._playing)
            return
        self._reduced_motion = True
        self._set_playing(False, reason="reduced_motion")

    # -- reconciliation inputs -----------------------------------------------

    def set_count(self, count: int) -> None:
        """Adopt a new slide count, clamping the active index.

        Raises:
            ConfigurationError: If count is negative.
        """
        if count < 0:
            raise ConfigurationError(f"count must be >= 0, got {count}", field="count")
        self._count = count
        self._active_index = min(self._active_index, max(count - 1, 0))
        self._reconcile()

    def set_interval(self, interval_ms: int) -> None:
        """Change the auto-advance interval. A running countdown restarts.

        Raises:
            ConfigurationError: If interval_ms is not positive.
        """
        if interval_ms <= 0:
            raise ConfigurationError(
                f"interval_ms must be > 0, got {interval_ms}", field="interval_ms"
            )
        self._interval_ms = interval_ms
        self._reconcile()

    def set_autoplay_enabled(self, enabled: bool) -> None:
        self._autoplay_enabled = enabled
        self._reconcile()

    def dispose(self) -> None:
        """Cancel the timer and stop listening for preference changes.

        Later calls still update state but never arm the timer again.
        """
        self._disposed = True
        self._timer.cancel()
        unsubscribe, self._unsubscribe = self._unsubscribe, _noop
        unsubscribe()

    # -- internals -----------------------------------------------------------

    def _timer_should_run(self) -> bool:
        return (
            not self._disposed
            and self._playing
            and self._autoplay_enabled
            and not self._reduced_motion
            and self._count > 0
        )

    def _reconcile(self) -> None:
        self._timer.cancel()
        if self._timer_should_run():
            self._timer.arm(self.tick)

    def _set_playing(self, playing: bool, reason: str) -> None:
        if playing != self._playing:
            self._playing = playing
            logger.debug(
                "carousel_playing" if playing else "carousel_paused",
                reason=reason,
            )
        self._reconcile()

    def _show(self, index: int) -> None:
        if index == self._active_index:
            return
        self._active_index = index
        if self._announce is not None and not self._playing:
            self._announce(f"Slide {index + 1} of {self._count}")


def _noop() -> None:
    return None
