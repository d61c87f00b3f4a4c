"""Host capability protocols for widget controllers.

This module defines the interfaces (Protocols) a rendering host provides to
the controllers. Implementations can wrap a browser DOM bridge, a terminal UI,
a desktop toolkit, or the in-memory host used in tests.
All types are toolkit-agnostic (no DOM, Qt, Tk or other rendering types).
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

# Element references are opaque to the controllers. They are compared with ==,
# so hosts may pass plain ids, and back-references are held weakly when the
# handle allows it.
ElementRef = Any

# Handles returned by Timer/PaintCommitSignal are opaque tokens.
Handle = Any

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class ItemDescriptor:
    """Represents one item of a host-provided ordered sequence.

    Controllers never read or mutate the payload; they only index into the
    sequence the descriptors belong to.

    Attributes:
        id: Stable identity of the item.
        title: Human-readable title, used by hosts for labels.
        payload: Opaque host data (href, image, meta...).
    """

    id: str
    title: str
    payload: Mapping[str, Any] = field(default_factory=dict)


# =============================================================================
# Focus Protocols
# =============================================================================


class FocusSink(Protocol):
    """Protocol for moving input focus."""

    def focus(self, target: ElementRef) -> bool:
        """Attempt to move input focus to the referenced element.

        Args:
            target: The element to focus.

        Returns:
            True if focus moved, False if the reference is stale, detached
            or not focusable (the call is then a no-op).

        Raises:
            StaleTargetError: Implementations may raise instead of returning
                False. Controllers absorb it.
        """
        ...


class FocusQuery(Protocol):
    """Protocol for reading the current focus owner."""

    def currently_focused(self) -> ElementRef | None:
        """Return the element that currently owns focus, if any."""
        ...


class InertToggle(Protocol):
    """Protocol for marking a region non-interactive.

    Only ever applied to a host-designated application root, never to the
    whole document.
    """

    def set_inert(self, root: ElementRef, inert: bool) -> None:
        """Mark or unmark a root as inert.

        Args:
            root: The host-designated background root.
            inert: True to make the region non-interactive.

        Raises:
            InertTargetError: If the root no longer exists. Controllers
                absorb it.
        """
        ...


class FocusableQuery(Protocol):
    """Callable returning the ordered focusable descendants of a surface."""

    def __call__(self, surface: ElementRef) -> list[ElementRef]: ...


class LiveAnnouncer(Protocol):
    """Callable that speaks a message through a polite live region."""

    def __call__(self, message: str) -> None: ...


# =============================================================================
# Scheduling Protocols
# =============================================================================


class Timer(Protocol):
    """Protocol for single-shot timers.

    Repetition is produced by the caller re-arming after each fire.
    """

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> Handle:
        """Schedule a callback to run once after interval_ms milliseconds."""
        ...

    def cancel(self, handle: Handle) -> None:
        """Cancel a pending callback. Unknown or fired handles are ignored."""
        ...


class PaintCommitSignal(Protocol):
    """Protocol for running a callback once the next render has committed."""

    def after_next_paint(self, callback: Callable[[], None]) -> Handle:
        """Run a callback once, after the pending state is visible."""
        ...

    def cancel(self, handle: Handle) -> None:
        """Cancel a pending paint callback."""
        ...


class MediaQuerySignal(Protocol):
    """Protocol for the reduced-motion preference.

    Delivers the initial value through matches() and later changes to
    subscribed listeners.
    """

    def matches(self) -> bool:
        """Return whether the preference is currently active."""
        ...

    def subscribe(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener.
        """
        ...
