"""Modal dialog focus logic - toolkit agnostic.

While the dialog is open the controller keeps focus inside the dialog
surface, marks the background root inert, and remembers which element
opened the dialog so focus can go back there on close. Element references
are held weakly; the host owns the elements.
"""

import weakref
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from a11y_widgets.core.config import ModalConfig
from a11y_widgets.core.errors import absorb_host_errors
from a11y_widgets.core.logging import get_logger
from a11y_widgets.ports.host import (
    ElementRef,
    FocusableQuery,
    FocusQuery,
    FocusSink,
    InertToggle,
)

logger = get_logger(__name__)

BackRef = Callable[[], Any]


class _StrongRef:
    """Back-reference for element handles that cannot be weakly referenced."""

    __slots__ = ("_target",)

    def __init__(self, target: Any) -> None:
        self._target = target

    def __call__(self) -> Any:
        return self._target


def _back_ref(element: ElementRef) -> BackRef:
    try:
        return weakref.ref(element)
    except TypeError:
        # ints, strings and tuples used as element ids
        return _StrongRef(element)


@dataclass
class DialogState:
    """Per-open bookkeeping. Replaced with a fresh instance on close."""

    open: bool = False
    captured_opener: BackRef | None = None
    trap_boundary: tuple[BackRef, ...] = ()
    inert_target: ElementRef | None = None


@dataclass(frozen=True)
class ModalState:
    """Snapshot of a modal dialog for rendering."""

    open: bool
    boundary_size: int = 0
    has_opener: bool = False
    background_inert: bool = False


class ModalFocusController:
    """Controls the focus lifecycle of a blocking dialog.

    Example:
        dialog = ModalFocusController(
            surface=dialog_element,
            background_root=app_root,
            focus=host,
            query=host,
            inert=host,
            focusables=host.focusable_descendants,
            fallback_target=main_heading,
        )
        dialog.open()
        dialog.on_tab_key(shift_held=False)
        dialog.on_escape()  # focus returns to the element that opened it
    """

    def __init__(
        self,
        surface: ElementRef,
        background_root: ElementRef | None,
        focus: FocusSink,
        query: FocusQuery,
        inert: InertToggle,
        focusables: FocusableQuery,
        fallback_target: ElementRef | None = None,
        config: ModalConfig | None = None,
    ) -> None:
        """Initialize the controller in the closed state.

        Args:
            surface: The dialog surface element.
            background_root: Host-designated application root made inert
                while open. Never the document root. None skips inertness.
            focus: Host capability used to move focus.
            query: Host capability reporting the current focus owner.
            inert: Host capability marking the background inert.
            focusables: Returns the ordered focusable descendants of surface.
            fallback_target: Receives focus on close when the opener is gone.
            config: Dialog settings. Defaults to ModalConfig().
        """
        self._surface = surface
        self._background_root = background_root
        self._focus = focus
        self._query = query
        self._inert = inert
        self._focusables = focusables
        self._fallback_target = fallback_target
        self._config = config or ModalConfig()
        self._state = DialogState()

    @property
    def is_open(self) -> bool:
        return self._state.open

    def state(self) -> ModalState:
        """Return a snapshot of the dialog."""
        state = self._state
        return ModalState(
            open=state.open,
            boundary_size=len(self._live_boundary()),
            has_opener=state.captured_opener is not None
            and state.captured_opener() is not None,
            background_inert=state.inert_target is not None,
        )

    # -- lifecycle -----------------------------------------------------------

    def open(self) -> None:
        """Open the dialog. A second call while open changes nothing."""
        if self._state.open:
            logger.debug("modal_already_open")
            return

        opener = self._query.currently_focused()
        self._state = DialogState(
            open=True,
            captured_opener=_back_ref(opener) if opener is not None else None,
            trap_boundary=self._collect_boundary(),
        )
        self._set_background_inert(True)
        logger.debug(
            "modal_opened",
            boundary_size=len(self._state.trap_boundary),
            has_opener=opener is not None,
        )

        boundary = self._live_boundary()
        if self._config.initial_focus == "first" and boundary:
            if self._focus_element(boundary[0]):
                return
        self._focus_element(self._surface)

    def close(self) -> None:
        """Close the dialog and give focus back. A second call changes nothing."""
        if not self._state.open:
            logger.debug("modal_already_closed")
            return

        # Reset first so a close triggered from a focus handler is a no-op
        state, self._state = self._state, DialogState(
            inert_target=self._state.inert_target
        )
        self._set_background_inert(False)

        opener = None
        if state.captured_opener is not None:
            opener = state.captured_opener()
        if opener is not None and self._focus_element(opener):
            logger.debug("modal_closed", restored="opener")
            return

        if self._fallback_target is not None and self._focus_element(
            self._fallback_target
        ):
            logger.debug("modal_closed", restored="fallback")
            return

        logger.warning("modal_focus_not_restored")

    def dispose(self) -> None:
        """Close the dialog if it is still open before the host unmounts."""
        self.close()

    # -- input ---------------------------------------------------------------

    def on_escape(self) -> None:
        if self._state.open:
            self.close()

    def on_backdrop_activate(self) -> None:
        """Close on backdrop click unless backdrop dismissal is disabled."""
        if not self._state.open:
            return
        if not self._config.dismiss_on_backdrop:
            logger.debug("modal_backdrop_ignored")
            return
        self.close()

    def on_tab_key(self, shift_held: bool) -> bool:
        """Keep Tab and Shift+Tab inside the trap boundary.

        Args:
            shift_held: Whether Shift was held (backwards navigation).

        Returns:
            True if the controller moved focus and the host should suppress
            the default Tab action. False lets default tab order proceed.
        """
        if not self._state.open:
            return False

        boundary = self._live_boundary()
        if not boundary:
            self._focus_element(self._surface)
            return True

        first, last = boundary[0], boundary[-1]
        current = self._query.currently_focused()

        if not any(current == element for element in boundary):
            self._focus_element(last if shift_held else first)
            return True
        if shift_held and current == first:
            self._focus_element(last)
            return True
        if not shift_held and current == last:
            self._focus_element(first)
            return True
        return False

    def on_focus_in(self, target: ElementRef) -> bool:
        """Pull focus back inside when something outside the dialog gets it.

        Returns:
            True if focus was redirected.
        """
        if not self._state.open:
            return False
        if target == self._surface:
            return False

        boundary = self._live_boundary()
        if any(target == element for element in boundary):
            return False

        logger.debug("modal_focus_escaped")
        self._focus_element(boundary[0] if boundary else self._surface)
        return True

    def refresh_boundary(self) -> None:
        """Recompute the trap boundary after the dialog content changed."""
        if not self._state.open:
            return
        self._state.trap_boundary = self._collect_boundary()
        logger.debug(
            "modal_boundary_refreshed",
            boundary_size=len(self._state.trap_boundary),
        )

    # -- internals -----------------------------------------------------------

    def _collect_boundary(self) -> tuple[BackRef, ...]:
        return tuple(_back_ref(element) for element in self._focusables(self._surface))

    def _live_boundary(self) -> list[ElementRef]:
        elements = (ref() for ref in self._state.trap_boundary)
        return [element for element in elements if element is not None]

    def _focus_element(self, target: ElementRef) -> bool:
        with absorb_host_errors("modal_focus_failed"):
            return self._focus.focus(target)
        return False

    def _set_background_inert(self, inert: bool) -> None:
        root = self._background_root
        if root is None:
            logger.warning("modal_inert_target_missing")
            self._state.inert_target = None
            return

        with absorb_host_errors("modal_inert_failed", inert=inert):
            self._inert.set_inert(root, inert)
            self._state.inert_target = root if inert else None
