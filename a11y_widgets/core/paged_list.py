"""Paginated shelf logic - toolkit agnostic.

The controller tracks a visible window over an ordered item sequence. When
the window moves it hands focus to the item on the newly revealed edge, but
only after the host reports that the new page has been painted; before that
the target element does not exist yet.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from a11y_widgets.core.config import PagedListConfig
from a11y_widgets.core.errors import ConfigurationError, absorb_host_errors
from a11y_widgets.core.logging import get_logger
from a11y_widgets.core.scheduling import paint_slot
from a11y_widgets.ports.host import ElementRef, FocusSink, PaintCommitSignal

logger = get_logger(__name__)

T = TypeVar("T")


class FocusEdge(Enum):
    """Which visible item receives focus after a page change."""

    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class PageWindow:
    """A contiguous window [start_index, end_index) over total items."""

    start_index: int
    page_size: int
    total: int

    @property
    def end_index(self) -> int:
        return min(self.start_index + self.page_size, self.total)

    @property
    def can_go_prev(self) -> bool:
        return self.start_index > 0

    @property
    def can_go_next(self) -> bool:
        return self.end_index < self.total

    @property
    def last_start(self) -> int:
        """Largest start index the window may take."""
        return max(self.total - self.page_size, 0)

    @property
    def page_count(self) -> int:
        return max(-(-self.total // self.page_size), 1)

    @property
    def page_number(self) -> int:
        # The last page may start off the page_size grid, so round up
        return -(-self.start_index // self.page_size) + 1

    def moved_to(self, start_index: int) -> "PageWindow":
        return PageWindow(start_index, self.page_size, self.total)


@dataclass(frozen=True)
class PagedListState:
    """Snapshot of a paged list for rendering."""

    start_index: int
    end_index: int
    can_go_prev: bool
    can_go_next: bool
    page_number: int
    page_count: int
    status_message: str


class PagedListController:
    """Controls shelf paging and the focus hand-off after each page change.

    Example:
        shelf = PagedListController(
            total=18,
            focus=host,
            paint=paint_signal,
            resolve_item=lambda index: rendered_items.get(index),
        )
        shelf.go_next()  # window becomes [6, 12); item 6 is focused after paint
    """

    def __init__(
        self,
        total: int,
        focus: FocusSink,
        paint: PaintCommitSignal,
        resolve_item: Callable[[int], ElementRef | None],
        config: PagedListConfig | None = None,
        start_index: int = 0,
    ) -> None:
        """Initialize the controller.

        Args:
            total: Number of items in the host sequence.
            focus: Host capability used to move focus.
            paint: Host signal fired once the next render has committed.
            resolve_item: Maps an item ordinal to its rendered element. Only
                called after paint, so the element exists when it is asked.
            config: Paging settings. Defaults to PagedListConfig().
            start_index: Initial window start, clamped into range.

        Raises:
            ConfigurationError: If total is negative.
        """
        if total < 0:
            raise ConfigurationError(f"total must be >= 0, got {total}", field="total")
        self._config = config or PagedListConfig()
        self._focus = focus
        self._resolve_item = resolve_item
        self._focus_transfer = paint_slot(paint)

        window = PageWindow(0, self._config.page_size, total)
        self._window = window.moved_to(min(max(start_index, 0), window.last_start))

    @property
    def window(self) -> PageWindow:
        return self._window

    @property
    def focus_transfer_pending(self) -> bool:
        return self._focus_transfer.pending

    def state(self) -> PagedListState:
        """Return a snapshot of the current window."""
        window = self._window
        return PagedListState(
            start_index=window.start_index,
            end_index=window.end_index,
            can_go_prev=window.can_go_prev,
            can_go_next=window.can_go_next,
            page_number=window.page_number,
            page_count=window.page_count,
            status_message=self.status_message(),
        )

    def status_message(self) -> str:
        """Text for a polite live region describing the visible range."""
        window = self._window
        if window.total == 0:
            return "No items"
        return (
            f"Showing items {window.start_index + 1} to {window.end_index} "
            f"of {window.total}"
        )

    def visible_items(self, items: Sequence[T]) -> list[T]:
        """Slice a host sequence by the current window."""
        return list(items[self._window.start_index : self._window.end_index])

    def go_next(self) -> None:
        """Reveal the next page and focus its first item after paint."""
        window = self._window
        target = min(window.start_index + window.page_size, window.last_start)
        self._move_to(target, FocusEdge.FIRST)

    def go_prev(self) -> None:
        """Reveal the previous page and focus its last item after paint."""
        window = self._window
        target = max(window.start_index - window.page_size, 0)
        self._move_to(target, FocusEdge.LAST)

    def set_total(self, total: int) -> None:
        """Adopt a new item count, clamping the window into range.

        Raises:
            ConfigurationError: If total is negative.
        """
        if total < 0:
            raise ConfigurationError(f"total must be >= 0, got {total}", field="total")
        resized = PageWindow(self._window.start_index, self._window.page_size, total)
        clamped = resized.moved_to(min(resized.start_index, resized.last_start))
        if clamped.start_index != self._window.start_index:
            # The page the transfer was aiming at is gone
            self._focus_transfer.cancel()
        self._window = clamped
        logger.debug(
            "paged_list_resized",
            total=total,
            start_index=clamped.start_index,
        )

    def dispose(self) -> None:
        """Cancel any pending focus transfer before the host unmounts."""
        self._focus_transfer.cancel()

    def _move_to(self, start_index: int, edge: FocusEdge) -> None:
        if start_index == self._window.start_index:
            logger.debug(
                "paged_list_at_edge",
                edge=edge.value,
                start_index=start_index,
            )
            return

        self._window = self._window.moved_to(start_index)
        logger.debug(
            "paged_list_moved",
            start_index=start_index,
            end_index=self._window.end_index,
            focus_edge=edge.value,
        )
        self._focus_transfer.arm(lambda: self._focus_edge_item(edge))

    def _focus_edge_item(self, edge: FocusEdge) -> None:
        window = self._window
        if window.end_index <= window.start_index:
            return
        index = window.start_index if edge is FocusEdge.FIRST else window.end_index - 1

        target = self._resolve_item(index)
        if target is None:
            logger.warning("paged_list_focus_target_missing", index=index)
            return

        with absorb_host_errors("paged_list_focus_failed", index=index):
            if not self._focus.focus(target):
                logger.debug("paged_list_focus_refused", index=index)
