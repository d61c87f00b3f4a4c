"""In-memory implementation of the host capability protocols.

This module provides a headless host for the controllers:
- MemoryElement / MemoryDocument: FocusSink, FocusQuery and InertToggle
- ManualTimer: Timer driven by a virtual clock
- ManualPaintSignal: PaintCommitSignal committed on demand
- MemoryMediaQuery: MediaQuerySignal with a settable value

Nothing here touches a real event loop or rendering tree.
This adapter is designed for testing: fast, deterministic, fully inspectable.
"""

from collections.abc import Callable, Iterator

from a11y_widgets.core.errors import InertTargetError, StaleTargetError


class MemoryElement:
    """A node in the in-memory element tree.

    Attributes:
        name: Label used in assertions and reprs.
        focusable: Whether the element can take focus.
        attached: False once detached from its document.
        parent: Parent element, None for roots.
        children: Child elements in document order.
    """

    def __init__(self, name: str, focusable: bool = True) -> None:
        self.name = name
        self.focusable = focusable
        self.attached = True
        self.parent: "MemoryElement | None" = None
        self.children: list[MemoryElement] = []

    def __repr__(self) -> str:
        return f"MemoryElement({self.name!r})"

    def append(self, *children: "MemoryElement") -> "MemoryElement":
        """Append children and return self for chaining."""
        for child in children:
            child.parent = self
            self.children.append(child)
        return self

    def detach(self) -> None:
        """Remove the element (and its subtree) from the document."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None
        for node in self.walk():
            node.attached = False

    def walk(self) -> Iterator["MemoryElement"]:
        """Yield this element and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def ancestors(self) -> Iterator["MemoryElement"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


class MemoryDocument:
    """In-memory document implementing FocusSink, FocusQuery and InertToggle.

    Example:
        doc = MemoryDocument()
        button = MemoryElement("open-dialog")
        doc.app_root.append(button)
        doc.focus(button)
        assert doc.currently_focused() is button

    Args:
        strict: If True, focusing a stale element raises StaleTargetError
            instead of returning False.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self.root = MemoryElement("document", focusable=False)
        self.app_root = MemoryElement("app", focusable=False)
        self.root.append(self.app_root)
        self.inert_roots: set[int] = set()
        self.focus_history: list[MemoryElement] = []
        self._focused: MemoryElement | None = None

    # FocusSink

    def focus(self, target: object) -> bool:
        if not isinstance(target, MemoryElement) or not self._can_focus(target):
            if self.strict:
                raise StaleTargetError(f"Cannot focus {target!r}", target=target)
            return False
        self._focused = target
        self.focus_history.append(target)
        return True

    # FocusQuery

    def currently_focused(self) -> MemoryElement | None:
        if self._focused is not None and not self._focused.attached:
            # Removing the focus owner drops focus, like a browser does
            self._focused = None
        return self._focused

    # InertToggle

    def set_inert(self, root: object, inert: bool) -> None:
        if root is self.root:
            raise ValueError("Refusing to mark the document root inert")
        if not isinstance(root, MemoryElement) or not root.attached:
            raise InertTargetError(f"Inert root {root!r} is not attached", target=root)
        if inert:
            self.inert_roots.add(id(root))
        else:
            self.inert_roots.discard(id(root))

    def is_inert(self, element: MemoryElement) -> bool:
        nodes = (element, *element.ancestors())
        return any(id(node) in self.inert_roots for node in nodes)

    # FocusableQuery

    def focusable_descendants(self, surface: MemoryElement) -> list[MemoryElement]:
        """Return focusable, attached descendants of surface in document order."""
        return [
            node
            for node in surface.walk()
            if node is not surface and node.focusable and node.attached
        ]

    def _can_focus(self, element: MemoryElement) -> bool:
        return element.attached and element.focusable and not self.is_inert(element)


class ManualTimer:
    """Timer driven by a virtual millisecond clock.

    Callbacks fire only inside advance(), in due-time order.

    Attributes:
        now_ms: Current virtual time.
        max_pending: Highest number of callbacks ever pending at once.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self.max_pending = 0
        self.scheduled_intervals: list[int] = []
        self._pending: dict[int, tuple[int, Callable[[], None]]] = {}
        self._next_handle = 1

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def schedule(self, interval_ms: int, callback: Callable[[], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = (self.now_ms + interval_ms, callback)
        self.scheduled_intervals.append(interval_ms)
        self.max_pending = max(self.max_pending, len(self._pending))
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing every callback that comes due."""
        target = self.now_ms + ms
        while True:
            due = [
                (due_ms, handle)
                for handle, (due_ms, _) in self._pending.items()
                if due_ms <= target
            ]
            if not due:
                break
            due_ms, handle = min(due)
            _, callback = self._pending.pop(handle)
            self.now_ms = due_ms
            callback()
        self.now_ms = target


class ManualPaintSignal:
    """PaintCommitSignal whose paints happen when the test calls commit()."""

    def __init__(self) -> None:
        self._pending: dict[int, Callable[[], None]] = {}
        self._next_handle = 1

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def after_next_paint(self, callback: Callable[[], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def commit(self) -> None:
        """Simulate a paint: run every callback registered before it."""
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback()


class MemoryMediaQuery:
    """MediaQuerySignal with a value the test can flip."""

    def __init__(self, matches: bool = False) -> None:
        self._matches = matches
        self._listeners: list[Callable[[bool], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def matches(self) -> bool:
        return self._matches

    def subscribe(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, matches: bool) -> None:
        """Change the preference and notify listeners if it differs."""
        if matches == self._matches:
            return
        self._matches = matches
        for listener in list(self._listeners):
            listener(matches)
