"""Ports (interfaces) for widget controllers.

This module contains Protocol definitions that define the boundary between
the controllers and the rendering host that owns markup, style and the
event loop.
"""

from a11y_widgets.ports.host import (
    ElementRef,
    FocusableQuery,
    FocusQuery,
    FocusSink,
    Handle,
    InertToggle,
    ItemDescriptor,
    LiveAnnouncer,
    MediaQuerySignal,
    PaintCommitSignal,
    Timer,
)

__all__ = [
    # Data classes
    "ElementRef",
    "Handle",
    "ItemDescriptor",
    # Focus protocols
    "FocusableQuery",
    "FocusQuery",
    "FocusSink",
    "InertToggle",
    "LiveAnnouncer",
    # Scheduling protocols
    "MediaQuerySignal",
    "PaintCommitSignal",
    "Timer",
]
