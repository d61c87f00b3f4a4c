"""Core widget controllers and shared infrastructure.

This module contains the toolkit-agnostic controllers for the paged shelf,
the carousel and the modal dialog, together with scheduling, error handling,
logging and configuration.
"""

from a11y_widgets.core.carousel import (
    CarouselController,
    CarouselState,
    LivePoliteness,
)
from a11y_widgets.core.config import (
    CarouselConfig,
    ModalConfig,
    PagedListConfig,
    WidgetSettings,
)
from a11y_widgets.core.errors import (
    ConfigurationError,
    ErrorCategory,
    HostCapabilityError,
    InertTargetError,
    StaleTargetError,
    WidgetError,
    absorb_host_errors,
    classify_error,
    is_absorbed,
)
from a11y_widgets.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
    unbind_contextvars,
)
from a11y_widgets.core.modal import DialogState, ModalFocusController, ModalState
from a11y_widgets.core.paged_list import (
    FocusEdge,
    PagedListController,
    PagedListState,
    PageWindow,
)
from a11y_widgets.core.scheduling import ScheduledSlot, paint_slot, timer_slot

__all__ = [
    # Carousel
    "CarouselController",
    "CarouselState",
    "LivePoliteness",
    # Configuration
    "CarouselConfig",
    "ModalConfig",
    "PagedListConfig",
    "WidgetSettings",
    # Error handling
    "ConfigurationError",
    "ErrorCategory",
    "HostCapabilityError",
    "InertTargetError",
    "StaleTargetError",
    "WidgetError",
    "absorb_host_errors",
    "classify_error",
    "is_absorbed",
    # Logging
    "bind_contextvars",
    "clear_contextvars",
    "configure_logging",
    "get_logger",
    "unbind_contextvars",
    # Modal dialog
    "DialogState",
    "ModalFocusController",
    "ModalState",
    # Paged list
    "FocusEdge",
    "PagedListController",
    "PagedListState",
    "PageWindow",
    # Scheduling
    "ScheduledSlot",
    "paint_slot",
    "timer_slot",
]
