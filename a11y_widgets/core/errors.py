"""Error classification and absorption for widget controllers.

Runtime failures in a UI are non-fatal: a stale focus target or a missing
inert root must never abort a transition halfway. Host adapters signal such
failures with HostCapabilityError subclasses; controllers wrap every
capability call in absorb_host_errors(), which logs and continues.

Configuration mistakes are different. They are raised at construction time
as ConfigurationError so the host finds them before anything renders.

Example:
    from a11y_widgets.core.errors import absorb_host_errors

    with absorb_host_errors("focus_failed", target=element):
        focus_sink.focus(element)
"""

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum, auto
from typing import Any

from a11y_widgets.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Classification of error types for handling decisions."""

    # Absorbed at runtime
    STALE_TARGET = auto()  # Focus target detached, removed or collected
    INERT_TARGET = auto()  # Background root missing

    # Raised to the host
    CONFIGURATION = auto()  # Invalid construction or settings values
    UNKNOWN = auto()  # Unclassified error


ABSORBED_CATEGORIES = {
    ErrorCategory.STALE_TARGET,
    ErrorCategory.INERT_TARGET,
}


class WidgetError(Exception):
    """Base class for all widget controller errors."""


class HostCapabilityError(WidgetError):
    """A host capability could not carry out a request.

    Attributes:
        target: The element reference the request was about, if any.
    """

    def __init__(self, message: str, target: Any = None) -> None:
        super().__init__(message)
        self.target = target


class StaleTargetError(HostCapabilityError):
    """The focus target is detached, removed or no longer focusable."""


class InertTargetError(HostCapabilityError):
    """The background root to mark inert does not exist."""


class ConfigurationError(WidgetError):
    """Invalid configuration passed to a controller or settings loader.

    Attributes:
        field: Name of the offending setting, if known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def classify_error(error: BaseException) -> ErrorCategory:
    """Classify an exception into an error category.

    Args:
        error: The exception to classify.

    Returns:
        The ErrorCategory that best matches the error.
    """
    if isinstance(error, StaleTargetError):
        return ErrorCategory.STALE_TARGET
    # A dead weakref.proxy raises ReferenceError on any access
    if isinstance(error, ReferenceError):
        return ErrorCategory.STALE_TARGET
    if isinstance(error, InertTargetError):
        return ErrorCategory.INERT_TARGET
    if isinstance(error, ConfigurationError):
        return ErrorCategory.CONFIGURATION
    return ErrorCategory.UNKNOWN


def is_absorbed(category: ErrorCategory) -> bool:
    """Check if an error category is swallowed at runtime.

    Args:
        category: The error category to check.

    Returns:
        True if controllers log and continue on this category.
    """
    return category in ABSORBED_CATEGORIES


@contextmanager
def absorb_host_errors(event: str, **context: Any) -> Iterator[None]:
    """Swallow host capability failures, logging them as warnings.

    Only stale-target and inert-target failures are absorbed. Anything else
    is a programming error and propagates.

    Args:
        event: Log event name for the absorbed failure.
        **context: Extra key/value pairs for the log entry.
    """
    try:
        yield
    except (HostCapabilityError, ReferenceError) as ex:
        category = classify_error(ex)
        if not is_absorbed(category):
            raise
        logger.warning(
            event,
            category=category.name,
            error=str(ex),
            **context,
        )
