"""Tests for error classification and absorption."""

import weakref

import pytest
from structlog.testing import capture_logs

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


class TestErrorHierarchy:
    """Tests for the exception classes."""

    def test_host_errors_are_widget_errors(self) -> None:
        """Should share a common base class."""
        assert issubclass(StaleTargetError, HostCapabilityError)
        assert issubclass(InertTargetError, HostCapabilityError)
        assert issubclass(HostCapabilityError, WidgetError)
        assert issubclass(ConfigurationError, WidgetError)

    def test_host_error_keeps_target(self) -> None:
        """Should remember which element the failure was about."""
        error = StaleTargetError("gone", target="button-1")
        assert error.target == "button-1"
        assert str(error) == "gone"

    def test_configuration_error_keeps_field(self) -> None:
        """Should remember which setting was invalid."""
        error = ConfigurationError("bad", field="interval_ms")
        assert error.field == "interval_ms"


class TestClassifyError:
    """Tests for classify_error function."""

    def test_classifies_stale_target(self) -> None:
        """Should classify StaleTargetError as STALE_TARGET."""
        assert classify_error(StaleTargetError("x")) == ErrorCategory.STALE_TARGET

    def test_classifies_dead_weak_proxy(self) -> None:
        """Should classify ReferenceError from a dead proxy as STALE_TARGET."""
        error = ReferenceError("weakly-referenced object no longer exists")
        assert classify_error(error) == ErrorCategory.STALE_TARGET

    def test_classifies_inert_target(self) -> None:
        """Should classify InertTargetError as INERT_TARGET."""
        assert classify_error(InertTargetError("x")) == ErrorCategory.INERT_TARGET

    def test_classifies_configuration(self) -> None:
        """Should classify ConfigurationError as CONFIGURATION."""
        assert classify_error(ConfigurationError("x")) == ErrorCategory.CONFIGURATION

    def test_classifies_unknown(self) -> None:
        """Should classify anything else as UNKNOWN."""
        assert classify_error(KeyError("x")) == ErrorCategory.UNKNOWN
        assert classify_error(HostCapabilityError("x")) == ErrorCategory.UNKNOWN


class TestIsAbsorbed:
    """Tests for is_absorbed function."""

    def test_runtime_categories_are_absorbed(self) -> None:
        """Stale and inert target failures should be swallowed."""
        assert is_absorbed(ErrorCategory.STALE_TARGET)
        assert is_absorbed(ErrorCategory.INERT_TARGET)

    def test_other_categories_are_raised(self) -> None:
        """Configuration and unknown errors should propagate."""
        assert not is_absorbed(ErrorCategory.CONFIGURATION)
        assert not is_absorbed(ErrorCategory.UNKNOWN)


class TestAbsorbHostErrors:
    """Tests for absorb_host_errors context manager."""

    def test_swallows_stale_target_and_logs(self) -> None:
        """Should log a warning instead of raising."""
        with capture_logs() as logs:
            with absorb_host_errors("focus_failed", index=3):
                raise StaleTargetError("detached")

        assert logs == [
            {
                "event": "focus_failed",
                "category": "STALE_TARGET",
                "error": "detached",
                "index": 3,
                "log_level": "warning",
            }
        ]

    def test_swallows_dead_weak_proxy(self) -> None:
        """Should treat a dead weakref.proxy like a stale target."""

        class Element:
            name = "button"

        element = Element()
        proxy = weakref.proxy(element)
        del element

        with absorb_host_errors("focus_failed"):
            _ = proxy.name

    def test_swallows_inert_target(self) -> None:
        """Should absorb missing inert roots."""
        with absorb_host_errors("inert_failed"):
            raise InertTargetError("missing")

    def test_reraises_unclassified_host_error(self) -> None:
        """Should let bare HostCapabilityError through."""
        with pytest.raises(HostCapabilityError):
            with absorb_host_errors("focus_failed"):
                raise HostCapabilityError("unexpected")

    def test_programming_errors_propagate(self) -> None:
        """Should never hide ordinary bugs."""
        with pytest.raises(AttributeError):
            with absorb_host_errors("focus_failed"):
                raise AttributeError("typo")

    def test_no_error_passes_through(self) -> None:
        """Should be transparent when nothing fails."""
        results = []
        with absorb_host_errors("focus_failed"):
            results.append(1)
        assert results == [1]
