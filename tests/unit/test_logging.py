"""Tests for structured logging configuration."""

import json
import logging
from io import StringIO
from unittest.mock import patch

import structlog
from structlog.testing import capture_logs

from a11y_widgets.adapters.memory_host import ManualTimer, MemoryMediaQuery
from a11y_widgets.core.carousel import CarouselController
from a11y_widgets.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
    unbind_contextvars,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def teardown_method(self) -> None:
        """Leave structlog unconfigured for the next test."""
        structlog.reset_defaults()

    def test_configure_development_mode(self) -> None:
        """Should configure pretty-printed output in development mode."""
        configure_logging(development=True)
        logger = get_logger("test")
        # Should not raise
        logger.info("test message", key="value")

    def test_configure_production_mode(self) -> None:
        """Should configure JSON output in production mode."""
        configure_logging(development=False)
        logger = get_logger("test")
        logger.info("test message", key="value")

    def test_reads_environment_variable(self) -> None:
        """Should read ENVIRONMENT env var to determine mode."""
        with patch.dict("os.environ", {"ENVIRONMENT": "production"}):
            configure_logging()
            logger = get_logger("test")
            logger.info("test")

    def test_reads_log_level_environment_variable(self) -> None:
        """Should read LOG_LEVEL env var."""
        with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}):
            configure_logging(development=True)
            assert logging.getLogger().level == logging.DEBUG

    def test_default_log_level_is_info(self) -> None:
        """Should default to INFO log level."""
        configure_logging(development=True, log_level="INFO")
        assert logging.getLogger().level == logging.INFO

    def test_silences_asyncio_logger(self) -> None:
        """Should set the asyncio logger to WARNING level."""
        configure_logging(development=True)
        assert logging.getLogger("asyncio").level == logging.WARNING

    def test_production_output_is_json(self) -> None:
        """Should emit one JSON object per log call in production."""
        stream = StringIO()
        configure_logging(development=False, log_level="DEBUG")
        handler = logging.StreamHandler(stream)
        logging.getLogger().addHandler(handler)
        try:
            get_logger("widgets.test").info("slide_shown", active_index=2)
        finally:
            logging.getLogger().removeHandler(handler)

        payload = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert payload["event"] == "slide_shown"
        assert payload["active_index"] == 2
        assert payload["level"] == "info"
        assert payload["logger"] == "widgets.test"


class TestContextVars:
    """Tests for context variable helpers."""

    def teardown_method(self) -> None:
        clear_contextvars()

    def test_bind_and_unbind(self) -> None:
        """Should add and remove widget-scoped context."""
        bind_contextvars(widget="carousel", widget_id="hero")
        assert structlog.contextvars.get_contextvars() == {
            "widget": "carousel",
            "widget_id": "hero",
        }

        unbind_contextvars("widget_id")
        assert structlog.contextvars.get_contextvars() == {"widget": "carousel"}

    def test_clear(self) -> None:
        """Should drop every bound variable."""
        bind_contextvars(widget="modal")
        clear_contextvars()
        assert structlog.contextvars.get_contextvars() == {}


class TestControllerLogging:
    """Controllers should report transitions as structured events."""

    def test_carousel_logs_pause_reason(self) -> None:
        """Should log the trigger that paused rotation."""
        carousel = CarouselController(
            count=3, timer=ManualTimer(), media=MemoryMediaQuery()
        )
        with capture_logs() as logs:
            carousel.on_focus_enter()

        paused = [entry for entry in logs if entry["event"] == "carousel_paused"]
        assert paused == [
            {"event": "carousel_paused", "reason": "focus", "log_level": "debug"}
        ]
