"""Tests for logging configuration."""

import json

import pytest
import structlog

from custody_core.config import CustodyCoreConfig
from custody_core.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_console_configuration(self):
        """Console mode ends with the console renderer."""
        configure_logging(CustodyCoreConfig(env="development", log_format="console"))

        processors = structlog.get_config()["processors"]
        assert structlog.is_configured()
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_configuration(self):
        """JSON mode ends with the JSON renderer."""
        configure_logging(CustodyCoreConfig(log_format="json"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_production_uses_json(self):
        """Production always logs JSON."""
        configure_logging(CustodyCoreConfig(env="production", log_format="console"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_json_renderer_output(self):
        """The JSON renderer emits parseable events."""
        renderer = structlog.processors.JSONRenderer()
        line = renderer(None, "info", {"event": "summary_built", "rows": 2})
        assert json.loads(line) == {"event": "summary_built", "rows": 2}


def test_get_logger_returns_bound_logger():
    """get_logger returns a usable structlog logger."""
    logger = get_logger("custody_core.tests")
    assert hasattr(logger, "info")
