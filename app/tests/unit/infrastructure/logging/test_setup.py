"""Unit tests for structlog setup helpers."""

import pytest

from infrastructure.logging import configure_logging, get_logger, get_module_logger

pytestmark = pytest.mark.unit


class TestConfigureLogging:
    def test_returns_logger_under_pytest(self):
        logger = configure_logging(log_level="DEBUG", is_production=False)
        assert logger is not None


class TestGetLogger:
    def test_binds_name(self):
        logger = get_logger("my.module")
        assert logger._context["logger_name"] == "my.module"


class TestGetModuleLogger:
    def test_binds_calling_module(self):
        logger = get_module_logger()

        assert logger._context["component"] == "test_setup"
        assert logger._context["module_path"].endswith("test_setup")
