import logging

import pytest
import structlog
from structlog.testing import capture_logs

from donorlink.infrastructure.observability.logging import (
    log_health_check,
    log_request,
    setup_logging,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_development_uses_console_renderer(restore_logging):
    setup_logging("DEBUG", environment="development")

    config = structlog.get_config()
    assert isinstance(config["processors"][-1], structlog.dev.ConsoleRenderer)
    assert config["cache_logger_on_first_use"] is False
    assert logging.getLogger().level == logging.DEBUG


def test_production_renders_json_and_caches_loggers(restore_logging):
    setup_logging("warning", environment="production")

    config = structlog.get_config()
    assert isinstance(config["processors"][-1], structlog.processors.JSONRenderer)
    assert structlog.processors.format_exc_info in config["processors"]
    assert config["cache_logger_on_first_use"] is True
    assert logging.getLogger("redis").level == logging.WARNING


def test_failed_health_check_logs_error_with_reason():
    with capture_logs() as logs:
        log_health_check("storage", False, 12.3456, "ConnectionError: refused")

    assert logs == [
        {
            "event": "Health check failed",
            "log_level": "error",
            "component": "storage",
            "healthy": False,
            "latency_ms": 12.35,
            "error": "ConnectionError: refused",
        }
    ]


def test_unhealthy_without_error_still_logs_failure():
    with capture_logs() as logs:
        log_health_check("storage", False, 0.0)

    assert logs[0]["event"] == "Health check failed"
    assert "error" not in logs[0]


def test_client_errors_log_as_warnings():
    with capture_logs() as logs:
        log_request("GET", "/people/missing", 404, 1.0)
        log_request("GET", "/healthz", 200, 0.5)

    assert [entry["log_level"] for entry in logs] == ["warning", "info"]
    assert logs[0]["status_code"] == 404
