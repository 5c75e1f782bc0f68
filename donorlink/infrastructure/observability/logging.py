"""
Structured logging for the donor matching service.

Development renders coloured key/value lines for a terminal; every other
environment emits one JSON object per line.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

SERVICE_NAME = "donorlink"
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "redis")


def setup_logging(log_level: str = "INFO", environment: str = "production") -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "development" selects the console renderer
    """
    if environment == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_context,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        # Cached loggers ignore later reconfiguration, which log capture relies on
        cache_logger_on_first_use=environment == "production",
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _add_service_context(logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_health_check(component: str, healthy: bool, latency_ms: float, error: str = None):
    """Readiness check outcome for one backing component."""
    fields = {"component": component, "healthy": healthy, "latency_ms": round(latency_ms, 2)}
    if error:
        fields["error"] = error
    if healthy:
        get_logger("health").info("Health check passed", **fields)
    else:
        get_logger("health").error("Health check failed", **fields)


def log_request(method: str, path: str, status_code: int, duration_ms: float):
    level = "warning" if status_code >= 400 else "info"
    getattr(get_logger("http"), level)(
        "HTTP request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration_ms, 2),
    )
