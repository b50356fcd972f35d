"""
Observability Infrastructure

Structured logging with correlation tracking and Prometheus metrics for the
activity write path, the workforce snapshot and the ERP gateway.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog
from prometheus_client import Counter, Histogram

from .config import settings

# Context variables for correlation tracking
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
worker_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "worker_id", default=""
)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "shopfloor_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

REQUEST_DURATION = Histogram(
    "shopfloor_http_request_duration_seconds",
    "HTTP request duration",
    ["method", "endpoint"],
)

ACTIVITY_ACTIONS = Counter(
    "shopfloor_activity_actions_total",
    "Activity actions by kind and outcome",
    ["kind", "outcome"],
)

SNAPSHOT_DURATION = Histogram(
    "shopfloor_snapshot_build_duration_seconds",
    "Workforce snapshot build duration",
)

SNAPSHOT_FAILURES = Counter(
    "shopfloor_snapshot_failures_total",
    "Workforce snapshot failures by reason",
    ["reason"],
)

GATEWAY_REQUESTS = Counter(
    "shopfloor_gateway_requests_total",
    "ERP gateway requests by method and outcome",
    ["method", "outcome"],
)


class CorrelationIdProcessor:
    """Structlog processor to add correlation ID to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        worker_id = worker_id_var.get("")
        if correlation_id:
            event_dict["correlation_id"] = correlation_id
        if worker_id:
            event_dict["worker_id"] = worker_id

        return event_dict


def setup_structured_logging() -> None:
    """Configure structured logging with JSON output and correlation tracking."""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_FORMAT == "json":
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    if settings.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    else:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def set_worker_id(worker_id: str) -> None:
    """Set the acting worker for request tracking."""
    worker_id_var.set(worker_id)

