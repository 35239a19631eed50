"""Observability infrastructure for structured logging and correlation.

- Structured JSON logging with structlog
- Correlation ID management tying log entries to an escalation run

Usage:
    from escalation_engine.infrastructure.observability import configure_structlog

    # At startup
    configure_structlog(environment="production")
"""

from escalation_engine.infrastructure.observability.correlation import (
    correlation_id_processor,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from escalation_engine.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_service,
)

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "get_correlation_id",
    "get_logger_for_service",
    "reset_correlation_id",
    "set_correlation_id",
]
