"""Composition root for the escalation engine."""

from escalation_engine.bootstrap.escalation import (
    EscalationEngine,
    create_escalation_engine,
    get_escalation_engine,
    reset_escalation_engine,
    set_escalation_engine,
)
from escalation_engine.bootstrap.logging import configure_structlog

__all__ = [
    "EscalationEngine",
    "configure_structlog",
    "create_escalation_engine",
    "get_escalation_engine",
    "reset_escalation_engine",
    "set_escalation_engine",
]
