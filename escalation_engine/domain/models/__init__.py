"""Domain models for the escalation engine."""

from escalation_engine.domain.models.complaint import (
    TERMINAL_STATUSES,
    Complaint,
    ComplaintStatus,
    TimelineEntry,
    Urgency,
)
from escalation_engine.domain.models.escalation import (
    EscalationDecision,
    EscalationOutcome,
    EscalationOutcomeStatus,
    EscalationReason,
    EscalationReasonCode,
    EscalationRunResult,
    EscalationStats,
    RunStatus,
    RunTrigger,
    SchedulerState,
)
from escalation_engine.domain.models.user import DirectoryUser, UserRole

__all__ = [
    "TERMINAL_STATUSES",
    "Complaint",
    "ComplaintStatus",
    "DirectoryUser",
    "EscalationDecision",
    "EscalationOutcome",
    "EscalationOutcomeStatus",
    "EscalationReason",
    "EscalationReasonCode",
    "EscalationRunResult",
    "EscalationStats",
    "RunStatus",
    "RunTrigger",
    "SchedulerState",
    "TimelineEntry",
    "Urgency",
    "UserRole",
]
