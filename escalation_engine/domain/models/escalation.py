"""Escalation value objects.

Decisions produced by the threshold policy, per-complaint outcomes produced
by the executor, run results produced by the scheduler and the statistics
snapshot produced by the stats reporter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


class EscalationReasonCode(Enum):
    """Escalation predicates, in reporting priority order."""

    UNASSIGNED = "UNASSIGNED"
    OVERDUE_DEADLINE = "OVERDUE_DEADLINE"
    STUCK_IN_PROGRESS = "STUCK_IN_PROGRESS"
    URGENCY = "URGENCY"


@dataclass(frozen=True, eq=True)
class EscalationReason:
    """Why a complaint is escalated.

    Attributes:
        code: The predicate that matched first.
        threshold_hours: The threshold that elapsed.
        description: Human-readable reason for timeline and notifications.
        urgency: Normalized urgency for URGENCY reasons, None otherwise.
    """

    code: EscalationReasonCode
    threshold_hours: int
    description: str
    urgency: str | None = None


@dataclass(frozen=True, eq=True)
class EscalationDecision:
    """Result of evaluating the threshold policy for one complaint.

    Attributes:
        should_escalate: True if any predicate matched.
        reason: First matching predicate, None iff should_escalate is False.
        matched: Every predicate that matched, in priority order.
    """

    should_escalate: bool
    reason: EscalationReason | None = None
    matched: tuple[EscalationReasonCode, ...] = ()


class EscalationOutcomeStatus(Enum):
    """What happened to one candidate during a run."""

    ESCALATED = "ESCALATED"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    FAILED = "FAILED"
    SKIPPED_TIMEOUT = "SKIPPED_TIMEOUT"


@dataclass(frozen=True)
class EscalationOutcome:
    """Outcome of escalating a single candidate.

    Attributes:
        complaint_id: The candidate.
        status: Escalated, not eligible any more when re-read, failed,
            or skipped by the soft run timeout.
        handler_id: Resolved handler (None if none or not escalated).
        reason: Reason text written to the timeline.
        error: Error message for FAILED outcomes.
    """

    complaint_id: int
    status: EscalationOutcomeStatus
    handler_id: int | None = None
    reason: str | None = None
    error: str | None = None


class RunTrigger(Enum):
    """What started a run."""

    SCHEDULED = "SCHEDULED"
    MANUAL = "MANUAL"


class RunStatus(Enum):
    """Orchestration status of a run.

    SKIPPED is not an error: another run was already in flight.
    """

    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class SchedulerState(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"


@dataclass(frozen=True)
class EscalationRunResult:
    """Result of one escalation run.

    Attributes:
        run_id: Unique identifier of the run (also bound into logs).
        trigger: SCHEDULED or MANUAL.
        status: COMPLETED, SKIPPED or FAILED.
        started_at: When the run started.
        finished_at: When the run finished.
        candidate_count: Number of candidates selected.
        outcomes: Per-candidate outcomes, in processing order.
        timed_out: True if the soft run timeout cut the batch short.
        error: Orchestration error message for FAILED runs.
    """

    run_id: UUID
    trigger: RunTrigger
    status: RunStatus
    started_at: datetime
    finished_at: datetime
    candidate_count: int = 0
    outcomes: tuple[EscalationOutcome, ...] = field(default_factory=tuple)
    timed_out: bool = False
    error: str | None = None

    def _ids_with(self, status: EscalationOutcomeStatus) -> tuple[int, ...]:
        return tuple(o.complaint_id for o in self.outcomes if o.status == status)

    @property
    def escalated_ids(self) -> tuple[int, ...]:
        return self._ids_with(EscalationOutcomeStatus.ESCALATED)

    @property
    def failed_ids(self) -> tuple[int, ...]:
        return self._ids_with(EscalationOutcomeStatus.FAILED)

    @property
    def skipped_ids(self) -> tuple[int, ...]:
        return self._ids_with(EscalationOutcomeStatus.SKIPPED_TIMEOUT)

    @property
    def succeeded(self) -> bool:
        """True unless the orchestration itself failed."""
        return self.status != RunStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": str(self.run_id),
            "trigger": self.trigger.value,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "candidate_count": self.candidate_count,
            "escalated": list(self.escalated_ids),
            "failed": list(self.failed_ids),
            "skipped": list(self.skipped_ids),
            "timed_out": self.timed_out,
            "error": self.error,
        }


@dataclass(frozen=True, eq=True)
class EscalationStats:
    """Escalation statistics snapshot.

    Attributes:
        total_escalated: Complaints with is_escalated set.
        escalated_last_24h: Escalated within the last 24 hours.
        escalated_last_week: Escalated within the last 7 days.
        pending_escalation_count: Current candidate count.
    """

    total_escalated: int
    escalated_last_24h: int
    escalated_last_week: int
    pending_escalation_count: int

    def to_dict(self) -> dict[str, int]:
        return {
            "totalEscalated": self.total_escalated,
            "escalatedLast24h": self.escalated_last_24h,
            "escalatedLastWeek": self.escalated_last_week,
            "pendingEscalationCount": self.pending_escalation_count,
        }
