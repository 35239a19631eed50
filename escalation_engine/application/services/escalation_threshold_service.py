"""Escalation threshold policy.

Pure, side-effect-free evaluation of a complaint against a given "now".

Predicates, in fixed priority order:
1. Unassigned too long: no assignee and created_at + 48h < now
2. Overdue deadline: deadline set and deadline + 24h < now
3. Stuck in progress: IN_PROGRESS, updated_at set and updated_at + 72h < now
4. Urgency staleness: created_at + urgency threshold < now
   (HIGH 24h, MEDIUM 72h, LOW 120h; unknown or missing urgency never matches)

The decision is True if ANY predicate matches. The reported reason is the
FIRST matching predicate. Both come from the same predicate list, so the
reason can never contradict the decision. Every comparison is strict:
a complaint exactly at a threshold is not yet escalated.

Developer Golden Rules:
1. PURE CALCULATION - No store access, no clock access; "now" is an argument
2. SINGLE PREDICATE LIST - Decision and reason share one evaluation
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from escalation_engine.config.escalation_config import (
    DEFAULT_ESCALATION_CONFIG,
    EscalationConfig,
)
from escalation_engine.domain.models.complaint import Complaint, ComplaintStatus
from escalation_engine.domain.models.escalation import (
    EscalationDecision,
    EscalationReason,
    EscalationReasonCode,
)

_Predicate = Callable[[Complaint, datetime], "EscalationReason | None"]


class EscalationThresholdService:
    """Threshold policy for automatic escalation.

    Threshold Table (defaults):
    | Predicate           | Threshold | Measured from |
    |---------------------|-----------|---------------|
    | Unassigned          | 48h       | created_at    |
    | Overdue deadline    | 24h       | deadline      |
    | Stuck in progress   | 72h       | updated_at    |
    | HIGH urgency        | 24h       | created_at    |
    | MEDIUM urgency      | 72h       | created_at    |
    | LOW urgency         | 120h      | created_at    |

    Example:
        >>> policy = EscalationThresholdService()
        >>> decision = policy.evaluate(complaint, now)
        >>> decision.should_escalate
        True
        >>> decision.reason.description
        'Unassigned for 48+ hours'
    """

    def __init__(self, config: EscalationConfig = DEFAULT_ESCALATION_CONFIG) -> None:
        """Initialize the threshold policy.

        Args:
            config: Immutable escalation configuration.
        """
        self._config = config
        self._predicates: tuple[_Predicate, ...] = (
            self._unassigned_too_long,
            self._overdue_deadline,
            self._stuck_in_progress,
            self._urgency_based,
        )

    @property
    def config(self) -> EscalationConfig:
        return self._config

    def evaluate(self, complaint: Complaint, now: datetime) -> EscalationDecision:
        """Evaluate every predicate for a complaint.

        Args:
            complaint: The complaint to evaluate.
            now: The evaluation instant.

        Returns:
            EscalationDecision with the first matching reason and the full
            list of matching predicates.
        """
        matched = [
            reason
            for reason in (predicate(complaint, now) for predicate in self._predicates)
            if reason is not None
        ]
        if not matched:
            return EscalationDecision(should_escalate=False)
        return EscalationDecision(
            should_escalate=True,
            reason=matched[0],
            matched=tuple(reason.code for reason in matched),
        )

    def should_escalate(self, complaint: Complaint, now: datetime) -> bool:
        """Return True if any escalation predicate matches."""
        return self.evaluate(complaint, now).should_escalate

    def determine_reason(
        self, complaint: Complaint, now: datetime
    ) -> EscalationReason | None:
        """Return the first matching predicate as a reason, or None."""
        return self.evaluate(complaint, now).reason

    # Predicates, in priority order

    def _unassigned_too_long(
        self, complaint: Complaint, now: datetime
    ) -> EscalationReason | None:
        hours = self._config.unassigned_threshold_hours
        if complaint.assigned_to is None and _elapsed(
            complaint.created_at, self._config.unassigned_threshold, now
        ):
            return EscalationReason(
                code=EscalationReasonCode.UNASSIGNED,
                threshold_hours=hours,
                description=f"Unassigned for {hours}+ hours",
            )
        return None

    def _overdue_deadline(
        self, complaint: Complaint, now: datetime
    ) -> EscalationReason | None:
        hours = self._config.overdue_threshold_hours
        if complaint.deadline is not None and _elapsed(
            complaint.deadline, self._config.overdue_threshold, now
        ):
            return EscalationReason(
                code=EscalationReasonCode.OVERDUE_DEADLINE,
                threshold_hours=hours,
                description=f"Deadline overdue by {hours}+ hours",
            )
        return None

    def _stuck_in_progress(
        self, complaint: Complaint, now: datetime
    ) -> EscalationReason | None:
        hours = self._config.stuck_threshold_hours
        if (
            complaint.status == ComplaintStatus.IN_PROGRESS
            and complaint.updated_at is not None
            and _elapsed(complaint.updated_at, self._config.stuck_threshold, now)
        ):
            return EscalationReason(
                code=EscalationReasonCode.STUCK_IN_PROGRESS,
                threshold_hours=hours,
                description=f"No progress update for {hours}+ hours",
            )
        return None

    def _urgency_based(
        self, complaint: Complaint, now: datetime
    ) -> EscalationReason | None:
        urgency = complaint.normalized_urgency
        if urgency is None:
            return None
        hours = self._config.urgency_threshold_hours(urgency.value)
        if hours is None or not _elapsed(
            complaint.created_at, timedelta(hours=hours), now
        ):
            return None
        return EscalationReason(
            code=EscalationReasonCode.URGENCY,
            threshold_hours=hours,
            description=f"{urgency.value} urgency complaint unresolved for {hours}+ hours",
            urgency=urgency.value,
        )


def _elapsed(start: datetime, threshold: timedelta, now: datetime) -> bool:
    """Strict check that start + threshold lies before now."""
    return start + threshold < now
