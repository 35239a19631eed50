"""Complaint domain model.

The complaint is owned by the wider workflow application; the escalation
engine only reads it, produces an escalated copy and hands that copy back
to the store.

Lifecycle relevant to escalation:
    A complaint is a candidate while it is neither terminal nor already
    escalated and at least one threshold has elapsed. It leaves candidacy
    once escalated (permanently, as far as the engine is concerned) or once
    it reaches a terminal status through other workflow actions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from escalation_engine.domain.errors.escalation import InvalidEscalationStateError


class ComplaintStatus(Enum):
    """Status in the complaint workflow.

    Terminal statuses for escalation purposes: COMPLETED, RESOLVED, CLOSED.
    """

    NEW = "NEW"
    UNDER_REVIEW = "UNDER_REVIEW"
    IN_PROGRESS = "IN_PROGRESS"
    ASSIGNED = "ASSIGNED"
    COMPLETED = "COMPLETED"
    ESCALATED = "ESCALATED"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"

    def is_terminal(self) -> bool:
        """Check if this status ends the complaint's escalation eligibility."""
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: frozenset[ComplaintStatus] = frozenset(
    {
        ComplaintStatus.COMPLETED,
        ComplaintStatus.RESOLVED,
        ComplaintStatus.CLOSED,
    }
)


class Urgency(Enum):
    """Normalized urgency level of a complaint."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, value: str | None) -> Urgency | None:
        """Parse a raw urgency string case-insensitively.

        Args:
            value: Raw urgency as submitted (e.g. "high", " Medium ").

        Returns:
            The matching Urgency, or None for missing/unrecognized input.

        Example:
            >>> Urgency.parse("high")
            <Urgency.HIGH: 'HIGH'>
            >>> Urgency.parse("critical") is None
            True
        """
        if value is None:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True, eq=True)
class TimelineEntry:
    """One audit entry in a complaint's timeline.

    Entries are never mutated or removed once appended.

    Attributes:
        status: Complaint status recorded with this entry.
        comment: Human-readable description of what happened.
        is_internal_note: Internal notes are hidden from the complainant.
        updated_by: User id of the actor, None for system actions.
        timestamp: When the entry was recorded.
    """

    status: ComplaintStatus
    comment: str
    is_internal_note: bool
    updated_by: int | None
    timestamp: datetime


@dataclass(frozen=True, eq=True)
class Complaint:
    """A complaint as seen by the escalation engine.

    Attributes:
        id: Opaque unique identifier.
        status: Current workflow status.
        created_at: Creation instant (set by the store).
        urgency: Raw urgency string; see Urgency.parse for normalization.
        assigned_to: User id of the handling user, if any.
        deadline: Optional resolution deadline.
        updated_at: Last modification instant (set by the store).
        is_escalated: Whether the complaint has been escalated.
        escalated_at: When it was escalated; set iff is_escalated.
        escalated_to: User id of the escalation handler, if any.
        timeline: Append-only audit trail.
        submitted_by: User id of the complainant, if known.
        title: Short description, used in notifications.
        category: Complaint category, used in notifications.
    """

    id: int
    status: ComplaintStatus
    created_at: datetime
    urgency: str | None = None
    assigned_to: int | None = None
    deadline: datetime | None = None
    updated_at: datetime | None = None
    is_escalated: bool = False
    escalated_at: datetime | None = None
    escalated_to: int | None = None
    timeline: tuple[TimelineEntry, ...] = field(default_factory=tuple)
    submitted_by: int | None = None
    title: str | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        """Enforce timezone-aware instants and escalated_at iff is_escalated."""
        for name in ("created_at", "deadline", "updated_at", "escalated_at"):
            value = getattr(self, name)
            if value is not None and value.utcoffset() is None:
                raise ValueError(
                    f"Complaint {self.id}: {name} must be timezone-aware, got {value!r}"
                )
        if self.is_escalated and self.escalated_at is None:
            raise ValueError(
                f"Complaint {self.id}: escalated_at is required when is_escalated"
            )
        if not self.is_escalated and self.escalated_at is not None:
            raise ValueError(
                f"Complaint {self.id}: escalated_at must be None when not escalated"
            )

    @property
    def normalized_urgency(self) -> Urgency | None:
        return Urgency.parse(self.urgency)

    def escalate(
        self,
        escalated_at: datetime,
        handler_id: int | None,
        comment: str,
    ) -> Complaint:
        """Return the escalated copy of this complaint.

        Sets the escalation flag, timestamp, handler and ESCALATED status,
        reassigns the complaint to the handler when there is one, and
        appends exactly one public, system-attributed timeline entry.

        Args:
            escalated_at: The escalation instant.
            handler_id: User id of the resolved handler, or None.
            comment: Timeline comment describing the cause.

        Returns:
            The escalated complaint. This instance is left untouched.

        Raises:
            InvalidEscalationStateError: Already escalated or terminal.
        """
        if self.is_escalated:
            raise InvalidEscalationStateError(self.id, "already escalated")
        if self.status.is_terminal():
            raise InvalidEscalationStateError(
                self.id, f"terminal status {self.status.value}"
            )

        entry = TimelineEntry(
            status=ComplaintStatus.ESCALATED,
            comment=comment,
            is_internal_note=False,
            updated_by=None,
            timestamp=escalated_at,
        )
        return replace(
            self,
            status=ComplaintStatus.ESCALATED,
            is_escalated=True,
            escalated_at=escalated_at,
            escalated_to=handler_id,
            assigned_to=handler_id if handler_id is not None else self.assigned_to,
            timeline=self.timeline + (entry,),
        )
