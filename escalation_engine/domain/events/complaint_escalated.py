"""Complaint escalated event payload.

Emitted by the executor to the notifier once an escalated complaint has
been persisted. The event carries the persisted complaint and the resolved
handler; it is immutable after creation.

Developer Golden Rules:
1. EMIT AFTER PERSIST - The event describes a committed escalation
2. USE to_dict() - Never use asdict() for event serialization
3. INCLUDE schema_version - All event payloads carry schema_version
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from escalation_engine.domain.models.complaint import Complaint
from escalation_engine.domain.models.escalation import EscalationReason
from escalation_engine.domain.models.user import DirectoryUser

COMPLAINT_ESCALATED_EVENT_TYPE: str = "complaint.escalated"

COMPLAINT_ESCALATED_SCHEMA_VERSION: int = 1


@dataclass(frozen=True, eq=True)
class ComplaintEscalatedEvent:
    """Event payload for an automatic complaint escalation.

    Attributes:
        event_id: Unique identifier for this event.
        run_id: The escalation run that produced it.
        complaint: The complaint as persisted after escalation.
        handler: The resolved escalation handler, None if none was found.
        reason: First matching escalation reason.
        escalated_at: The escalation instant.
        schema_version: Payload schema version.
    """

    event_id: UUID
    run_id: UUID | None
    complaint: Complaint
    handler: DirectoryUser | None
    reason: EscalationReason | None
    escalated_at: datetime
    schema_version: int = COMPLAINT_ESCALATED_SCHEMA_VERSION

    @property
    def event_type(self) -> str:
        return COMPLAINT_ESCALATED_EVENT_TYPE

    def to_dict(self) -> dict[str, Any]:
        """Convert payload to a JSON-compatible dict.

        Returns:
            Dict with ids as strings and instants in ISO 8601.
        """
        return {
            "event_type": COMPLAINT_ESCALATED_EVENT_TYPE,
            "event_id": str(self.event_id),
            "run_id": str(self.run_id) if self.run_id else None,
            "complaint_id": self.complaint.id,
            "status": self.complaint.status.value,
            "urgency": self.complaint.urgency,
            "category": self.complaint.category,
            "submitted_by": self.complaint.submitted_by,
            "handler_id": self.handler.id if self.handler else None,
            "handler_username": self.handler.username if self.handler else None,
            "reason_code": self.reason.code.value if self.reason else None,
            "reason": self.reason.description if self.reason else None,
            "escalated_at": self.escalated_at.isoformat(),
            "schema_version": self.schema_version,
        }
