"""Escalation notifier stub implementation.

Records escalation events without fanning them out. Useful when a test
only cares that the executor emitted the right event.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from escalation_engine.domain.errors.escalation import NotificationDeliveryError
from escalation_engine.domain.events.complaint_escalated import (
    ComplaintEscalatedEvent,
)


@dataclass
class EscalationNotifierStub:
    """Stub implementation of EscalationNotifierProtocol.

    Attributes:
        events: Events received, in order (including failed ones).
        fail_for_complaint_ids: Complaints whose notification raises.
    """

    events: list[ComplaintEscalatedEvent] = field(default_factory=list)
    fail_for_complaint_ids: set[int] = field(default_factory=set)

    async def notify_complaint_escalated(self, event: ComplaintEscalatedEvent) -> None:
        self.events.append(event)
        if event.complaint.id in self.fail_for_complaint_ids:
            raise NotificationDeliveryError(
                f"Notifier unavailable for complaint {event.complaint.id}"
            )

    @property
    def notified_complaint_ids(self) -> list[int]:
        return [event.complaint.id for event in self.events]
