"""Domain events emitted by the escalation engine."""

from escalation_engine.domain.events.complaint_escalated import (
    COMPLAINT_ESCALATED_EVENT_TYPE,
    COMPLAINT_ESCALATED_SCHEMA_VERSION,
    ComplaintEscalatedEvent,
)
from escalation_engine.domain.events.notification import (
    DeliveryStatus,
    EscalationNotification,
    NotificationChannel,
    NotificationFanOutResult,
    NotificationType,
)

__all__ = [
    "COMPLAINT_ESCALATED_EVENT_TYPE",
    "COMPLAINT_ESCALATED_SCHEMA_VERSION",
    "ComplaintEscalatedEvent",
    "DeliveryStatus",
    "EscalationNotification",
    "NotificationChannel",
    "NotificationFanOutResult",
    "NotificationType",
]
