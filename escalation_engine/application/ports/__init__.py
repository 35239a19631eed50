"""Ports (interfaces) for the collaborators of the escalation engine."""

from escalation_engine.application.ports.complaint_store import (
    ComplaintStoreProtocol,
)
from escalation_engine.application.ports.escalation_notifier import (
    EscalationNotifierProtocol,
)
from escalation_engine.application.ports.notification_delivery import (
    NotificationDeliveryProtocol,
)
from escalation_engine.application.ports.time_authority import TimeAuthorityProtocol
from escalation_engine.application.ports.user_directory import UserDirectoryProtocol

__all__ = [
    "ComplaintStoreProtocol",
    "EscalationNotifierProtocol",
    "NotificationDeliveryProtocol",
    "TimeAuthorityProtocol",
    "UserDirectoryProtocol",
]
