"""Escalation notification payloads.

A single ComplaintEscalatedEvent fans out into one EscalationNotification
per recipient and channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


class NotificationType(Enum):
    """Kind of escalation notification.

    Types:
        COMPLAINT_ESCALATED: Sent to the complainant.
        ESCALATION_ALERT: Sent to admins and the assigned handler.
    """

    COMPLAINT_ESCALATED = "COMPLAINT_ESCALATED"
    ESCALATION_ALERT = "ESCALATION_ALERT"


class NotificationChannel(Enum):
    IN_APP = "IN_APP"
    EMAIL = "EMAIL"


class DeliveryStatus(Enum):
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


@dataclass(frozen=True, eq=True)
class EscalationNotification:
    """One notification addressed to one recipient on one channel.

    Attributes:
        notification_id: Unique identifier.
        complaint_id: The escalated complaint.
        recipient_id: User id of the recipient.
        recipient_email: Address for the EMAIL channel, if known.
        notification_type: COMPLAINT_ESCALATED or ESCALATION_ALERT.
        channel: IN_APP or EMAIL.
        title: Short title (email subject for EMAIL).
        message: Body text.
        created_at: When the notification was produced.
    """

    notification_id: UUID
    complaint_id: int
    recipient_id: int
    recipient_email: str | None
    notification_type: NotificationType
    channel: NotificationChannel
    title: str
    message: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "notification_id": str(self.notification_id),
            "complaint_id": self.complaint_id,
            "recipient_id": self.recipient_id,
            "recipient_email": self.recipient_email,
            "notification_type": self.notification_type.value,
            "channel": self.channel.value,
            "title": self.title,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class NotificationFanOutResult:
    """Result of fanning out one escalation event.

    Attributes:
        complaint_id: The escalated complaint.
        recipient_ids: Distinct recipients, in notification order.
        delivered: Notifications delivered successfully.
        failed: Notifications whose delivery raised.
    """

    complaint_id: int
    recipient_ids: tuple[int, ...]
    delivered: tuple[EscalationNotification, ...] = ()
    failed: tuple[EscalationNotification, ...] = ()

    @property
    def delivery_status(self) -> DeliveryStatus:
        return DeliveryStatus.FAILED if self.failed else DeliveryStatus.DELIVERED
