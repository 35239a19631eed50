"""Notification delivery stub implementation.

Records every notification instead of sending it. Failures can be
injected per recipient to exercise the notifier's isolation.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from structlog import get_logger

from escalation_engine.domain.errors.escalation import NotificationDeliveryError
from escalation_engine.domain.events.notification import (
    EscalationNotification,
    NotificationChannel,
)

logger = get_logger(__name__)


@dataclass
class NotificationDeliveryStub:
    """Stub implementation of NotificationDeliveryProtocol.

    Attributes:
        deliveries: Notifications delivered so far, in order.
        fail_recipient_ids: Recipients whose deliveries raise.
        fail_channels: Channels whose deliveries raise.
    """

    deliveries: list[EscalationNotification] = field(default_factory=list)
    fail_recipient_ids: set[int] = field(default_factory=set)
    fail_channels: set[NotificationChannel] = field(default_factory=set)

    async def deliver(self, notification: EscalationNotification) -> None:
        if (
            notification.recipient_id in self.fail_recipient_ids
            or notification.channel in self.fail_channels
        ):
            raise NotificationDeliveryError(
                f"Delivery failed on {notification.channel.value}",
                recipient_id=notification.recipient_id,
            )

        self.deliveries.append(notification)
        logger.debug(
            "notification_delivered_stub",
            complaint_id=notification.complaint_id,
            recipient_id=notification.recipient_id,
            channel=notification.channel.value,
            notification_type=notification.notification_type.value,
        )

    def for_recipient(self, recipient_id: int) -> list[EscalationNotification]:
        return [n for n in self.deliveries if n.recipient_id == recipient_id]
