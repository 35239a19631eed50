"""Notification delivery port.

Low-level per-recipient delivery used by EscalationNotificationService.
Real adapters would write an in-app notification row or hand an email to
a mail transport; retry policy belongs to the adapter.
"""

from __future__ import annotations

from typing import Protocol

from escalation_engine.domain.events.notification import EscalationNotification


class NotificationDeliveryProtocol(Protocol):
    async def deliver(self, notification: EscalationNotification) -> None:
        """Deliver one notification.

        Raises:
            NotificationDeliveryError: If delivery fails.
        """
        ...
