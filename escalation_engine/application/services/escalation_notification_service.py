"""Escalation notification service.

Implements the escalation notifier port by fanning a single
ComplaintEscalatedEvent out to everyone who needs to know:

1. The complainant (COMPLAINT_ESCALATED)
2. Every ADMIN in the directory (ESCALATION_ALERT)
3. The user the complaint is now assigned to (ESCALATION_ALERT)

Recipients are de-duplicated by user id; the first role a user appears in
decides the notification they get. Every recipient gets an IN_APP
notification, plus an EMAIL one when email is enabled and an address is
known.

A failed delivery to one recipient never prevents delivery to the others.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import uuid4

from structlog import get_logger

from escalation_engine.domain.events.notification import (
    EscalationNotification,
    NotificationChannel,
    NotificationFanOutResult,
    NotificationType,
)
from escalation_engine.domain.models.user import DirectoryUser, UserRole

if TYPE_CHECKING:
    from escalation_engine.application.ports.notification_delivery import (
        NotificationDeliveryProtocol,
    )
    from escalation_engine.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )
    from escalation_engine.application.ports.user_directory import (
        UserDirectoryProtocol,
    )
    from escalation_engine.config.escalation_config import EscalationConfig
    from escalation_engine.domain.events.complaint_escalated import (
        ComplaintEscalatedEvent,
    )
    from escalation_engine.domain.models.complaint import Complaint

logger = get_logger(__name__)

COMPLAINANT_TITLE = "Your Complaint Has Been Escalated"
ADMIN_TITLE = "Complaint Escalated - Action Required"
ASSIGNEE_TITLE = "Complaint Under Your Review Has Been Escalated"


@dataclass(frozen=True)
class _Recipient:
    user_id: int
    email: str | None
    notification_type: NotificationType
    title: str
    message: str


def complainant_message(complaint: Complaint) -> str:
    return (
        f"Your complaint #{complaint.id} has been escalated to a higher authority "
        "due to urgency or deadline concerns. A senior officer will review it shortly."
    )


def admin_message(complaint: Complaint) -> str:
    return (
        f"Complaint #{complaint.id} has been automatically escalated and requires "
        f"immediate attention. Category: {complaint.category}, "
        f"Urgency: {complaint.urgency}"
    )


def assignee_message(complaint: Complaint) -> str:
    return (
        f"Complaint #{complaint.id} that was assigned to you has been escalated. "
        "Please coordinate with senior management for resolution."
    )


class EscalationNotificationService:
    """Fans escalation events out to complainant, admins and assignee.

    Example:
        >>> notifier = EscalationNotificationService(
        ...     user_directory=directory,
        ...     delivery=delivery,
        ...     time_authority=clock,
        ...     config=config,
        ... )
        >>> result = await notifier.notify_complaint_escalated(event)
        >>> result.recipient_ids
        (7, 1, 2)
    """

    def __init__(
        self,
        user_directory: UserDirectoryProtocol,
        delivery: NotificationDeliveryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: EscalationConfig,
    ) -> None:
        """Initialize the notification service.

        Args:
            user_directory: Directory for recipient lookups.
            delivery: Per-notification delivery channel.
            time_authority: Clock for notification timestamps.
            config: Email switch and subject.
        """
        self._directory = user_directory
        self._delivery = delivery
        self._time = time_authority
        self._config = config

    async def notify_complaint_escalated(
        self, event: ComplaintEscalatedEvent
    ) -> NotificationFanOutResult:
        """Notify every interested party of one escalation.

        Args:
            event: The persisted escalation.

        Returns:
            NotificationFanOutResult with delivered and failed notifications.
        """
        complaint = event.complaint
        log = logger.bind(complaint_id=complaint.id, event_id=str(event.event_id))

        recipients = await self._collect_recipients(event)
        delivered: list[EscalationNotification] = []
        failed: list[EscalationNotification] = []

        for recipient in recipients:
            for notification in self._build_notifications(complaint.id, recipient):
                try:
                    await self._delivery.deliver(notification)
                except Exception as e:
                    log.warning(
                        "Notification delivery failed",
                        recipient_id=recipient.user_id,
                        channel=notification.channel.value,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    failed.append(notification)
                else:
                    delivered.append(notification)

        result = NotificationFanOutResult(
            complaint_id=complaint.id,
            recipient_ids=tuple(r.user_id for r in recipients),
            delivered=tuple(delivered),
            failed=tuple(failed),
        )
        log.info(
            "Escalation notifications sent",
            delivery_status=result.delivery_status.value,
            recipient_count=len(recipients),
            delivered_count=len(delivered),
            failed_count=len(failed),
        )
        return result

    async def _collect_recipients(
        self, event: ComplaintEscalatedEvent
    ) -> list[_Recipient]:
        complaint = event.complaint
        recipients: dict[int, _Recipient] = {}

        def add(
            user_id: int,
            email: str | None,
            kind: NotificationType,
            title: str,
            message: str,
        ) -> None:
            if user_id not in recipients:
                recipients[user_id] = _Recipient(user_id, email, kind, title, message)

        if complaint.submitted_by is not None:
            complainant = await self._lookup(complaint.submitted_by)
            add(
                complaint.submitted_by,
                complainant.email if complainant else None,
                NotificationType.COMPLAINT_ESCALATED,
                COMPLAINANT_TITLE,
                complainant_message(complaint),
            )

        try:
            admins = await self._directory.list_by_role(UserRole.ADMIN)
        except Exception as e:
            logger.warning(
                "Admin lookup failed, skipping admin alerts",
                complaint_id=complaint.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            admins = []
        for admin in sorted(admins, key=lambda user: user.id):
            add(
                admin.id,
                admin.email,
                NotificationType.ESCALATION_ALERT,
                ADMIN_TITLE,
                admin_message(complaint),
            )

        if complaint.assigned_to is not None:
            assignee: DirectoryUser | None
            if event.handler is not None and event.handler.id == complaint.assigned_to:
                assignee = event.handler
            else:
                assignee = await self._lookup(complaint.assigned_to)
            add(
                complaint.assigned_to,
                assignee.email if assignee else None,
                NotificationType.ESCALATION_ALERT,
                ASSIGNEE_TITLE,
                assignee_message(complaint),
            )

        return list(recipients.values())

    async def _lookup(self, user_id: int) -> DirectoryUser | None:
        try:
            return await self._directory.get(user_id)
        except Exception as e:
            logger.warning(
                "Recipient lookup failed, sending in-app only",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def _build_notifications(
        self, complaint_id: int, recipient: _Recipient
    ) -> list[EscalationNotification]:
        created_at = self._time.now()
        notifications = [
            EscalationNotification(
                notification_id=uuid4(),
                complaint_id=complaint_id,
                recipient_id=recipient.user_id,
                recipient_email=recipient.email,
                notification_type=recipient.notification_type,
                channel=NotificationChannel.IN_APP,
                title=recipient.title,
                message=recipient.message,
                created_at=created_at,
            )
        ]
        if self._config.enable_email_notifications and recipient.email:
            notifications.append(
                EscalationNotification(
                    notification_id=uuid4(),
                    complaint_id=complaint_id,
                    recipient_id=recipient.user_id,
                    recipient_email=recipient.email,
                    notification_type=recipient.notification_type,
                    channel=NotificationChannel.EMAIL,
                    title=self._config.notification_email_subject,
                    message=recipient.message,
                    created_at=created_at,
                )
            )
        return notifications
