"""In-memory stubs for development and testing."""

from escalation_engine.infrastructure.stubs.complaint_store_stub import (
    ComplaintStoreStub,
)
from escalation_engine.infrastructure.stubs.escalation_notifier_stub import (
    EscalationNotifierStub,
)
from escalation_engine.infrastructure.stubs.notification_delivery_stub import (
    NotificationDeliveryStub,
)
from escalation_engine.infrastructure.stubs.user_directory_stub import (
    UserDirectoryStub,
)

__all__ = [
    "ComplaintStoreStub",
    "EscalationNotifierStub",
    "NotificationDeliveryStub",
    "UserDirectoryStub",
]
