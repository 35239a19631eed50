"""Domain errors for the escalation engine.

All exceptions inherit from EscalationEngineError.
"""

from escalation_engine.domain.errors.escalation import (
    ComplaintNotFoundError,
    ComplaintStoreError,
    DirectoryLookupError,
    EscalationError,
    EscalationPermissionDeniedError,
    InvalidEscalationStateError,
    NotificationDeliveryError,
)

__all__: list[str] = [
    "ComplaintNotFoundError",
    "ComplaintStoreError",
    "DirectoryLookupError",
    "EscalationError",
    "EscalationPermissionDeniedError",
    "InvalidEscalationStateError",
    "NotificationDeliveryError",
]
