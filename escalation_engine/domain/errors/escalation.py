"""Escalation domain errors.

Exception classes for failures around the auto-escalation engine and the
collaborators it talks to (complaint store, user directory, notifier).

None of these are fatal to the host process: the executor contains them
per complaint and the scheduler contains them per run.
"""

from __future__ import annotations

from typing import Optional

from escalation_engine.domain.exceptions import EscalationEngineError


class EscalationError(EscalationEngineError):
    """Base error for escalation-related operations."""

    pass


class ComplaintStoreError(EscalationError):
    """Raised when the complaint store fails to read or write.

    Attributes:
        complaint_id: The complaint being read or written, if any.
        operation: The store operation that failed (e.g. "list_all", "save").
    """

    def __init__(
        self,
        operation: str,
        complaint_id: Optional[int] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize with the failed operation and optional complaint id.

        Args:
            operation: The store operation that failed.
            complaint_id: The complaint involved, if the operation targets one.
            message: Optional custom error message.
        """
        if message is None:
            target = f" for complaint {complaint_id}" if complaint_id is not None else ""
            message = f"Complaint store operation '{operation}' failed{target}"
        super().__init__(message)
        self.operation = operation
        self.complaint_id = complaint_id


class ComplaintNotFoundError(EscalationError):
    """Raised when a complaint id does not exist in the store.

    Attributes:
        complaint_id: The id that was looked up.
    """

    def __init__(self, complaint_id: int) -> None:
        super().__init__(f"Complaint not found: {complaint_id}")
        self.complaint_id = complaint_id


class InvalidEscalationStateError(EscalationError):
    """Raised when a complaint cannot be escalated from its current state.

    Escalation is monotonic: an escalated complaint is never escalated
    again, and terminal complaints (COMPLETED, RESOLVED, CLOSED) are never
    escalated at all.

    Attributes:
        complaint_id: The complaint that was rejected.
        reason: Why the transition was rejected.
    """

    def __init__(self, complaint_id: int, reason: str) -> None:
        super().__init__(f"Complaint {complaint_id} cannot be escalated: {reason}")
        self.complaint_id = complaint_id
        self.reason = reason


class DirectoryLookupError(EscalationError):
    """Raised when the user directory cannot answer a lookup.

    The handler resolver treats this as "no handler found"; it never blocks
    the escalation itself.
    """

    pass


class NotificationDeliveryError(EscalationError):
    """Raised when a notification cannot be delivered to a recipient.

    Attributes:
        recipient_id: The user the notification was addressed to, if known.
    """

    def __init__(self, message: str, recipient_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.recipient_id = recipient_id


class EscalationPermissionDeniedError(EscalationError):
    """Raised when an actor lacks the capability for an escalation operation.

    Attributes:
        actor: Username of the caller (None for anonymous).
        required_role: The role the operation requires.
    """

    def __init__(self, actor: Optional[str], required_role: str) -> None:
        super().__init__(
            f"User {actor or '<anonymous>'} lacks required role {required_role}"
        )
        self.actor = actor
        self.required_role = required_role
