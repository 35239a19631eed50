"""Escalation notifier port.

Accepts "complaint escalated" events and delivers them to interested
parties. The executor logs and swallows anything this raises: delivery
never undoes an escalation that is already persisted.
"""

from __future__ import annotations

from typing import Protocol

from escalation_engine.domain.events.complaint_escalated import (
    ComplaintEscalatedEvent,
)


class EscalationNotifierProtocol(Protocol):
    """Protocol for escalation notification."""

    async def notify_complaint_escalated(self, event: ComplaintEscalatedEvent) -> object:
        """Deliver an escalation event to its recipients.

        Args:
            event: The persisted escalation.

        Returns:
            Implementation-specific delivery summary (may be None).
        """
        ...
