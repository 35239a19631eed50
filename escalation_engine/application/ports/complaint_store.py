"""Complaint store port.

The store is the only shared mutable resource the engine touches. The engine
needs list-all, list-by-escalated-flag, get-by-id and an atomic save of a
single complaint; it imposes no schema beyond the Complaint fields.
"""

from __future__ import annotations

from typing import Protocol

from escalation_engine.domain.models.complaint import Complaint


class ComplaintStoreProtocol(Protocol):
    """Protocol for complaint persistence.

    Implementations raise ComplaintStoreError on read/write failures.
    """

    async def list_all(self) -> list[Complaint]:
        """Return every complaint in the store."""
        ...

    async def list_by_escalated(self, is_escalated: bool) -> list[Complaint]:
        """Return complaints whose is_escalated flag equals the argument."""
        ...

    async def get(self, complaint_id: int) -> Complaint | None:
        """Return the complaint with this id, or None."""
        ...

    async def save(self, complaint: Complaint) -> Complaint:
        """Atomically persist one complaint.

        The store sets updated_at. Saving is all-or-nothing for this single
        complaint; there is no cross-complaint transaction.

        Args:
            complaint: The complaint to persist (insert or replace by id).

        Returns:
            The complaint as stored.
        """
        ...
