"""Complaint store stub implementation.

In-memory implementation of ComplaintStoreProtocol for development and
testing. Saves go through a lock, so each save is atomic for the single
complaint it writes.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from escalation_engine.domain.errors.escalation import ComplaintStoreError
from escalation_engine.domain.models.complaint import Complaint

if TYPE_CHECKING:
    from escalation_engine.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )


class ComplaintStoreStub:
    """In-memory stub implementation of ComplaintStoreProtocol.

    NOT suitable for production use.

    Attributes:
        fail_on_save_ids: Complaint ids whose save raises ComplaintStoreError.
        fail_on_list: If True, list_all and list_by_escalated raise.
        save_count: Number of successful saves.
    """

    def __init__(self, time_authority: TimeAuthorityProtocol | None = None) -> None:
        """Initialize the stub with empty storage.

        Args:
            time_authority: Clock used to stamp updated_at on save. Falls
                back to the system clock when not given.
        """
        self._complaints: dict[int, Complaint] = {}
        self._time = time_authority
        self._lock = asyncio.Lock()
        self.fail_on_save_ids: set[int] = set()
        self.fail_on_list: bool = False
        self.save_count: int = 0

    def add(self, complaint: Complaint) -> None:
        """Seed a complaint as-is, without touching updated_at."""
        self._complaints[complaint.id] = complaint

    def seed(self, complaints: list[Complaint]) -> None:
        for complaint in complaints:
            self.add(complaint)

    async def list_all(self) -> list[Complaint]:
        if self.fail_on_list:
            raise ComplaintStoreError("list_all")
        return list(self._complaints.values())

    async def list_by_escalated(self, is_escalated: bool) -> list[Complaint]:
        if self.fail_on_list:
            raise ComplaintStoreError("list_by_escalated")
        return [c for c in self._complaints.values() if c.is_escalated == is_escalated]

    async def get(self, complaint_id: int) -> Complaint | None:
        return self._complaints.get(complaint_id)

    async def save(self, complaint: Complaint) -> Complaint:
        """Insert or replace a complaint, stamping updated_at.

        Raises:
            ComplaintStoreError: If the id is listed in fail_on_save_ids.
        """
        async with self._lock:
            if complaint.id in self.fail_on_save_ids:
                raise ComplaintStoreError("save", complaint_id=complaint.id)
            stored = replace(complaint, updated_at=self._now())
            self._complaints[complaint.id] = stored
            self.save_count += 1
            return stored

    def _now(self) -> datetime:
        if self._time is not None:
            return self._time.now()
        return datetime.now(timezone.utc)
