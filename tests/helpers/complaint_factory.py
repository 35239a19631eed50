"""Complaint factory for tests.

Ages are given in hours before a reference instant, which keeps threshold
boundary tests readable.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from escalation_engine.domain.models.complaint import Complaint, ComplaintStatus


def make_complaint(
    now: datetime,
    complaint_id: int = 1,
    *,
    age: timedelta = timedelta(hours=1),
    status: ComplaintStatus = ComplaintStatus.NEW,
    urgency: str | None = None,
    assigned_to: int | None = None,
    deadline: datetime | None = None,
    updated_at: datetime | None = None,
    submitted_by: int | None = 7,
    **overrides: Any,
) -> Complaint:
    """Build a complaint created `age` before `now`.

    By default the complaint is fresh, NEW, unassigned and has no urgency,
    so it matches no escalation predicate.
    """
    return Complaint(
        id=complaint_id,
        status=status,
        created_at=now - age,
        urgency=urgency,
        assigned_to=assigned_to,
        deadline=deadline,
        updated_at=updated_at,
        submitted_by=submitted_by,
        title=overrides.pop("title", f"Complaint {complaint_id}"),
        category=overrides.pop("category", "Sanitation"),
        **overrides,
    )
