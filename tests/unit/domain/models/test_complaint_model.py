"""Unit tests for the Complaint domain model."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from escalation_engine.domain.errors.escalation import InvalidEscalationStateError
from escalation_engine.domain.models.complaint import (
    Complaint,
    ComplaintStatus,
    TimelineEntry,
    Urgency,
)

NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _complaint(**kwargs: object) -> Complaint:
    defaults: dict[str, object] = {
        "id": 1,
        "status": ComplaintStatus.NEW,
        "created_at": NOW - timedelta(hours=50),
    }
    defaults.update(kwargs)
    return Complaint(**defaults)  # type: ignore[arg-type]


class TestComplaintStatus:
    """Tests for terminal status classification."""

    @pytest.mark.parametrize(
        "status",
        [ComplaintStatus.COMPLETED, ComplaintStatus.RESOLVED, ComplaintStatus.CLOSED],
    )
    def test_terminal(self, status: ComplaintStatus) -> None:
        assert status.is_terminal()

    @pytest.mark.parametrize(
        "status",
        [
            ComplaintStatus.NEW,
            ComplaintStatus.UNDER_REVIEW,
            ComplaintStatus.IN_PROGRESS,
            ComplaintStatus.ASSIGNED,
            ComplaintStatus.ESCALATED,
        ],
    )
    def test_not_terminal(self, status: ComplaintStatus) -> None:
        assert not status.is_terminal()


class TestUrgencyParse:
    """Tests for urgency normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("HIGH", Urgency.HIGH),
            ("medium", Urgency.MEDIUM),
            (" Low ", Urgency.LOW),
            ("critical", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, raw: str | None, expected: Urgency | None) -> None:
        assert Urgency.parse(raw) is expected


class TestComplaintInvariants:
    """Tests for construction-time invariants."""

    def test_escalated_without_timestamp_rejected(self) -> None:
        with pytest.raises(ValueError, match="escalated_at is required"):
            _complaint(is_escalated=True)

    def test_timestamp_without_flag_rejected(self) -> None:
        with pytest.raises(ValueError, match="must be None"):
            _complaint(escalated_at=NOW)

    @pytest.mark.parametrize("name", ["created_at", "deadline", "updated_at"])
    def test_naive_datetime_rejected(self, name: str) -> None:
        with pytest.raises(ValueError, match=f"{name} must be timezone-aware"):
            _complaint(**{name: NOW.replace(tzinfo=None)})

    def test_naive_escalated_at_rejected(self) -> None:
        with pytest.raises(ValueError, match="escalated_at must be timezone-aware"):
            _complaint(is_escalated=True, escalated_at=NOW.replace(tzinfo=None))

    def test_non_utc_offset_accepted(self) -> None:
        eastern = timezone(timedelta(hours=-5))

        complaint = _complaint(deadline=NOW.astimezone(eastern))

        assert complaint.deadline == NOW

    def test_escalate_with_naive_instant_rejected(self) -> None:
        with pytest.raises(ValueError, match="timezone-aware"):
            _complaint().escalate(
                escalated_at=NOW.replace(tzinfo=None), handler_id=3, comment="x"
            )


class TestComplaintEscalate:
    """Tests for Complaint.escalate."""

    def test_escalate_returns_new_instance(self) -> None:
        original = _complaint(assigned_to=None)

        escalated = original.escalate(escalated_at=NOW, handler_id=3, comment="why")

        assert original.is_escalated is False
        assert original.timeline == ()
        assert escalated.is_escalated
        assert escalated.escalated_at == NOW
        assert escalated.escalated_to == 3
        assert escalated.assigned_to == 3
        assert escalated.status == ComplaintStatus.ESCALATED
        assert escalated.timeline == (
            TimelineEntry(
                status=ComplaintStatus.ESCALATED,
                comment="why",
                is_internal_note=False,
                updated_by=None,
                timestamp=NOW,
            ),
        )

    def test_escalate_without_handler_keeps_assignee(self) -> None:
        escalated = _complaint(assigned_to=9).escalate(
            escalated_at=NOW, handler_id=None, comment="why"
        )

        assert escalated.assigned_to == 9
        assert escalated.escalated_to is None

    def test_escalate_twice_rejected(self) -> None:
        escalated = _complaint().escalate(escalated_at=NOW, handler_id=3, comment="x")

        with pytest.raises(InvalidEscalationStateError, match="already escalated"):
            escalated.escalate(escalated_at=NOW, handler_id=3, comment="x")

    def test_escalate_terminal_rejected(self) -> None:
        with pytest.raises(InvalidEscalationStateError, match="terminal status CLOSED"):
            _complaint(status=ComplaintStatus.CLOSED).escalate(
                escalated_at=NOW, handler_id=3, comment="x"
            )
