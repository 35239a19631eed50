"""Unit tests for ComplaintStoreStub."""

from __future__ import annotations

from datetime import timedelta

import pytest

from escalation_engine.domain.errors.escalation import ComplaintStoreError
from escalation_engine.infrastructure.stubs.complaint_store_stub import (
    ComplaintStoreStub,
)
from tests.helpers.complaint_factory import make_complaint
from tests.helpers.fake_time_authority import FakeTimeAuthority


class TestComplaintStoreStub:
    """Tests for the in-memory complaint store."""

    @pytest.mark.asyncio
    async def test_save_stamps_updated_at(
        self,
        complaint_store: ComplaintStoreStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        now = fake_time_authority.now()
        complaint = make_complaint(now, 1, updated_at=now - timedelta(days=3))

        fake_time_authority.advance(seconds=60)
        saved = await complaint_store.save(complaint)

        assert saved.updated_at == now + timedelta(seconds=60)
        assert await complaint_store.get(1) == saved
        assert complaint_store.save_count == 1

    @pytest.mark.asyncio
    async def test_add_keeps_complaint_as_is(
        self,
        complaint_store: ComplaintStoreStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        now = fake_time_authority.now()
        complaint = make_complaint(now, 1, updated_at=now - timedelta(days=3))

        complaint_store.add(complaint)

        assert await complaint_store.get(1) == complaint

    @pytest.mark.asyncio
    async def test_list_by_escalated(
        self,
        complaint_store: ComplaintStoreStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        now = fake_time_authority.now()
        plain = make_complaint(now, 1)
        escalated = make_complaint(now, 2).escalate(
            escalated_at=now, handler_id=None, comment="x"
        )
        complaint_store.seed([plain, escalated])

        assert await complaint_store.list_by_escalated(True) == [escalated]
        assert await complaint_store.list_by_escalated(False) == [plain]
        assert len(await complaint_store.list_all()) == 2

    @pytest.mark.asyncio
    async def test_injected_failures(
        self,
        complaint_store: ComplaintStoreStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        complaint_store.fail_on_save_ids = {1}
        complaint_store.fail_on_list = True

        with pytest.raises(ComplaintStoreError) as exc_info:
            await complaint_store.save(make_complaint(fake_time_authority.now(), 1))
        with pytest.raises(ComplaintStoreError):
            await complaint_store.list_all()

        assert exc_info.value.complaint_id == 1
        assert await complaint_store.get(1) is None
