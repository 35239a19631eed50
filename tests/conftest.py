"""
Pytest configuration and shared fixtures for escalation engine tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Use FakeTimeAuthority for anything time-dependent
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from escalation_engine.domain.models.user import DirectoryUser, UserRole
from escalation_engine.infrastructure.stubs.complaint_store_stub import (
    ComplaintStoreStub,
)
from escalation_engine.infrastructure.stubs.notification_delivery_stub import (
    NotificationDeliveryStub,
)
from escalation_engine.infrastructure.stubs.user_directory_stub import (
    UserDirectoryStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

FROZEN_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Time authority frozen at FROZEN_NOW."""
    return FakeTimeAuthority(frozen_at=FROZEN_NOW)


@pytest.fixture
def complaint_store(fake_time_authority: FakeTimeAuthority) -> ComplaintStoreStub:
    return ComplaintStoreStub(time_authority=fake_time_authority)


@pytest.fixture
def admin_user() -> DirectoryUser:
    return DirectoryUser(
        id=1,
        username="admin",
        full_name="Ada Admin",
        email="admin@example.com",
        roles=frozenset({UserRole.ADMIN}),
    )


@pytest.fixture
def officer_user() -> DirectoryUser:
    return DirectoryUser(
        id=2,
        username="officer1",
        full_name="Oscar Officer",
        email="officer1@example.com",
        roles=frozenset({UserRole.OFFICER}),
    )


@pytest.fixture
def designated_officer() -> DirectoryUser:
    return DirectoryUser(
        id=3,
        username="officer2",
        full_name="Special Officer",
        email="officer2@example.com",
        roles=frozenset({UserRole.OFFICER}),
    )


@pytest.fixture
def complainant_user() -> DirectoryUser:
    return DirectoryUser(
        id=7,
        username="citizen",
        full_name="Casey Citizen",
        email="citizen@example.com",
        roles=frozenset({UserRole.USER}),
    )


@pytest.fixture
def user_directory(
    admin_user: DirectoryUser,
    officer_user: DirectoryUser,
    designated_officer: DirectoryUser,
    complainant_user: DirectoryUser,
) -> UserDirectoryStub:
    return UserDirectoryStub(
        [complainant_user, designated_officer, officer_user, admin_user]
    )


@pytest.fixture
def notification_delivery() -> NotificationDeliveryStub:
    return NotificationDeliveryStub()
