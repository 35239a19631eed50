"""Unit tests for escalation engine bootstrap wiring."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from datetime import timedelta

import pytest
import structlog

from escalation_engine.application.services.escalation_notification_service import (
    EscalationNotificationService,
)
from escalation_engine.bootstrap import configure_structlog
from escalation_engine.bootstrap.escalation import (
    create_escalation_engine,
    get_escalation_engine,
    reset_escalation_engine,
    set_escalation_engine,
)
from escalation_engine.config.escalation_config import TEST_ESCALATION_CONFIG
from escalation_engine.domain.events.complaint_escalated import ComplaintEscalatedEvent
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
from tests.helpers.complaint_factory import make_complaint
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture(autouse=True)
def reset_engine() -> Iterator[None]:
    """Reset the engine singleton around each test."""
    reset_escalation_engine()
    yield
    reset_escalation_engine()


class TestCreateEscalationEngine:
    """Tests for create_escalation_engine."""

    def test_default_notifier_is_fan_out_service(
        self, fake_time_authority: FakeTimeAuthority
    ) -> None:
        engine = create_escalation_engine(
            config=TEST_ESCALATION_CONFIG,
            complaint_store=ComplaintStoreStub(),
            user_directory=UserDirectoryStub(),
            delivery=NotificationDeliveryStub(),
            time_authority=fake_time_authority,
        )

        assert isinstance(engine.notifier, EscalationNotificationService)
        assert engine.time_authority is fake_time_authority
        assert engine.handler_resolver.strategy_names[0] == "designated"

    def test_custom_notifier(self) -> None:
        notifier = EscalationNotifierStub()
        engine = create_escalation_engine(
            config=TEST_ESCALATION_CONFIG,
            complaint_store=ComplaintStoreStub(),
            user_directory=UserDirectoryStub(),
            notifier=notifier,
        )

        assert engine.notifier is notifier

    def test_requires_delivery_or_notifier(self) -> None:
        with pytest.raises(ValueError, match="delivery or notifier"):
            create_escalation_engine(
                config=TEST_ESCALATION_CONFIG,
                complaint_store=ComplaintStoreStub(),
                user_directory=UserDirectoryStub(),
            )

    @pytest.mark.asyncio
    async def test_start_and_stop(self, fake_time_authority: FakeTimeAuthority) -> None:
        engine = create_escalation_engine(
            config=TEST_ESCALATION_CONFIG,
            complaint_store=ComplaintStoreStub(),
            user_directory=UserDirectoryStub(),
            delivery=NotificationDeliveryStub(),
            time_authority=fake_time_authority,
        )

        await engine.start()
        assert engine.scheduler.running
        await engine.stop()
        assert not engine.scheduler.running

    @pytest.mark.asyncio
    async def test_stop_waits_for_in_flight_notifications(
        self, fake_time_authority: FakeTimeAuthority
    ) -> None:
        class SlowNotifier(EscalationNotifierStub):
            async def notify_complaint_escalated(
                self, event: ComplaintEscalatedEvent
            ) -> None:
                await asyncio.sleep(0.01)
                await super().notify_complaint_escalated(event)

        notifier = SlowNotifier()
        store = ComplaintStoreStub(time_authority=fake_time_authority)
        store.add(make_complaint(fake_time_authority.now(), 1, age=timedelta(hours=50)))
        engine = create_escalation_engine(
            config=TEST_ESCALATION_CONFIG,
            complaint_store=store,
            user_directory=UserDirectoryStub(),
            notifier=notifier,
            time_authority=fake_time_authority,
        )

        result = await engine.scheduler.run()
        assert result.escalated_ids == (1,)
        assert engine.executor.pending_notifications == 1

        await engine.stop()

        assert engine.executor.pending_notifications == 0
        assert notifier.notified_complaint_ids == [1]


class TestEngineSingleton:
    """Tests for get/set/reset of the process-wide engine."""

    def test_get_builds_stub_engine_once(self) -> None:
        first = get_escalation_engine()
        assert isinstance(first.complaint_store, ComplaintStoreStub)
        assert get_escalation_engine() is first

    def test_set_overrides(self) -> None:
        engine = create_escalation_engine(
            config=TEST_ESCALATION_CONFIG,
            complaint_store=ComplaintStoreStub(),
            user_directory=UserDirectoryStub(),
            notifier=EscalationNotifierStub(),
        )

        set_escalation_engine(engine)

        assert get_escalation_engine() is engine


class TestBootstrapLogging:
    """Tests for the logging bootstrap wrapper."""

    def test_environment_variable_selects_renderer(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ESCALATION_ENVIRONMENT", "development")
        try:
            configure_structlog()
            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        finally:
            structlog.reset_defaults()
