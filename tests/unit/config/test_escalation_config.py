"""Unit tests for EscalationConfig."""

from __future__ import annotations

from dataclasses import fields
from datetime import timedelta

import pytest

from escalation_engine.config.escalation_config import (
    DEFAULT_ESCALATION_CONFIG,
    TEST_ESCALATION_CONFIG,
    EscalationConfig,
)


class TestEscalationConfigDefaults:
    """Tests for compiled defaults."""

    def test_threshold_defaults(self) -> None:
        config = DEFAULT_ESCALATION_CONFIG

        assert config.unassigned_threshold == timedelta(hours=48)
        assert config.overdue_threshold == timedelta(hours=24)
        assert config.stuck_threshold == timedelta(hours=72)
        assert config.urgency_threshold_hours("HIGH") == 24
        assert config.urgency_threshold_hours("MEDIUM") == 72
        assert config.urgency_threshold_hours("LOW") == 120
        assert config.urgency_threshold_hours("CRITICAL") is None

    def test_scheduling_defaults(self) -> None:
        config = DEFAULT_ESCALATION_CONFIG

        assert config.scheduling_interval_ms == 3_600_000
        assert config.scheduling_interval_seconds == 3600.0
        assert config.enable_auto_escalation
        assert config.designated_handler_username == "officer2"

    def test_notification_defaults(self) -> None:
        config = DEFAULT_ESCALATION_CONFIG

        assert config.enable_email_notifications
        assert config.notification_email_subject == "Complaint Auto-Escalated"
        assert config.notification_timeout_seconds == 30

    def test_test_config(self) -> None:
        assert TEST_ESCALATION_CONFIG.scheduling_interval_seconds == 1.0
        assert TEST_ESCALATION_CONFIG.notification_timeout_seconds == 5
        assert not TEST_ESCALATION_CONFIG.enable_email_notifications

    def test_to_dict_lists_every_setting(self) -> None:
        config = DEFAULT_ESCALATION_CONFIG

        view = config.to_dict()

        assert set(view) == {f.name for f in fields(config)}
        assert view["notification_email_subject"] == "Complaint Auto-Escalated"
        assert view["notification_timeout_seconds"] == 30


class TestEscalationConfigValidation:
    """Tests for __post_init__ validation."""

    def test_negative_threshold_rejected(self) -> None:
        with pytest.raises(ValueError, match="stuck_threshold_hours"):
            EscalationConfig(stuck_threshold_hours=-1)

    def test_interval_below_one_second_rejected(self) -> None:
        with pytest.raises(ValueError, match="scheduling_interval_ms"):
            EscalationConfig(scheduling_interval_ms=999)

    def test_zero_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="run_timeout_seconds"):
            EscalationConfig(run_timeout_seconds=0)

    def test_zero_notification_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="notification_timeout_seconds"):
            EscalationConfig(notification_timeout_seconds=0)

    def test_zero_threshold_allowed(self) -> None:
        assert EscalationConfig(unassigned_threshold_hours=0).unassigned_threshold_hours == 0


class TestEscalationConfigFromEnvironment:
    """Tests for from_environment."""

    def test_no_environment_gives_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in (
            "ESCALATION_UNASSIGNED_THRESHOLD_HOURS",
            "ESCALATION_SCHEDULING_INTERVAL_MS",
            "ESCALATION_ENABLED",
            "ESCALATION_DESIGNATED_HANDLER",
        ):
            monkeypatch.delenv(key, raising=False)

        assert EscalationConfig.from_environment().unassigned_threshold_hours == 48

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ESCALATION_UNASSIGNED_THRESHOLD_HOURS", "12")
        monkeypatch.setenv("ESCALATION_HIGH_URGENCY_THRESHOLD_HOURS", "6")
        monkeypatch.setenv("ESCALATION_SCHEDULING_INTERVAL_MS", "60000")
        monkeypatch.setenv("ESCALATION_ENABLED", "false")
        monkeypatch.setenv("ESCALATION_DESIGNATED_HANDLER", "chief")
        monkeypatch.setenv("ESCALATION_EMAIL_NOTIFICATIONS_ENABLED", "no")
        monkeypatch.setenv("ESCALATION_NOTIFICATION_TIMEOUT_SECONDS", "10")

        config = EscalationConfig.from_environment()

        assert config.unassigned_threshold_hours == 12
        assert config.high_urgency_threshold_hours == 6
        assert config.scheduling_interval_seconds == 60.0
        assert not config.enable_auto_escalation
        assert config.designated_handler_username == "chief"
        assert not config.enable_email_notifications
        assert config.notification_timeout_seconds == 10

    def test_invalid_number_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ESCALATION_STUCK_THRESHOLD_HOURS", "three days")
        assert EscalationConfig.from_environment().stuck_threshold_hours == 72

    def test_blank_designated_handler_disables_step(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ESCALATION_DESIGNATED_HANDLER", "  ")
        assert EscalationConfig.from_environment().designated_handler_username is None

    def test_out_of_range_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ESCALATION_SCHEDULING_INTERVAL_MS", "10")
        with pytest.raises(ValueError):
            EscalationConfig.from_environment()
