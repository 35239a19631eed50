"""Auto-escalation configuration.

Thresholds and scheduling settings for the escalation engine. Values are
loaded once at process start and never change afterwards.

Environment Variables (Thresholds, hours):
- ESCALATION_UNASSIGNED_THRESHOLD_HOURS: Unassigned complaint age (default: 48)
- ESCALATION_OVERDUE_THRESHOLD_HOURS: Grace period after deadline (default: 24)
- ESCALATION_STUCK_THRESHOLD_HOURS: IN_PROGRESS without update (default: 72)
- ESCALATION_HIGH_URGENCY_THRESHOLD_HOURS: HIGH urgency age (default: 24)
- ESCALATION_MEDIUM_URGENCY_THRESHOLD_HOURS: MEDIUM urgency age (default: 72)
- ESCALATION_LOW_URGENCY_THRESHOLD_HOURS: LOW urgency age (default: 120)

Environment Variables (Scheduling):
- ESCALATION_SCHEDULING_INTERVAL_MS: Timer period (default: 3600000)
- ESCALATION_RUN_TIMEOUT_SECONDS: Soft budget for one run (default: 900)
- ESCALATION_ENABLED: Start the periodic timer (default: true)

Environment Variables (Handlers and notifications):
- ESCALATION_DESIGNATED_HANDLER: Username tried first as handler (default: officer2)
- ESCALATION_EMAIL_NOTIFICATIONS_ENABLED: Also send email (default: true)
- ESCALATION_NOTIFICATION_EMAIL_SUBJECT: Email subject line
- ESCALATION_NOTIFICATION_TIMEOUT_SECONDS: Budget for one escalation's notification
  fan-out before it is cancelled (default: 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

DEFAULT_UNASSIGNED_THRESHOLD_HOURS = 48
DEFAULT_OVERDUE_THRESHOLD_HOURS = 24
DEFAULT_STUCK_THRESHOLD_HOURS = 72
DEFAULT_HIGH_URGENCY_THRESHOLD_HOURS = 24
DEFAULT_MEDIUM_URGENCY_THRESHOLD_HOURS = 72
DEFAULT_LOW_URGENCY_THRESHOLD_HOURS = 120

DEFAULT_SCHEDULING_INTERVAL_MS = 3_600_000
DEFAULT_RUN_TIMEOUT_SECONDS = 900
DEFAULT_DESIGNATED_HANDLER = "officer2"
DEFAULT_NOTIFICATION_EMAIL_SUBJECT = "Complaint Auto-Escalated"
DEFAULT_NOTIFICATION_TIMEOUT_SECONDS = 30

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive).
    Anything else yields the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_str_env(key: str, default: str | None) -> str | None:
    value = os.environ.get(key)
    if value is None:
        return default
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class EscalationConfig:
    """Immutable configuration for the auto-escalation engine.

    All values can be overridden via environment variables through
    from_environment(). Instances are injected into the threshold policy
    and the scheduler at construction.

    Attributes:
        unassigned_threshold_hours: Age after which an unassigned complaint escalates.
        overdue_threshold_hours: Grace period after a missed deadline.
        stuck_threshold_hours: Time without update for IN_PROGRESS complaints.
        high_urgency_threshold_hours: Age limit for HIGH urgency complaints.
        medium_urgency_threshold_hours: Age limit for MEDIUM urgency complaints.
        low_urgency_threshold_hours: Age limit for LOW urgency complaints.
        scheduling_interval_ms: Period of the background timer.
        run_timeout_seconds: Soft budget for one run. Remaining candidates
            are skipped once exceeded; persisted escalations stay.
        enable_auto_escalation: Whether the periodic timer runs at all.
        designated_handler_username: User tried first as escalation handler.
            None disables the designated-user strategy.
        enable_email_notifications: Send email in addition to in-app.
        notification_email_subject: Subject used for escalation emails.
        notification_timeout_seconds: Budget for delivering one escalation's
            notifications. Delivery runs outside the run and is cancelled
            once this is exceeded.
    """

    unassigned_threshold_hours: int = DEFAULT_UNASSIGNED_THRESHOLD_HOURS
    overdue_threshold_hours: int = DEFAULT_OVERDUE_THRESHOLD_HOURS
    stuck_threshold_hours: int = DEFAULT_STUCK_THRESHOLD_HOURS
    high_urgency_threshold_hours: int = DEFAULT_HIGH_URGENCY_THRESHOLD_HOURS
    medium_urgency_threshold_hours: int = DEFAULT_MEDIUM_URGENCY_THRESHOLD_HOURS
    low_urgency_threshold_hours: int = DEFAULT_LOW_URGENCY_THRESHOLD_HOURS
    scheduling_interval_ms: int = DEFAULT_SCHEDULING_INTERVAL_MS
    run_timeout_seconds: int = DEFAULT_RUN_TIMEOUT_SECONDS
    enable_auto_escalation: bool = True
    designated_handler_username: str | None = DEFAULT_DESIGNATED_HANDLER
    enable_email_notifications: bool = True
    notification_email_subject: str = DEFAULT_NOTIFICATION_EMAIL_SUBJECT
    notification_timeout_seconds: int = DEFAULT_NOTIFICATION_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for name in (
            "unassigned_threshold_hours",
            "overdue_threshold_hours",
            "stuck_threshold_hours",
            "high_urgency_threshold_hours",
            "medium_urgency_threshold_hours",
            "low_urgency_threshold_hours",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.scheduling_interval_ms < 1000:
            raise ValueError(
                "scheduling_interval_ms must be at least 1000, "
                f"got {self.scheduling_interval_ms}"
            )
        if self.run_timeout_seconds < 1:
            raise ValueError(
                f"run_timeout_seconds must be positive, got {self.run_timeout_seconds}"
            )
        if not self.notification_email_subject:
            raise ValueError("notification_email_subject must not be empty")
        if self.notification_timeout_seconds < 1:
            raise ValueError(
                "notification_timeout_seconds must be positive, "
                f"got {self.notification_timeout_seconds}"
            )

    @property
    def unassigned_threshold(self) -> timedelta:
        return timedelta(hours=self.unassigned_threshold_hours)

    @property
    def overdue_threshold(self) -> timedelta:
        return timedelta(hours=self.overdue_threshold_hours)

    @property
    def stuck_threshold(self) -> timedelta:
        return timedelta(hours=self.stuck_threshold_hours)

    @property
    def scheduling_interval_seconds(self) -> float:
        """Timer period in seconds, as used by asyncio.sleep."""
        return self.scheduling_interval_ms / 1000

    def urgency_threshold_hours(self, urgency: str) -> int | None:
        """Get the age threshold for a normalized urgency level.

        Args:
            urgency: One of "HIGH", "MEDIUM", "LOW".

        Returns:
            Threshold in hours, or None for any other value.
        """
        return {
            "HIGH": self.high_urgency_threshold_hours,
            "MEDIUM": self.medium_urgency_threshold_hours,
            "LOW": self.low_urgency_threshold_hours,
        }.get(urgency)

    def to_dict(self) -> dict[str, object]:
        """Read-only view of the thresholds and scheduling settings."""
        return {
            "unassigned_threshold_hours": self.unassigned_threshold_hours,
            "overdue_threshold_hours": self.overdue_threshold_hours,
            "stuck_threshold_hours": self.stuck_threshold_hours,
            "high_urgency_threshold_hours": self.high_urgency_threshold_hours,
            "medium_urgency_threshold_hours": self.medium_urgency_threshold_hours,
            "low_urgency_threshold_hours": self.low_urgency_threshold_hours,
            "scheduling_interval_ms": self.scheduling_interval_ms,
            "run_timeout_seconds": self.run_timeout_seconds,
            "enable_auto_escalation": self.enable_auto_escalation,
            "designated_handler_username": self.designated_handler_username,
            "enable_email_notifications": self.enable_email_notifications,
            "notification_email_subject": self.notification_email_subject,
            "notification_timeout_seconds": self.notification_timeout_seconds,
        }

    @classmethod
    def from_environment(cls) -> "EscalationConfig":
        """Create config from environment variables with defaults.

        Returns:
            EscalationConfig with values from environment or defaults.

        Raises:
            ValueError: If a parsed value is out of range.
        """
        return cls(
            unassigned_threshold_hours=_get_int_env(
                "ESCALATION_UNASSIGNED_THRESHOLD_HOURS",
                DEFAULT_UNASSIGNED_THRESHOLD_HOURS,
            ),
            overdue_threshold_hours=_get_int_env(
                "ESCALATION_OVERDUE_THRESHOLD_HOURS", DEFAULT_OVERDUE_THRESHOLD_HOURS
            ),
            stuck_threshold_hours=_get_int_env(
                "ESCALATION_STUCK_THRESHOLD_HOURS", DEFAULT_STUCK_THRESHOLD_HOURS
            ),
            high_urgency_threshold_hours=_get_int_env(
                "ESCALATION_HIGH_URGENCY_THRESHOLD_HOURS",
                DEFAULT_HIGH_URGENCY_THRESHOLD_HOURS,
            ),
            medium_urgency_threshold_hours=_get_int_env(
                "ESCALATION_MEDIUM_URGENCY_THRESHOLD_HOURS",
                DEFAULT_MEDIUM_URGENCY_THRESHOLD_HOURS,
            ),
            low_urgency_threshold_hours=_get_int_env(
                "ESCALATION_LOW_URGENCY_THRESHOLD_HOURS",
                DEFAULT_LOW_URGENCY_THRESHOLD_HOURS,
            ),
            scheduling_interval_ms=_get_int_env(
                "ESCALATION_SCHEDULING_INTERVAL_MS", DEFAULT_SCHEDULING_INTERVAL_MS
            ),
            run_timeout_seconds=_get_int_env(
                "ESCALATION_RUN_TIMEOUT_SECONDS", DEFAULT_RUN_TIMEOUT_SECONDS
            ),
            enable_auto_escalation=_get_bool_env("ESCALATION_ENABLED", True),
            designated_handler_username=_get_str_env(
                "ESCALATION_DESIGNATED_HANDLER", DEFAULT_DESIGNATED_HANDLER
            ),
            enable_email_notifications=_get_bool_env(
                "ESCALATION_EMAIL_NOTIFICATIONS_ENABLED", True
            ),
            notification_email_subject=_get_str_env(
                "ESCALATION_NOTIFICATION_EMAIL_SUBJECT",
                DEFAULT_NOTIFICATION_EMAIL_SUBJECT,
            )
            or DEFAULT_NOTIFICATION_EMAIL_SUBJECT,
            notification_timeout_seconds=_get_int_env(
                "ESCALATION_NOTIFICATION_TIMEOUT_SECONDS",
                DEFAULT_NOTIFICATION_TIMEOUT_SECONDS,
            ),
        )


# Default production config (compiled defaults, no environment lookup)
DEFAULT_ESCALATION_CONFIG = EscalationConfig()

# Testing config: short interval and timeouts, email disabled
TEST_ESCALATION_CONFIG = EscalationConfig(
    scheduling_interval_ms=1000,
    run_timeout_seconds=30,
    enable_email_notifications=False,
    notification_timeout_seconds=5,
)
