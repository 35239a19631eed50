"""Configuration module for the escalation engine.

Available Configurations:
- EscalationConfig: Thresholds, scheduling and notification settings
"""

from escalation_engine.config.escalation_config import (
    DEFAULT_ESCALATION_CONFIG,
    TEST_ESCALATION_CONFIG,
    EscalationConfig,
)

__all__ = [
    "EscalationConfig",
    "DEFAULT_ESCALATION_CONFIG",
    "TEST_ESCALATION_CONFIG",
]
