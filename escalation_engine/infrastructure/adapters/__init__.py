"""Production adapters for escalation engine ports."""

from escalation_engine.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

__all__ = ["SystemTimeAuthority"]
