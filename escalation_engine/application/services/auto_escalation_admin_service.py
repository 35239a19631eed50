"""Auto-escalation admin service.

Entry points an administrative surface (HTTP controller, CLI, job runner)
calls into. Every operation except health() requires the caller to hold
the ADMIN role; the check is explicit at the top of each method.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from structlog import get_logger

from escalation_engine.domain.errors.escalation import EscalationPermissionDeniedError
from escalation_engine.domain.models.user import DirectoryUser, UserRole

if TYPE_CHECKING:
    from escalation_engine.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )
    from escalation_engine.application.services.auto_escalation_scheduler import (
        AutoEscalationScheduler,
    )
    from escalation_engine.application.services.escalation_candidate_service import (
        EscalationCandidateService,
    )
    from escalation_engine.application.services.escalation_stats_service import (
        EscalationStatsService,
    )
    from escalation_engine.config.escalation_config import EscalationConfig
    from escalation_engine.domain.models.complaint import Complaint
    from escalation_engine.domain.models.escalation import (
        EscalationRunResult,
        EscalationStats,
    )

logger = get_logger(__name__)

SERVICE_NAME = "Auto-Escalation Service"


class AutoEscalationAdminService:
    """Capability-checked admin operations for the escalation engine.

    Example:
        >>> admin_service = AutoEscalationAdminService(
        ...     scheduler=scheduler,
        ...     candidate_service=selector,
        ...     stats_service=stats_service,
        ...     config=config,
        ...     time_authority=clock,
        ... )
        >>> result = await admin_service.trigger(actor=admin_user)
    """

    def __init__(
        self,
        scheduler: AutoEscalationScheduler,
        candidate_service: EscalationCandidateService,
        stats_service: EscalationStatsService,
        config: EscalationConfig,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._scheduler = scheduler
        self._selector = candidate_service
        self._stats = stats_service
        self._config = config
        self._time = time_authority

    def _require_admin(self, actor: DirectoryUser | None, operation: str) -> None:
        """Raise unless the actor holds the ADMIN role.

        Raises:
            EscalationPermissionDeniedError: For anonymous or non-admin actors.
        """
        if actor is None or not actor.has_role(UserRole.ADMIN):
            username = actor.username if actor else None
            logger.warning(
                "Escalation admin operation denied",
                operation=operation,
                actor=username,
            )
            raise EscalationPermissionDeniedError(username, UserRole.ADMIN.value)

    async def trigger(self, actor: DirectoryUser | None) -> EscalationRunResult:
        """Run the escalation pipeline now.

        Returns:
            The run result (SKIPPED when a run is already in flight).
        """
        self._require_admin(actor, "trigger")
        logger.info("Manual escalation requested", actor=actor.username if actor else None)
        return await self._scheduler.trigger_manual()

    async def list_candidates(self, actor: DirectoryUser | None) -> list[Complaint]:
        """List current escalation candidates, sorted by complaint id."""
        self._require_admin(actor, "list_candidates")
        candidates = await self._selector.find_candidates()
        return sorted(candidates, key=lambda complaint: complaint.id)

    async def get_stats(self, actor: DirectoryUser | None) -> EscalationStats:
        self._require_admin(actor, "get_stats")
        return await self._stats.get_stats()

    def get_config(self, actor: DirectoryUser | None) -> dict[str, object]:
        """Read-only view of thresholds and scheduling settings."""
        self._require_admin(actor, "get_config")
        return self._config.to_dict()

    def health(self) -> dict[str, Any]:
        """Liveness snapshot. No capability check."""
        last = self._scheduler.last_result
        return {
            "status": "UP",
            "service": SERVICE_NAME,
            "timestamp": self._time.now().isoformat(),
            "scheduler_state": self._scheduler.state.value,
            "scheduler_running": self._scheduler.running,
            "last_run_status": last.status.value if last is not None else None,
        }
