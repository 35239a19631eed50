"""Escalation statistics service.

Computes a read-only snapshot of escalation activity on demand:

- total_escalated: complaints with is_escalated set
- escalated_last_24h: escalated_at > now - 24h
- escalated_last_week: escalated_at > now - 7 days
- pending_escalation_count: candidates the selector would pick right now

Both windows are strict. No caching: every call re-reads the store.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from structlog import get_logger

from escalation_engine.domain.errors.escalation import (
    ComplaintStoreError,
    EscalationError,
)
from escalation_engine.domain.models.escalation import EscalationStats

if TYPE_CHECKING:
    from escalation_engine.application.ports.complaint_store import (
        ComplaintStoreProtocol,
    )
    from escalation_engine.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )
    from escalation_engine.application.services.escalation_candidate_service import (
        EscalationCandidateService,
    )

logger = get_logger(__name__)

LAST_24H_WINDOW = timedelta(hours=24)
LAST_WEEK_WINDOW = timedelta(days=7)


class EscalationStatsService:
    """Reports escalation statistics.

    Example:
        >>> stats_service = EscalationStatsService(
        ...     complaint_store=store,
        ...     candidate_service=selector,
        ...     time_authority=clock,
        ... )
        >>> stats = await stats_service.get_stats()
        >>> stats.to_dict()["pendingEscalationCount"]
        0
    """

    def __init__(
        self,
        complaint_store: ComplaintStoreProtocol,
        candidate_service: EscalationCandidateService,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._store = complaint_store
        self._selector = candidate_service
        self._time = time_authority

    async def get_stats(self, now: datetime | None = None) -> EscalationStats:
        """Compute the current escalation statistics.

        Args:
            now: Reference instant. Defaults to the time authority's now().

        Returns:
            EscalationStats snapshot.

        Raises:
            ComplaintStoreError: If the store cannot be read.
        """
        reference = now if now is not None else self._time.now()

        try:
            escalated = await self._store.list_by_escalated(True)
        except EscalationError:
            logger.error("Escalated complaint lookup failed", exc_info=True)
            raise
        except Exception as e:
            logger.error(
                "Escalated complaint lookup failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ComplaintStoreError("list_by_escalated") from e

        since_24h = reference - LAST_24H_WINDOW
        since_week = reference - LAST_WEEK_WINDOW

        stats = EscalationStats(
            total_escalated=len(escalated),
            escalated_last_24h=sum(
                1
                for c in escalated
                if c.escalated_at is not None and c.escalated_at > since_24h
            ),
            escalated_last_week=sum(
                1
                for c in escalated
                if c.escalated_at is not None and c.escalated_at > since_week
            ),
            pending_escalation_count=len(
                await self._selector.find_candidates(now=reference)
            ),
        )

        logger.debug("Escalation statistics computed", **stats.to_dict())
        return stats
