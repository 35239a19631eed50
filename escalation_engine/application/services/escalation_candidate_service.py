"""Escalation candidate selection.

Scans the full complaint set and returns the complaints that must be
escalated now:

1. Exclude complaints that are already escalated (escalation is monotonic)
2. Exclude complaints in a terminal status (COMPLETED, RESOLVED, CLOSED)
3. Keep the remainder the threshold policy says should escalate

The result is in store order. Callers that need determinism sort
explicitly. There is no pagination: one run's complaint volume is expected
to fit in memory.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from structlog import get_logger

from escalation_engine.domain.errors.escalation import (
    ComplaintStoreError,
    EscalationError,
)

if TYPE_CHECKING:
    from escalation_engine.application.ports.complaint_store import (
        ComplaintStoreProtocol,
    )
    from escalation_engine.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )
    from escalation_engine.application.services.escalation_threshold_service import (
        EscalationThresholdService,
    )
    from escalation_engine.domain.models.complaint import Complaint

logger = get_logger(__name__)


class EscalationCandidateService:
    """Selects complaints that are due for automatic escalation.

    Read-only: never mutates the store.

    Example:
        >>> selector = EscalationCandidateService(
        ...     complaint_store=store,
        ...     threshold_policy=policy,
        ...     time_authority=clock,
        ... )
        >>> candidates = await selector.find_candidates()
    """

    def __init__(
        self,
        complaint_store: ComplaintStoreProtocol,
        threshold_policy: EscalationThresholdService,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        """Initialize the candidate selector.

        Args:
            complaint_store: Store to scan.
            threshold_policy: Policy deciding whether a complaint escalates.
            time_authority: Clock used when no explicit instant is given.
        """
        self._store = complaint_store
        self._policy = threshold_policy
        self._time = time_authority

    async def find_candidates(self, now: datetime | None = None) -> list[Complaint]:
        """Return the current escalation candidates.

        Args:
            now: Evaluation instant. Defaults to the time authority's now().

        Returns:
            Candidates in store order.

        Raises:
            ComplaintStoreError: If the store scan fails.
        """
        evaluated_at = now if now is not None else self._time.now()
        log = logger.bind(evaluated_at=evaluated_at.isoformat())

        try:
            complaints = await self._store.list_all()
        except EscalationError:
            log.error("Complaint store scan failed", exc_info=True)
            raise
        except Exception as e:
            log.error(
                "Complaint store scan failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ComplaintStoreError("list_all") from e

        return self.select(complaints, evaluated_at)

    def select(self, complaints: list[Complaint], now: datetime) -> list[Complaint]:
        """Apply the exclusion rules and the threshold policy to a complaint list.

        A complaint whose evaluation raises is logged and left out; the rest
        of the list is still evaluated.

        Args:
            complaints: Complaints to filter.
            now: Evaluation instant.

        Returns:
            The filtered list, preserving input order.
        """
        candidates: list[Complaint] = []
        excluded_escalated = 0
        excluded_terminal = 0
        evaluation_failures = 0

        for complaint in complaints:
            if complaint.is_escalated:
                excluded_escalated += 1
                continue
            if complaint.status.is_terminal():
                excluded_terminal += 1
                continue

            try:
                decision = self._policy.evaluate(complaint, now)
            except Exception as e:
                evaluation_failures += 1
                logger.error(
                    "Threshold evaluation failed, skipping complaint",
                    complaint_id=complaint.id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            if decision.should_escalate:
                logger.debug(
                    "Complaint is escalation candidate",
                    complaint_id=complaint.id,
                    status=complaint.status.value,
                    reason_code=decision.reason.code.value if decision.reason else None,
                    matched=[code.value for code in decision.matched],
                )
                candidates.append(complaint)

        logger.info(
            "Escalation candidates selected",
            total_complaints=len(complaints),
            excluded_escalated=excluded_escalated,
            excluded_terminal=excluded_terminal,
            evaluation_failures=evaluation_failures,
            candidate_count=len(candidates),
        )
        return candidates
