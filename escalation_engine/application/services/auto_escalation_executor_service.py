"""Auto-escalation executor service.

Escalates a batch of candidates, one complaint at a time. Each candidate
goes through the same steps, and a failure on one never aborts the batch:

1. Re-read the complaint and confirm it is still eligible
2. Resolve the escalation handler (designated -> ADMIN -> OFFICER -> none)
3. Escalate: flag, timestamp, handler, ESCALATED status, reassignment,
   plus exactly one public, system-attributed timeline entry
4. Persist through the store's single-complaint atomic save
5. Hand the event to the notifier in a tracked background task; the
   batch never waits on delivery, and slow or failing deliveries are
   cancelled after the notification timeout and logged

Developer Golden Rules:
1. PERSIST BEFORE NOTIFY - The saved escalation is the source of truth
2. IDEMPOTENT - An escalated complaint is never escalated again
3. ISOLATE FAILURES - Any exception is contained at the complaint boundary
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from structlog import get_logger

from escalation_engine.config.escalation_config import (
    DEFAULT_NOTIFICATION_TIMEOUT_SECONDS,
)
from escalation_engine.domain.errors.escalation import ComplaintNotFoundError
from escalation_engine.domain.events.complaint_escalated import ComplaintEscalatedEvent
from escalation_engine.domain.models.escalation import (
    EscalationOutcome,
    EscalationOutcomeStatus,
    EscalationReason,
)

if TYPE_CHECKING:
    from escalation_engine.application.ports.complaint_store import (
        ComplaintStoreProtocol,
    )
    from escalation_engine.application.ports.escalation_notifier import (
        EscalationNotifierProtocol,
    )
    from escalation_engine.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )
    from escalation_engine.application.services.escalation_handler_resolver import (
        EscalationHandlerResolver,
    )
    from escalation_engine.application.services.escalation_threshold_service import (
        EscalationThresholdService,
    )
    from escalation_engine.domain.models.complaint import Complaint
    from escalation_engine.domain.models.user import DirectoryUser

logger = get_logger(__name__)


def build_escalation_comment(
    reason: EscalationReason,
    escalated_at: datetime,
    handler: DirectoryUser | None,
) -> str:
    """Build the timeline comment for an automatic escalation.

    Args:
        reason: First matching escalation reason.
        escalated_at: The escalation instant.
        handler: The resolved handler, or None.

    Returns:
        Comment summarizing the reason and the handler.
    """
    comment = (
        f"AUTOMATED ESCALATION: {reason.description}. "
        f"System auto-escalated at {escalated_at.isoformat()}."
    )
    if handler is not None:
        return f"{comment} Escalated and assigned to: {handler.display_name} ({handler.username})."
    return f"{comment} No escalation handler available."


class AutoEscalationExecutorService:
    """Executes automatic escalation for selected candidates.

    Example:
        >>> executor = AutoEscalationExecutorService(
        ...     complaint_store=store,
        ...     handler_resolver=resolver,
        ...     threshold_policy=policy,
        ...     notifier=notifier,
        ...     time_authority=clock,
        ... )
        >>> outcomes, timed_out = await executor.escalate_candidates(candidates, now)
    """

    def __init__(
        self,
        complaint_store: ComplaintStoreProtocol,
        handler_resolver: EscalationHandlerResolver,
        threshold_policy: EscalationThresholdService,
        notifier: EscalationNotifierProtocol,
        time_authority: TimeAuthorityProtocol,
        notification_timeout_seconds: float = DEFAULT_NOTIFICATION_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the executor.

        Args:
            complaint_store: Store for re-reads and atomic saves.
            handler_resolver: Strategy chain picking the escalation handler.
            threshold_policy: Policy used to confirm eligibility and the reason.
            notifier: Receives one event per persisted escalation.
            time_authority: Monotonic clock for the soft run deadline.
            notification_timeout_seconds: Budget for one event's delivery
                before its background task gives up.
        """
        self._store = complaint_store
        self._resolver = handler_resolver
        self._policy = threshold_policy
        self._notifier = notifier
        self._time = time_authority
        self._notification_timeout = notification_timeout_seconds
        self._notification_tasks: set[asyncio.Task[None]] = set()

    @property
    def pending_notifications(self) -> int:
        """Number of notification tasks still in flight."""
        return len(self._notification_tasks)

    async def escalate_candidates(
        self,
        candidates: Sequence[Complaint],
        now: datetime,
        run_id: UUID | None = None,
        deadline_monotonic: float | None = None,
    ) -> tuple[list[EscalationOutcome], bool]:
        """Escalate every candidate, isolating per-complaint failures.

        Args:
            candidates: Complaints selected for escalation.
            now: Escalation instant written to every complaint of this batch.
            run_id: Run identifier, carried into events and logs.
            deadline_monotonic: Soft deadline on the time authority's monotonic
                clock. Once passed, the remaining candidates are skipped;
                escalations already persisted are kept.

        Returns:
            Tuple of (outcomes in processing order, whether the deadline hit).
        """
        outcomes: list[EscalationOutcome] = []
        timed_out = False

        for index, candidate in enumerate(candidates):
            if deadline_monotonic is not None and self._time.monotonic() >= deadline_monotonic:
                remaining = candidates[index:]
                logger.warning(
                    "Soft run timeout reached, skipping remaining candidates",
                    run_id=str(run_id) if run_id else None,
                    skipped_count=len(remaining),
                    processed_count=index,
                )
                outcomes.extend(
                    EscalationOutcome(
                        complaint_id=c.id,
                        status=EscalationOutcomeStatus.SKIPPED_TIMEOUT,
                    )
                    for c in remaining
                )
                timed_out = True
                break

            outcomes.append(await self.escalate(candidate, now, run_id=run_id))

        return outcomes, timed_out

    async def escalate(
        self,
        complaint: Complaint,
        now: datetime,
        run_id: UUID | None = None,
    ) -> EscalationOutcome:
        """Escalate one complaint.

        Never raises: every failure becomes a FAILED outcome.

        Args:
            complaint: The candidate as selected.
            now: The escalation instant.
            run_id: Run identifier for events and logs.

        Returns:
            EscalationOutcome describing what happened.
        """
        log = logger.bind(
            complaint_id=complaint.id,
            run_id=str(run_id) if run_id else None,
        )
        log.info("Starting auto-escalation")

        try:
            current = await self._store.get(complaint.id)
            if current is None:
                raise ComplaintNotFoundError(complaint.id)

            # Step 1: IDEMPOTENCY CHECK - state may have moved since the scan
            if current.is_escalated or current.status.is_terminal():
                log.info(
                    "Complaint no longer eligible, skipping",
                    is_escalated=current.is_escalated,
                    status=current.status.value,
                )
                return EscalationOutcome(
                    complaint_id=complaint.id,
                    status=EscalationOutcomeStatus.NOT_ELIGIBLE,
                )

            # Reason is taken from the pre-escalation state
            decision = self._policy.evaluate(current, now)
            if not decision.should_escalate or decision.reason is None:
                log.info("Complaint no longer meets any escalation threshold")
                return EscalationOutcome(
                    complaint_id=complaint.id,
                    status=EscalationOutcomeStatus.NOT_ELIGIBLE,
                )
            reason = decision.reason

            # Step 2: Resolve handler (never raises)
            handler = await self._resolver.resolve()
            handler_id = handler.id if handler is not None else None

            # Step 3: Escalate with one timeline entry
            escalated = current.escalate(
                escalated_at=now,
                handler_id=handler_id,
                comment=build_escalation_comment(reason, now, handler),
            )

            # Step 4: Persist (single-complaint atomic save)
            saved = await self._store.save(escalated)
            log.info(
                "Complaint escalated",
                reason_code=reason.code.value,
                reason=reason.description,
                handler_id=handler_id,
                handler_username=handler.username if handler else None,
            )
        except Exception as e:
            log.error(
                "Auto-escalation failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return EscalationOutcome(
                complaint_id=complaint.id,
                status=EscalationOutcomeStatus.FAILED,
                error=str(e) or type(e).__name__,
            )

        # Step 5: Notify in the background - delivery never holds up the batch
        self._dispatch_notification(
            ComplaintEscalatedEvent(
                event_id=uuid4(),
                run_id=run_id,
                complaint=saved,
                handler=handler,
                reason=reason,
                escalated_at=now,
            ),
        )

        return EscalationOutcome(
            complaint_id=complaint.id,
            status=EscalationOutcomeStatus.ESCALATED,
            handler_id=handler_id,
            reason=reason.description,
        )

    async def drain_notifications(self, timeout: float | None = None) -> None:
        """Wait for in-flight notification tasks.

        Args:
            timeout: Seconds to wait before cancelling whatever is left.
                None waits until every task has finished on its own.
        """
        if not self._notification_tasks:
            return
        _, pending = await asyncio.wait(set(self._notification_tasks), timeout=timeout)
        if pending:
            logger.warning(
                "Cancelling undelivered escalation notifications",
                cancelled_count=len(pending),
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

    def _dispatch_notification(self, event: ComplaintEscalatedEvent) -> None:
        task = asyncio.create_task(
            self._deliver(event),
            name=f"escalation-notify-{event.complaint.id}",
        )
        self._notification_tasks.add(task)
        task.add_done_callback(functools.partial(self._on_notification_done, event))

    async def _deliver(self, event: ComplaintEscalatedEvent) -> None:
        await asyncio.wait_for(
            self._notifier.notify_complaint_escalated(event),
            timeout=self._notification_timeout,
        )

    def _on_notification_done(
        self, event: ComplaintEscalatedEvent, task: asyncio.Task[None]
    ) -> None:
        self._notification_tasks.discard(task)
        log = logger.bind(
            complaint_id=event.complaint.id,
            event_type=event.event_type,
            event_id=str(event.event_id),
            run_id=str(event.run_id) if event.run_id else None,
        )
        if task.cancelled():
            log.warning("Escalation notification cancelled; escalation stays committed")
            return
        error = task.exception()
        if error is not None:
            log.error(
                "Escalation notification failed; escalation stays committed",
                error=str(error),
                error_type=type(error).__name__,
            )
