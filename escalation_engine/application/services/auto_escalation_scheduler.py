"""Auto-escalation scheduler background service.

Runs the select-then-escalate pipeline on a fixed period and exposes a
manual trigger. Both entry points go through the same run() function.

State machine:
    IDLE -> RUNNING (run starts)
    RUNNING -> IDLE (run finishes, successfully or not)

At most one run is in flight. The run lock is acquired without waiting:
a tick or manual trigger arriving while a run is executing gets a SKIPPED
result immediately instead of queuing behind it.

Scheduling is strictly serial: after a run the loop sleeps for the
remainder of the interval, so a slow run delays the next tick. Missed ticks
are neither queued nor coalesced.

Note:
    This service should be started with the application lifecycle
    and stopped when the application shuts down.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID, uuid4

from escalation_engine.domain.models.escalation import (
    EscalationRunResult,
    RunStatus,
    RunTrigger,
    SchedulerState,
)
from escalation_engine.infrastructure.observability.correlation import (
    reset_correlation_id,
    set_correlation_id,
)
from escalation_engine.infrastructure.observability.logging import (
    get_logger_for_service,
)

if TYPE_CHECKING:
    from escalation_engine.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )
    from escalation_engine.application.services.auto_escalation_executor_service import (
        AutoEscalationExecutorService,
    )
    from escalation_engine.application.services.escalation_candidate_service import (
        EscalationCandidateService,
    )
    from escalation_engine.config.escalation_config import EscalationConfig


class AutoEscalationScheduler:
    """Periodic and on-demand driver of the escalation pipeline.

    Attributes:
        running: Whether the background timer is active.
        state: IDLE or RUNNING (a run is in flight).
        interval_seconds: Timer period in seconds.

    Example:
        >>> scheduler = AutoEscalationScheduler(
        ...     candidate_service=selector,
        ...     executor=executor,
        ...     time_authority=clock,
        ...     config=config,
        ... )
        >>> await scheduler.start()
        >>> result = await scheduler.trigger_manual()
        >>> await scheduler.stop()
    """

    def __init__(
        self,
        candidate_service: EscalationCandidateService,
        executor: AutoEscalationExecutorService,
        time_authority: TimeAuthorityProtocol,
        config: EscalationConfig,
    ) -> None:
        """Initialize the scheduler.

        Args:
            candidate_service: Selects the candidates of each run.
            executor: Escalates the selected candidates.
            time_authority: Clock for run timestamps and the soft deadline.
            config: Interval, soft timeout and enable flag.
        """
        self._selector = candidate_service
        self._executor = executor
        self._time = time_authority
        self._config = config
        self._interval: float = config.scheduling_interval_seconds
        self._run_lock = asyncio.Lock()
        self._running: bool = False
        self._task: Optional[asyncio.Task[None]] = None
        self._last_result: Optional[EscalationRunResult] = None
        self._log = get_logger_for_service("auto_escalation_scheduler")

    @property
    def running(self) -> bool:
        """Check if the background timer is running."""
        return self._running

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.RUNNING if self._run_lock.locked() else SchedulerState.IDLE

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def last_result(self) -> Optional[EscalationRunResult]:
        """Result of the most recent non-skipped run, if any."""
        return self._last_result

    async def start(self) -> None:
        """Start the periodic timer.

        Does nothing if auto-escalation is disabled in the configuration
        or the timer is already running.
        """
        if self._running:
            return
        if not self._config.enable_auto_escalation:
            self._log.info("auto_escalation_disabled")
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        self._log.info("auto_escalation_scheduler_started", interval=self._interval)

    async def stop(self) -> None:
        """Stop the periodic timer gracefully.

        A run in flight is cancelled between awaits; escalations it has
        already persisted stay persisted.
        """
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._log.info("auto_escalation_scheduler_stopped")

    async def trigger_manual(self) -> EscalationRunResult:
        """Run the pipeline now, on demand.

        Returns:
            The run result; SKIPPED if a run is already in flight.
        """
        self._log.info("manual_escalation_check_triggered")
        return await self.run(RunTrigger.MANUAL)

    async def run(self, trigger: RunTrigger = RunTrigger.SCHEDULED) -> EscalationRunResult:
        """Execute one escalation run under the run lock.

        Never raises for orchestration failures: they are logged and
        reported as a FAILED result.

        Args:
            trigger: What started this run.

        Returns:
            EscalationRunResult for this run.
        """
        run_id = uuid4()
        started_at = self._time.now()
        log = self._log.bind(run_id=str(run_id), trigger=trigger.value)

        # Non-blocking acquire: locked() and acquire() run in the same
        # event-loop step, so no other run can slip in between.
        if self._run_lock.locked():
            log.info("escalation_run_skipped", reason="already running")
            return EscalationRunResult(
                run_id=run_id,
                trigger=trigger,
                status=RunStatus.SKIPPED,
                started_at=started_at,
                finished_at=started_at,
            )

        await self._run_lock.acquire()
        token = set_correlation_id(str(run_id))
        try:
            result = await self._execute(run_id, trigger, started_at, log)
        finally:
            reset_correlation_id(token)
            self._run_lock.release()

        self._last_result = result
        return result

    async def _execute(
        self,
        run_id: UUID,
        trigger: RunTrigger,
        started_at: datetime,
        log: Any,
    ) -> EscalationRunResult:
        deadline = self._time.monotonic() + self._config.run_timeout_seconds
        log.info("escalation_run_started", started_at=started_at.isoformat())

        try:
            candidates = await self._selector.find_candidates(now=started_at)
            outcomes, timed_out = await self._executor.escalate_candidates(
                candidates,
                now=started_at,
                run_id=run_id,
                deadline_monotonic=deadline,
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            finished_at = self._time.now()
            log.error(
                "escalation_run_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return EscalationRunResult(
                run_id=run_id,
                trigger=trigger,
                status=RunStatus.FAILED,
                started_at=started_at,
                finished_at=finished_at,
                error=str(e) or type(e).__name__,
            )

        result = EscalationRunResult(
            run_id=run_id,
            trigger=trigger,
            status=RunStatus.COMPLETED,
            started_at=started_at,
            finished_at=self._time.now(),
            candidate_count=len(candidates),
            outcomes=tuple(outcomes),
            timed_out=timed_out,
        )
        log.info(
            "escalation_run_completed",
            candidate_count=result.candidate_count,
            escalated_count=len(result.escalated_ids),
            failed_count=len(result.failed_ids),
            skipped_count=len(result.skipped_ids),
            timed_out=timed_out,
        )
        return result

    async def _run_loop(self) -> None:
        """Internal timer loop.

        Runs the pipeline at the configured interval. Exceptions never
        stop the loop.
        """
        while self._running:
            try:
                start = self._time.monotonic()
                await self.run(RunTrigger.SCHEDULED)
                elapsed = self._time.monotonic() - start

                # Sleep for remainder of interval
                sleep_time = max(0.0, self._interval - elapsed)
                await asyncio.sleep(sleep_time)

            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._log.error("escalation_tick_failed", error=str(e))
                await asyncio.sleep(self._interval)
