"""Bootstrap wiring for the escalation engine.

Builds every service from a config and the four ports, and keeps a
process-wide engine for hosts that want a singleton.

Usage:
    engine = create_escalation_engine(
        config=EscalationConfig.from_environment(),
        complaint_store=store,
        user_directory=directory,
        delivery=delivery,
    )
    await engine.start()
    ...
    await engine.stop()
"""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from escalation_engine.application.ports.complaint_store import ComplaintStoreProtocol
from escalation_engine.application.ports.escalation_notifier import (
    EscalationNotifierProtocol,
)
from escalation_engine.application.ports.notification_delivery import (
    NotificationDeliveryProtocol,
)
from escalation_engine.application.ports.time_authority import TimeAuthorityProtocol
from escalation_engine.application.ports.user_directory import UserDirectoryProtocol
from escalation_engine.application.services.auto_escalation_admin_service import (
    AutoEscalationAdminService,
)
from escalation_engine.application.services.auto_escalation_executor_service import (
    AutoEscalationExecutorService,
)
from escalation_engine.application.services.auto_escalation_scheduler import (
    AutoEscalationScheduler,
)
from escalation_engine.application.services.escalation_candidate_service import (
    EscalationCandidateService,
)
from escalation_engine.application.services.escalation_handler_resolver import (
    EscalationHandlerResolver,
)
from escalation_engine.application.services.escalation_notification_service import (
    EscalationNotificationService,
)
from escalation_engine.application.services.escalation_stats_service import (
    EscalationStatsService,
)
from escalation_engine.application.services.escalation_threshold_service import (
    EscalationThresholdService,
)
from escalation_engine.config.escalation_config import EscalationConfig
from escalation_engine.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from escalation_engine.infrastructure.stubs.complaint_store_stub import (
    ComplaintStoreStub,
)
from escalation_engine.infrastructure.stubs.notification_delivery_stub import (
    NotificationDeliveryStub,
)
from escalation_engine.infrastructure.stubs.user_directory_stub import (
    UserDirectoryStub,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class EscalationEngine:
    """Fully wired escalation engine."""

    config: EscalationConfig
    complaint_store: ComplaintStoreProtocol
    user_directory: UserDirectoryProtocol
    time_authority: TimeAuthorityProtocol
    threshold_policy: EscalationThresholdService
    candidate_service: EscalationCandidateService
    handler_resolver: EscalationHandlerResolver
    notifier: EscalationNotifierProtocol
    executor: AutoEscalationExecutorService
    scheduler: AutoEscalationScheduler
    stats_service: EscalationStatsService
    admin_service: AutoEscalationAdminService

    async def start(self) -> None:
        await self.scheduler.start()

    async def stop(self) -> None:
        """Stop the timer, then give in-flight notifications one timeout to finish."""
        await self.scheduler.stop()
        await self.executor.drain_notifications(
            timeout=self.config.notification_timeout_seconds
        )


def create_escalation_engine(
    config: EscalationConfig,
    complaint_store: ComplaintStoreProtocol,
    user_directory: UserDirectoryProtocol,
    delivery: NotificationDeliveryProtocol | None = None,
    notifier: EscalationNotifierProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
) -> EscalationEngine:
    """Wire the escalation services together.

    Args:
        config: Engine configuration.
        complaint_store: Complaint persistence.
        user_directory: User lookups.
        delivery: Per-recipient delivery used by the default notifier.
            Required unless notifier is given.
        notifier: Custom notifier replacing EscalationNotificationService.
        time_authority: Clock. Defaults to SystemTimeAuthority.

    Returns:
        The wired EscalationEngine (scheduler not started).

    Raises:
        ValueError: If neither delivery nor notifier is given.
    """
    clock = time_authority or SystemTimeAuthority()

    if notifier is None:
        if delivery is None:
            raise ValueError("Either delivery or notifier must be provided")
        notifier = EscalationNotificationService(
            user_directory=user_directory,
            delivery=delivery,
            time_authority=clock,
            config=config,
        )

    policy = EscalationThresholdService(config)
    selector = EscalationCandidateService(
        complaint_store=complaint_store,
        threshold_policy=policy,
        time_authority=clock,
    )
    resolver = EscalationHandlerResolver(
        user_directory=user_directory,
        designated_username=config.designated_handler_username,
    )
    executor = AutoEscalationExecutorService(
        complaint_store=complaint_store,
        handler_resolver=resolver,
        threshold_policy=policy,
        notifier=notifier,
        time_authority=clock,
        notification_timeout_seconds=config.notification_timeout_seconds,
    )
    scheduler = AutoEscalationScheduler(
        candidate_service=selector,
        executor=executor,
        time_authority=clock,
        config=config,
    )
    stats_service = EscalationStatsService(
        complaint_store=complaint_store,
        candidate_service=selector,
        time_authority=clock,
    )
    admin_service = AutoEscalationAdminService(
        scheduler=scheduler,
        candidate_service=selector,
        stats_service=stats_service,
        config=config,
        time_authority=clock,
    )

    logger.info(
        "escalation_engine_initialized",
        notifier_type=type(notifier).__name__,
        store_type=type(complaint_store).__name__,
        directory_type=type(user_directory).__name__,
        **config.to_dict(),
    )
    return EscalationEngine(
        config=config,
        complaint_store=complaint_store,
        user_directory=user_directory,
        time_authority=clock,
        threshold_policy=policy,
        candidate_service=selector,
        handler_resolver=resolver,
        notifier=notifier,
        executor=executor,
        scheduler=scheduler,
        stats_service=stats_service,
        admin_service=admin_service,
    )


_escalation_engine: EscalationEngine | None = None


def get_escalation_engine() -> EscalationEngine:
    """Get the process-wide escalation engine.

    Built on first use from the environment. No real store or directory is
    wired here, so in-memory stubs are used until set_escalation_engine()
    installs a production engine.
    """
    global _escalation_engine
    if _escalation_engine is None:
        clock = SystemTimeAuthority()
        logger.warning(
            "escalation_engine_initialized_with_stubs",
            message="No engine installed - using in-memory stubs (data will not persist)",
        )
        _escalation_engine = create_escalation_engine(
            config=EscalationConfig.from_environment(),
            complaint_store=ComplaintStoreStub(time_authority=clock),
            user_directory=UserDirectoryStub(),
            delivery=NotificationDeliveryStub(),
            time_authority=clock,
        )
    return _escalation_engine


def set_escalation_engine(engine: EscalationEngine) -> None:
    """Set a custom escalation engine (for production wiring or testing)."""
    global _escalation_engine
    _escalation_engine = engine


def reset_escalation_engine() -> None:
    """Reset the singleton (for testing)."""
    global _escalation_engine
    _escalation_engine = None
