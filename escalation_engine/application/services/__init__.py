"""Application services of the escalation engine."""

from escalation_engine.application.services.auto_escalation_admin_service import (
    AutoEscalationAdminService,
)
from escalation_engine.application.services.auto_escalation_executor_service import (
    AutoEscalationExecutorService,
    build_escalation_comment,
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

__all__ = [
    "AutoEscalationAdminService",
    "AutoEscalationExecutorService",
    "AutoEscalationScheduler",
    "EscalationCandidateService",
    "EscalationHandlerResolver",
    "EscalationNotificationService",
    "EscalationStatsService",
    "EscalationThresholdService",
    "build_escalation_comment",
]
