"""Escalation handler resolution.

Picks the user an escalated complaint is handed to. Strategies are tried
in a fixed order and the first one that yields a user wins:

1. The designated escalation user (configurable username)
2. The first user holding the ADMIN role
3. The first user holding the OFFICER role
4. Nobody: the complaint is escalated without a handler

"First" means lowest user id. The directory's own iteration order is not
guaranteed to be stable across implementations, so the role lists are
sorted before picking.

A directory failure inside a strategy is logged and treated as "not found"
by that strategy; resolution never raises.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from structlog import get_logger

from escalation_engine.domain.models.user import DirectoryUser, UserRole

if TYPE_CHECKING:
    from escalation_engine.application.ports.user_directory import (
        UserDirectoryProtocol,
    )

logger = get_logger(__name__)

_Strategy = Callable[[], Awaitable["DirectoryUser | None"]]


class EscalationHandlerResolver:
    """Resolves the escalation handler through an ordered strategy chain.

    Example:
        >>> resolver = EscalationHandlerResolver(
        ...     user_directory=directory,
        ...     designated_username="officer2",
        ... )
        >>> handler = await resolver.resolve()
    """

    def __init__(
        self,
        user_directory: UserDirectoryProtocol,
        designated_username: str | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            user_directory: Directory used for all lookups.
            designated_username: Username tried first. None skips that step.
        """
        self._directory = user_directory
        self._designated_username = designated_username
        self._strategies: tuple[tuple[str, _Strategy], ...] = (
            ("designated", self._designated_user),
            ("first_admin", lambda: self._first_with_role(UserRole.ADMIN)),
            ("first_officer", lambda: self._first_with_role(UserRole.OFFICER)),
        )

    @property
    def strategy_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._strategies)

    async def resolve(self) -> DirectoryUser | None:
        """Return the escalation handler, or None if no strategy finds one."""
        for name, strategy in self._strategies:
            try:
                user = await strategy()
            except Exception as e:
                logger.warning(
                    "Directory lookup failed, trying next strategy",
                    strategy=name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            if user is not None:
                logger.debug(
                    "Escalation handler resolved",
                    strategy=name,
                    handler_id=user.id,
                    handler_username=user.username,
                )
                return user

        logger.warning("No escalation handler found", strategies=self.strategy_names)
        return None

    async def _designated_user(self) -> DirectoryUser | None:
        if not self._designated_username:
            return None
        user = await self._directory.get_by_username(self._designated_username)
        if user is None:
            logger.info(
                "Designated escalation handler not found, falling back",
                username=self._designated_username,
            )
        return user

    async def _first_with_role(self, role: UserRole) -> DirectoryUser | None:
        users = await self._directory.list_by_role(role)
        if not users:
            return None
        return min(users, key=lambda user: user.id)
