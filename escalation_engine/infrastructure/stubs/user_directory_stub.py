"""User directory stub implementation.

In-memory implementation of UserDirectoryProtocol for development and
testing.
"""

from __future__ import annotations

from escalation_engine.domain.errors.escalation import DirectoryLookupError
from escalation_engine.domain.models.user import DirectoryUser, UserRole


class UserDirectoryStub:
    """In-memory stub implementation of UserDirectoryProtocol.

    Users are returned in insertion order, which is deliberately not
    sorted by id.

    Attributes:
        fail_lookups: If True, every lookup raises DirectoryLookupError.
        failing_roles: Roles whose list_by_role raises DirectoryLookupError.
    """

    def __init__(self, users: list[DirectoryUser] | None = None) -> None:
        self._users: dict[int, DirectoryUser] = {}
        self.fail_lookups: bool = False
        self.failing_roles: set[UserRole] = set()
        for user in users or []:
            self.add(user)

    def add(self, user: DirectoryUser) -> None:
        self._users[user.id] = user

    def _check_available(self) -> None:
        if self.fail_lookups:
            raise DirectoryLookupError("User directory unavailable")

    async def get_by_username(self, username: str) -> DirectoryUser | None:
        self._check_available()
        wanted = username.lower()
        for user in self._users.values():
            if user.username.lower() == wanted:
                return user
        return None

    async def list_by_role(self, role: UserRole) -> list[DirectoryUser]:
        self._check_available()
        if role in self.failing_roles:
            raise DirectoryLookupError(f"Role lookup failed: {role.value}")
        return [user for user in self._users.values() if user.has_role(role)]

    async def get(self, user_id: int) -> DirectoryUser | None:
        self._check_available()
        return self._users.get(user_id)
