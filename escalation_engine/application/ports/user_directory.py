"""User directory port.

Resolves users by username or role. Lookups are read-only and safe to
share across concurrent callers.
"""

from __future__ import annotations

from typing import Protocol

from escalation_engine.domain.models.user import DirectoryUser, UserRole


class UserDirectoryProtocol(Protocol):
    """Protocol for user lookups.

    Implementations raise DirectoryLookupError when the directory is
    unavailable.
    """

    async def get_by_username(self, username: str) -> DirectoryUser | None:
        """Find a user by username (case-insensitive)."""
        ...

    async def list_by_role(self, role: UserRole) -> list[DirectoryUser]:
        """List users holding a role, in the directory's own order."""
        ...

    async def get(self, user_id: int) -> DirectoryUser | None:
        """Find a user by id."""
        ...
