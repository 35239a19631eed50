"""Directory user model.

Users are resolved through the user directory port; the engine uses them to
pick an escalation handler, to address notifications and to check the
capability of callers of the admin entry points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class UserRole(Enum):
    """Role held by a directory user."""

    ADMIN = "ADMIN"
    OFFICER = "OFFICER"
    USER = "USER"


@dataclass(frozen=True, eq=True)
class DirectoryUser:
    """A user known to the directory service.

    Attributes:
        id: Unique user id.
        username: Login name, unique and compared case-insensitively.
        full_name: Display name used in timeline comments.
        email: Optional address for email notifications.
        roles: Roles held by the user.
    """

    id: int
    username: str
    full_name: str = ""
    email: str | None = None
    roles: frozenset[UserRole] = field(default_factory=frozenset)

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles

    @property
    def display_name(self) -> str:
        """Full name when known, username otherwise."""
        return self.full_name or self.username
