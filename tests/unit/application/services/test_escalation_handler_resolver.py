"""Unit tests for EscalationHandlerResolver."""

from __future__ import annotations

import pytest

from escalation_engine.application.services.escalation_handler_resolver import (
    EscalationHandlerResolver,
)
from escalation_engine.domain.models.user import DirectoryUser, UserRole
from escalation_engine.infrastructure.stubs.user_directory_stub import (
    UserDirectoryStub,
)


def _user(user_id: int, username: str, *roles: UserRole) -> DirectoryUser:
    return DirectoryUser(id=user_id, username=username, roles=frozenset(roles))


class TestHandlerResolutionOrder:
    """Tests for designated -> ADMIN -> OFFICER -> none."""

    def test_strategy_order(self) -> None:
        resolver = EscalationHandlerResolver(UserDirectoryStub(), "officer2")
        assert resolver.strategy_names == ("designated", "first_admin", "first_officer")

    @pytest.mark.asyncio
    async def test_designated_user_wins(self) -> None:
        directory = UserDirectoryStub(
            [
                _user(1, "admin", UserRole.ADMIN),
                _user(5, "officer2", UserRole.OFFICER),
            ]
        )
        resolver = EscalationHandlerResolver(directory, "officer2")

        handler = await resolver.resolve()

        assert handler is not None
        assert handler.username == "officer2"

    @pytest.mark.asyncio
    async def test_designated_lookup_is_case_insensitive(self) -> None:
        directory = UserDirectoryStub([_user(5, "Officer2", UserRole.OFFICER)])
        resolver = EscalationHandlerResolver(directory, "officer2")

        handler = await resolver.resolve()

        assert handler is not None
        assert handler.id == 5

    @pytest.mark.asyncio
    async def test_falls_back_to_admin(self) -> None:
        directory = UserDirectoryStub(
            [
                _user(2, "officer1", UserRole.OFFICER),
                _user(1, "admin", UserRole.ADMIN),
            ]
        )
        resolver = EscalationHandlerResolver(directory, "officer2")

        handler = await resolver.resolve()

        assert handler is not None
        assert handler.username == "admin"

    @pytest.mark.asyncio
    async def test_falls_back_to_officer(self) -> None:
        directory = UserDirectoryStub([_user(2, "officer1", UserRole.OFFICER)])
        resolver = EscalationHandlerResolver(directory, "officer2")

        handler = await resolver.resolve()

        assert handler is not None
        assert handler.username == "officer1"

    @pytest.mark.asyncio
    async def test_no_handler_returns_none(self) -> None:
        directory = UserDirectoryStub([_user(7, "citizen", UserRole.USER)])
        resolver = EscalationHandlerResolver(directory, "officer2")

        assert await resolver.resolve() is None

    @pytest.mark.asyncio
    async def test_no_designated_username_skips_step(self) -> None:
        directory = UserDirectoryStub(
            [
                _user(5, "officer2", UserRole.OFFICER),
                _user(1, "admin", UserRole.ADMIN),
            ]
        )
        resolver = EscalationHandlerResolver(directory, None)

        handler = await resolver.resolve()

        assert handler is not None
        assert handler.username == "admin"


class TestHandlerTieBreak:
    """Tests that the lowest user id wins among role holders."""

    @pytest.mark.asyncio
    async def test_lowest_admin_id_wins(self) -> None:
        directory = UserDirectoryStub(
            [
                _user(9, "admin9", UserRole.ADMIN),
                _user(4, "admin4", UserRole.ADMIN),
                _user(6, "admin6", UserRole.ADMIN),
            ]
        )
        resolver = EscalationHandlerResolver(directory, None)

        handler = await resolver.resolve()

        assert handler is not None
        assert handler.id == 4


class TestHandlerResolutionFailures:
    """Tests that directory failures degrade to the next strategy."""

    @pytest.mark.asyncio
    async def test_directory_down_resolves_to_none(self) -> None:
        directory = UserDirectoryStub([_user(1, "admin", UserRole.ADMIN)])
        directory.fail_lookups = True
        resolver = EscalationHandlerResolver(directory, "officer2")

        assert await resolver.resolve() is None

    @pytest.mark.asyncio
    async def test_admin_lookup_failure_falls_through_to_officer(self) -> None:
        directory = UserDirectoryStub(
            [
                _user(1, "admin", UserRole.ADMIN),
                _user(2, "officer1", UserRole.OFFICER),
            ]
        )
        directory.failing_roles = {UserRole.ADMIN}
        resolver = EscalationHandlerResolver(directory, "officer2")

        handler = await resolver.resolve()

        assert handler is not None
        assert handler.username == "officer1"
