"""Unit tests for SearchUsersUseCase."""

import pytest

from marquee.application.usecase.user.search_users import (
    SearchUsersRequest,
    SearchUsersUseCase,
)
from marquee.domain.repository import UserRepository
from marquee.domain.value import InviteKind, UserId
from tests.conftest import connect_users, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId(1)
BOB = UserId(2)


class TestSearchUsersUseCase:
    """Tests for SearchUsersUseCase."""

    @pytest.mark.asyncio
    async def test_search_flags_connection(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        await make_user(user_repo, ALICE, "Alice", "alice")
        await make_user(user_repo, BOB, "Bob", "bob")
        await connect_users(unit_env, InviteKind.FRIEND, ALICE, BOB)
        use_case = await unit_env.get(SearchUsersUseCase)

        response = await use_case.execute(SearchUsersRequest(caller_id=BOB, query="ali"))

        assert [(u.id, u.is_connection) for u in response.users] == [(ALICE, True)]

    @pytest.mark.asyncio
    async def test_short_query_returns_nothing(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        await make_user(user_repo, ALICE, "Alice", "alice")
        use_case = await unit_env.get(SearchUsersUseCase)

        response = await use_case.execute(SearchUsersRequest(caller_id=BOB, query="a"))

        assert response.users == []
