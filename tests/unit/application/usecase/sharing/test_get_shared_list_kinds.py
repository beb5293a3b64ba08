"""Unit tests for GetSharedListKindsUseCase."""

import pytest

from marquee.application.usecase.sharing.get_shared_list_kinds import (
    GetSharedListKindsRequest,
    GetSharedListKindsUseCase,
)
from marquee.domain.repository import UserRepository
from marquee.domain.value import InviteKind, ListKind, UserId
from tests.conftest import connect_users, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId(1)
BOB = UserId(2)


class TestGetSharedListKindsUseCase:
    """Tests for GetSharedListKindsUseCase."""

    @pytest.mark.asyncio
    async def test_partner_list_is_reported(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        await make_user(user_repo, ALICE, "Alice", "alice")
        await make_user(user_repo, BOB, "Bob", "bob")
        await connect_users(unit_env, InviteKind.PARTNER, ALICE, BOB)
        use_case = await unit_env.get(GetSharedListKindsUseCase)

        response = await use_case.execute(GetSharedListKindsRequest(user_id=BOB))

        assert response.kinds == [ListKind.PARTNER]

    @pytest.mark.asyncio
    async def test_no_shared_lists(self, unit_env):
        use_case = await unit_env.get(GetSharedListKindsUseCase)

        response = await use_case.execute(GetSharedListKindsRequest(user_id=ALICE))

        assert response.kinds == []
