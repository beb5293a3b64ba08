"""Unit tests for RelationshipService."""

from uuid import uuid4

import pytest

from marquee.domain.error import NotAuthorizedError, NotFoundError
from marquee.domain.model import Invite
from marquee.domain.repository import (
    FriendshipRepository,
    ListCollaboratorRepository,
    NotificationRepository,
    PartnershipRepository,
    UserRepository,
    WatchListRepository,
)
from marquee.domain.service import InviteService, RelationshipService
from marquee.domain.value import (
    InviteId,
    InviteKind,
    InviteRef,
    InviteStatus,
    NotificationType,
    UserId,
)
from tests.conftest import make_user, make_watch_list
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId(1)
BOB = UserId(2)
CAROL = UserId(3)


async def _seed_users(unit_env) -> None:
    user_repo = await unit_env.get(UserRepository)
    await make_user(user_repo, ALICE, "Alice", "alice")
    await make_user(user_repo, BOB, "Bob", "bob")
    await make_user(user_repo, CAROL, "Carol", "carol")


def _accepted(kind: InviteKind, inviter_id: UserId, **fields) -> Invite:
    return Invite(
        id=InviteId(uuid4()),
        kind=kind,
        inviter_id=inviter_id,
        status=InviteStatus.ACCEPTED,
        **fields,
    )


class TestMaterialize:
    """Tests for materialize."""

    @pytest.mark.asyncio
    async def test_friendship_materialization_is_idempotent(self, unit_env):
        """Materializing the same pair twice keeps a single friendship."""
        # Arrange
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        friendship_repo = await unit_env.get(FriendshipRepository)
        invite = _accepted(InviteKind.FRIEND, ALICE)

        # Act
        first = await relationship_service.materialize(invite, BOB)
        second = await relationship_service.materialize(invite, BOB)

        # Assert
        assert first.created
        assert not second.created
        assert first.friendship_id == second.friendship_id
        assert len(await friendship_repo.find_for_user(ALICE)) == 1

    @pytest.mark.asyncio
    async def test_friendship_is_stored_as_ordered_pair(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        friendship_repo = await unit_env.get(FriendshipRepository)

        await relationship_service.materialize(_accepted(InviteKind.FRIEND, CAROL), ALICE)

        friendship = await friendship_repo.find_between(ALICE, CAROL)
        assert (friendship.user_low_id, friendship.user_high_id) == (ALICE, CAROL)

    @pytest.mark.asyncio
    async def test_collaborator_materialization_is_idempotent(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        list_repo = await unit_env.get(WatchListRepository)
        collaborator_repo = await unit_env.get(ListCollaboratorRepository)
        watch_list = await make_watch_list(list_repo, ALICE)
        invite = _accepted(InviteKind.LIST_CODE, ALICE, target_list_id=watch_list.id)

        first = await relationship_service.materialize(invite, BOB)
        second = await relationship_service.materialize(invite, BOB)

        assert first.collaborator_id == second.collaborator_id
        assert not second.created
        assert len(await collaborator_repo.find_for_list(watch_list.id)) == 1


class TestConnections:
    """Tests for find_existing_connection and are_connected."""

    @pytest.mark.asyncio
    async def test_open_friend_invite_has_no_existing_connection(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)

        reason = await relationship_service.find_existing_connection(
            InviteKind.FRIEND, ALICE, None
        )

        assert reason is None

    @pytest.mark.asyncio
    async def test_partners_are_connected(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        await relationship_service.materialize(_accepted(InviteKind.PARTNER, ALICE), BOB)

        assert await relationship_service.are_connected(BOB, ALICE)
        assert not await relationship_service.are_connected(BOB, CAROL)


class TestRevocation:
    """Tests for remove_friend, end_partnership and remove_collaborator."""

    @pytest.mark.asyncio
    async def test_remove_friend_notifies_other_user(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        friendship_repo = await unit_env.get(FriendshipRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        await relationship_service.materialize(_accepted(InviteKind.FRIEND, ALICE), BOB)

        await relationship_service.remove_friend(BOB, ALICE)

        assert await friendship_repo.find_between(ALICE, BOB) is None
        notifications = await notification_repo.find_for_user(ALICE)
        assert notifications[0].type is NotificationType.COLLAB_ENDED
        assert notifications[0].title == "Bob removed you as a friend"

    @pytest.mark.asyncio
    async def test_remove_missing_friend_raises_not_found(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)

        with pytest.raises(NotFoundError):
            await relationship_service.remove_friend(ALICE, CAROL)

    @pytest.mark.asyncio
    async def test_end_partnership_removes_partner_list(self, unit_env):
        # Arrange
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        relationship_service = await unit_env.get(RelationshipService)
        partnership_repo = await unit_env.get(PartnershipRepository)
        list_repo = await unit_env.get(WatchListRepository)
        collaborator_repo = await unit_env.get(ListCollaboratorRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.PARTNER, target_user_id=BOB
        )
        accepted = await invite_service.accept_invite(
            BOB, InviteRef.by_id(created.invite.id)
        )
        list_id = accepted.relationship.list_id

        # Act
        await relationship_service.end_partnership(BOB)

        # Assert
        assert await partnership_repo.find_for_user(ALICE) is None
        assert await list_repo.find_by_id(list_id) is None
        assert await collaborator_repo.find_for_list(list_id) == []

    @pytest.mark.asyncio
    async def test_partner_can_invite_again_after_ending(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        relationship_service = await unit_env.get(RelationshipService)
        created = await invite_service.create_invite(
            ALICE, InviteKind.PARTNER, target_user_id=BOB
        )
        await invite_service.accept_invite(BOB, InviteRef.by_id(created.invite.id))
        await relationship_service.end_partnership(ALICE)

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.PARTNER, target_user_id=CAROL
        )

        assert outcome.success

    @pytest.mark.asyncio
    async def test_owner_removes_collaborator_and_list_is_unshared(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        list_repo = await unit_env.get(WatchListRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        watch_list = await make_watch_list(list_repo, ALICE, "Noir")
        await relationship_service.materialize(
            _accepted(InviteKind.LIST_CODE, ALICE, target_list_id=watch_list.id), BOB
        )

        await relationship_service.remove_collaborator(ALICE, watch_list.id, BOB)

        assert not (await list_repo.find_by_id(watch_list.id)).is_shared
        notifications = await notification_repo.find_for_user(BOB)
        assert notifications[0].title == "You were removed from Noir"

    @pytest.mark.asyncio
    async def test_collaborator_can_leave(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        list_repo = await unit_env.get(WatchListRepository)
        collaborator_repo = await unit_env.get(ListCollaboratorRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        watch_list = await make_watch_list(list_repo, ALICE, "Noir")
        await relationship_service.materialize(
            _accepted(InviteKind.LIST_CODE, ALICE, target_list_id=watch_list.id), BOB
        )

        await relationship_service.remove_collaborator(BOB, watch_list.id, BOB)

        assert await collaborator_repo.find(watch_list.id, BOB) is None
        notifications = await notification_repo.find_for_user(ALICE)
        assert notifications[0].title == "Bob left Noir"

    @pytest.mark.asyncio
    async def test_third_party_cannot_remove_collaborator(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        list_repo = await unit_env.get(WatchListRepository)
        watch_list = await make_watch_list(list_repo, ALICE)
        await relationship_service.materialize(
            _accepted(InviteKind.LIST_CODE, ALICE, target_list_id=watch_list.id), BOB
        )

        with pytest.raises(NotAuthorizedError):
            await relationship_service.remove_collaborator(CAROL, watch_list.id, BOB)

    @pytest.mark.asyncio
    async def test_partner_list_grant_cannot_be_removed_directly(self, unit_env):
        await _seed_users(unit_env)
        relationship_service = await unit_env.get(RelationshipService)
        result = await relationship_service.materialize(
            _accepted(InviteKind.PARTNER, ALICE), BOB
        )

        with pytest.raises(NotAuthorizedError):
            await relationship_service.remove_collaborator(ALICE, result.list_id, BOB)
