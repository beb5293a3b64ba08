"""Unit tests for InviteService."""

import asyncio
from uuid import uuid4

import pytest

from marquee.domain.error import StoreError
from marquee.domain.repository import (
    FriendshipRepository,
    InviteRepository,
    ListCollaboratorRepository,
    NotificationRepository,
    PartnershipRepository,
    UserRepository,
    WatchListRepository,
)
from marquee.domain.service import InviteCodeGenerator, InviteService
from marquee.domain.value import (
    AccessLevel,
    InviteErrorKind,
    InviteKind,
    InvitePolicy,
    InviteRef,
    InviteStatus,
    ListId,
    NotificationType,
    UserId,
    WatchListType,
)
from tests.conftest import backdate_expiry, make_user, make_watch_list
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

ALICE = UserId(1)
BOB = UserId(2)
CAROL = UserId(3)


async def _seed_users(unit_env) -> UserRepository:
    user_repo = await unit_env.get(UserRepository)
    await make_user(user_repo, ALICE, "Alice", "alice")
    await make_user(user_repo, BOB, "Bob", "bob")
    await make_user(user_repo, CAROL, "Carol", "carol")
    return user_repo


class TestCreateInvite:
    """Tests for create_invite."""

    @pytest.mark.asyncio
    async def test_create_direct_friend_invite(self, unit_env):
        """A direct invite is pending, expires in the future and notifies the target."""
        # Arrange
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        notification_repo = await unit_env.get(NotificationRepository)

        # Act
        outcome = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        # Assert
        assert outcome.success
        invite = outcome.invite
        assert invite.status is InviteStatus.PENDING
        assert invite.code is not None
        assert invite.expires_at > invite.created_at
        assert (invite.expires_at - invite.created_at).days == 7

        notifications = await notification_repo.find_for_user(BOB)
        assert len(notifications) == 1
        assert notifications[0].type is NotificationType.COLLAB_INVITE
        assert notifications[0].title == "Alice wants to be friends"

    @pytest.mark.asyncio
    async def test_create_code_invite_has_no_target_and_no_notification(self, unit_env):
        """An open friend code invite is addressed to nobody."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        notification_repo = await unit_env.get(NotificationRepository)

        outcome = await invite_service.create_invite(ALICE, InviteKind.FRIEND)

        assert outcome.success
        assert outcome.invite.target_user_id is None
        assert outcome.invite.target_key == "open"
        assert await notification_repo.count_unread(BOB) == 0

    @pytest.mark.asyncio
    async def test_self_invite_is_rejected(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=ALICE
        )

        assert not outcome.success
        assert outcome.error is InviteErrorKind.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_unknown_target_user_is_not_found(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=UserId(999)
        )

        assert outcome.error is InviteErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_duplicate_pending_invite_is_rejected(self, unit_env):
        """Only one pending invite per inviter, kind and target."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        await invite_service.create_invite(ALICE, InviteKind.FRIEND, target_user_id=BOB)

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        assert not outcome.success
        assert outcome.error is InviteErrorKind.DUPLICATE_PENDING

    @pytest.mark.asyncio
    async def test_stale_pending_invite_is_expired_and_replaced(self, unit_env):
        """A pending invite past its expiry does not block a new one."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        first = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        await backdate_expiry(invite_repo, first.invite)

        second = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        assert second.success
        old = await invite_repo.find_by_id(first.invite.id)
        assert old.status is InviteStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_concurrent_creates_yield_one_pending_invite(self, unit_env):
        """Racing creates for the same target leave exactly one pending invite."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)

        outcomes = await asyncio.gather(
            *(
                invite_service.create_invite(ALICE, InviteKind.FRIEND, target_user_id=BOB)
                for _ in range(5)
            )
        )

        successes = [o for o in outcomes if o.success]
        assert len(successes) == 1
        assert all(
            o.error is InviteErrorKind.DUPLICATE_PENDING for o in outcomes if not o.success
        )
        sent = await invite_repo.find_sent_by(ALICE, InviteStatus.PENDING)
        assert len(sent) == 1

    @pytest.mark.asyncio
    async def test_invite_to_existing_friend_is_already_connected(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        await invite_service.accept_invite(BOB, InviteRef.by_id(created.invite.id))

        outcome = await invite_service.create_invite(
            BOB, InviteKind.FRIEND, target_user_id=ALICE
        )

        assert outcome.error is InviteErrorKind.ALREADY_CONNECTED

    @pytest.mark.asyncio
    async def test_user_accepting_nobody_cannot_be_invited(self, unit_env):
        user_repo = await _seed_users(unit_env)
        await make_user(
            user_repo, 4, "Dana", "dana", allow_invites_from=InvitePolicy.NOBODY
        )
        invite_service = await unit_env.get(InviteService)

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=UserId(4)
        )

        assert outcome.error is InviteErrorKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_list_invite_for_missing_list_is_list_not_found(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.LIST_CODE, target_list_id=ListId(uuid4())
        )

        assert outcome.error is InviteErrorKind.LIST_NOT_FOUND

    @pytest.mark.asyncio
    async def test_only_list_owner_can_invite_collaborators(self, unit_env):
        await _seed_users(unit_env)
        list_repo = await unit_env.get(WatchListRepository)
        invite_service = await unit_env.get(InviteService)
        watch_list = await make_watch_list(list_repo, ALICE)

        outcome = await invite_service.create_invite(
            BOB, InviteKind.LIST_DIRECT, target_user_id=CAROL, target_list_id=watch_list.id
        )

        assert outcome.error is InviteErrorKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_list_invite_records_list_name(self, unit_env):
        await _seed_users(unit_env)
        list_repo = await unit_env.get(WatchListRepository)
        invite_service = await unit_env.get(InviteService)
        watch_list = await make_watch_list(list_repo, ALICE, "Horror Marathon")

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.LIST_DIRECT, target_user_id=BOB, target_list_id=watch_list.id
        )

        assert outcome.success
        assert outcome.invite.list_name == "Horror Marathon"

    @pytest.mark.asyncio
    async def test_list_name_only_allowed_on_partner_invites(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)

        outcome = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB, list_name="Ours"
        )

        assert outcome.error is InviteErrorKind.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_code_collision_is_retried(self, unit_env, monkeypatch):
        """A taken code is regenerated instead of failing the create."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        generator = await unit_env.get(InviteCodeGenerator)
        first = await invite_service.create_invite(ALICE, InviteKind.FRIEND)

        codes = iter([first.invite.code, generator.generate()])
        monkeypatch.setattr(generator, "generate", lambda: next(codes))

        second = await invite_service.create_invite(BOB, InviteKind.FRIEND)

        assert second.success
        assert second.invite.code != first.invite.code


class TestAcceptInvite:
    """Tests for accept_invite."""

    @pytest.mark.asyncio
    async def test_accept_friend_invite_creates_friendship(self, unit_env):
        # Arrange
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        friendship_repo = await unit_env.get(FriendshipRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        # Act
        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_id(created.invite.id)
        )

        # Assert
        assert outcome.success
        assert outcome.invite.status is InviteStatus.ACCEPTED
        assert outcome.invite.accepted_by_user_id == BOB
        assert outcome.invite.resolved_at is not None
        assert await friendship_repo.find_between(ALICE, BOB) is not None

        notifications = await notification_repo.find_for_user(ALICE)
        assert [n.title for n in notifications] == ["Bob is now your friend!"]

    @pytest.mark.asyncio
    async def test_accept_by_code(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)

        outcome = await invite_service.accept_invite(
            CAROL, InviteRef.by_code(InviteKind.FRIEND, created.invite.code)
        )

        assert outcome.success
        assert outcome.relationship.friendship_id is not None

    @pytest.mark.asyncio
    async def test_code_is_scoped_to_its_kind(self, unit_env):
        """A friend code looked up as a partner code does not exist."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)

        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_code(InviteKind.PARTNER, created.invite.code)
        )

        assert outcome.error is InviteErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_replaying_a_resolved_invite_is_already_resolved(self, unit_env):
        """Accepting twice, or accepting after a decline, reports already_resolved."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        ref = InviteRef.by_id(created.invite.id)
        await invite_service.decline_invite(BOB, created.invite.id)

        outcome = await invite_service.accept_invite(BOB, ref)

        assert outcome.error is InviteErrorKind.ALREADY_RESOLVED

    @pytest.mark.asyncio
    async def test_accepting_own_invite_is_forbidden(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)

        outcome = await invite_service.accept_invite(
            ALICE, InviteRef.by_id(created.invite.id)
        )

        assert outcome.error is InviteErrorKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_direct_invite_cannot_be_accepted_by_someone_else(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        outcome = await invite_service.accept_invite(
            CAROL, InviteRef.by_id(created.invite.id)
        )

        assert outcome.error is InviteErrorKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_expired_invite_is_rejected_and_persisted_as_expired(self, unit_env):
        """An invite past expiry is expired even while still stored as pending."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        friendship_repo = await unit_env.get(FriendshipRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        await backdate_expiry(invite_repo, created.invite)

        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_id(created.invite.id)
        )

        assert outcome.error is InviteErrorKind.EXPIRED
        stored = await invite_repo.find_by_id(created.invite.id)
        assert stored.status is InviteStatus.EXPIRED
        assert await friendship_repo.find_between(ALICE, BOB) is None

    @pytest.mark.asyncio
    async def test_expired_is_reported_before_forbidden(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)
        await backdate_expiry(invite_repo, created.invite)

        outcome = await invite_service.accept_invite(
            ALICE, InviteRef.by_id(created.invite.id)
        )

        assert outcome.error is InviteErrorKind.EXPIRED

    @pytest.mark.asyncio
    async def test_concurrent_accepts_of_one_code_create_one_relationship(self, unit_env):
        """Two users racing for one friend code: one wins, one friendship."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        friendship_repo = await unit_env.get(FriendshipRepository)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)
        ref = InviteRef.by_code(InviteKind.FRIEND, created.invite.code)

        outcomes = await asyncio.gather(
            invite_service.accept_invite(BOB, ref),
            invite_service.accept_invite(CAROL, ref),
        )

        assert sorted(o.success for o in outcomes) == [False, True]
        loser = next(o for o in outcomes if not o.success)
        assert loser.error is InviteErrorKind.ALREADY_RESOLVED
        friendships = await friendship_repo.find_for_user(ALICE)
        assert len(friendships) == 1

    @pytest.mark.asyncio
    async def test_accept_partner_invite_with_list_name(self, unit_env):
        """The partner list takes the inviter's chosen name."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        partnership_repo = await unit_env.get(PartnershipRepository)
        list_repo = await unit_env.get(WatchListRepository)
        collaborator_repo = await unit_env.get(ListCollaboratorRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.PARTNER, target_user_id=BOB, list_name="Movie Nights"
        )

        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_id(created.invite.id)
        )

        assert outcome.success
        assert outcome.relationship.list_name == "Movie Nights"
        partnership = await partnership_repo.find_between(ALICE, BOB)
        assert partnership is not None

        partner_list = await list_repo.find_by_id(partnership.list_id)
        assert partner_list.type is WatchListType.PARTNER
        assert partner_list.owner_id == ALICE
        assert partner_list.is_shared

        grant = await collaborator_repo.find(partner_list.id, BOB)
        assert grant.access is AccessLevel.CO_OWNER

        notifications = await notification_repo.find_for_user(ALICE)
        assert notifications[0].title == "Bob is now your partner!"
        assert notifications[0].message == 'You\'re now sharing "Movie Nights" together'

    @pytest.mark.asyncio
    async def test_accept_partner_invite_uses_default_list_name(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(
            ALICE, InviteKind.PARTNER, target_user_id=BOB
        )

        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_id(created.invite.id)
        )

        assert outcome.relationship.list_name == "Our Watchlist"

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back_friend_accept(self, unit_env, monkeypatch):
        """A store error after the friendship insert leaves nothing behind."""
        # Arrange
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        friendship_repo = await unit_env.get(FriendshipRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        async def failing_add(notification):
            raise StoreError("Store operation failed: OperationalError")

        monkeypatch.setattr(notification_repo, "add", failing_add)

        # Act
        with pytest.raises(StoreError):
            await invite_service.accept_invite(BOB, InviteRef.by_id(created.invite.id))

        # Assert
        stored = await invite_repo.find_by_id(created.invite.id)
        assert stored.status is InviteStatus.PENDING
        assert stored.accepted_by_user_id is None
        assert await friendship_repo.find_for_user(ALICE) == []
        assert await friendship_repo.find_for_user(BOB) == []

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back_partner_accept(self, unit_env, monkeypatch):
        """No partner list or co-owner grant survives a failed partnership insert."""
        # Arrange
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        partnership_repo = await unit_env.get(PartnershipRepository)
        list_repo = await unit_env.get(WatchListRepository)
        collaborator_repo = await unit_env.get(ListCollaboratorRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.PARTNER, target_user_id=BOB
        )

        async def failing_add(partnership):
            raise StoreError("Store operation failed: OperationalError")

        monkeypatch.setattr(partnership_repo, "add", failing_add)

        # Act
        with pytest.raises(StoreError):
            await invite_service.accept_invite(BOB, InviteRef.by_id(created.invite.id))

        # Assert
        stored = await invite_repo.find_by_id(created.invite.id)
        assert stored.status is InviteStatus.PENDING
        assert await list_repo.find_owned_by(ALICE) == []
        assert await collaborator_repo.find_for_user(BOB) == []
        assert await partnership_repo.find_for_user(ALICE) is None

    @pytest.mark.asyncio
    async def test_partner_invite_to_user_with_partner_is_already_connected(
        self, unit_env
    ):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        first = await invite_service.create_invite(
            ALICE, InviteKind.PARTNER, target_user_id=BOB
        )
        await invite_service.accept_invite(BOB, InviteRef.by_id(first.invite.id))

        outcome = await invite_service.create_invite(
            CAROL, InviteKind.PARTNER, target_user_id=BOB
        )

        assert outcome.error is InviteErrorKind.ALREADY_CONNECTED

    @pytest.mark.asyncio
    async def test_accept_list_invite_grants_editor_and_shares_list(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        list_repo = await unit_env.get(WatchListRepository)
        collaborator_repo = await unit_env.get(ListCollaboratorRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        watch_list = await make_watch_list(list_repo, ALICE, "Sci-Fi Classics")
        created = await invite_service.create_invite(
            ALICE, InviteKind.LIST_CODE, target_list_id=watch_list.id
        )

        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_code(InviteKind.LIST_CODE, created.invite.code)
        )

        assert outcome.success
        grant = await collaborator_repo.find(watch_list.id, BOB)
        assert grant.access is AccessLevel.EDITOR
        assert (await list_repo.find_by_id(watch_list.id)).is_shared
        notifications = await notification_repo.find_for_user(ALICE)
        assert notifications[0].title == "Bob joined Sci-Fi Classics"

    @pytest.mark.asyncio
    async def test_accept_list_invite_after_list_deleted(self, unit_env):
        """The invite stays pending when its list is gone."""
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        list_repo = await unit_env.get(WatchListRepository)
        watch_list = await make_watch_list(list_repo, ALICE)
        created = await invite_service.create_invite(
            ALICE, InviteKind.LIST_CODE, target_list_id=watch_list.id
        )
        await list_repo.delete(watch_list.id)

        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_code(InviteKind.LIST_CODE, created.invite.code)
        )

        assert outcome.error is InviteErrorKind.LIST_NOT_FOUND
        stored = await invite_repo.find_by_id(created.invite.id)
        assert stored.status is InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_owner_cannot_accept_invite_to_own_list(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        list_repo = await unit_env.get(WatchListRepository)
        watch_list = await make_watch_list(list_repo, ALICE)
        created = await invite_service.create_invite(
            ALICE, InviteKind.LIST_CODE, target_list_id=watch_list.id
        )

        outcome = await invite_service.accept_invite(
            ALICE, InviteRef.by_code(InviteKind.LIST_CODE, created.invite.code)
        )

        assert outcome.error is InviteErrorKind.FORBIDDEN


class TestDeclineAndCancel:
    """Tests for decline_invite and cancel_invite."""

    @pytest.mark.asyncio
    async def test_decline_notifies_inviter(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        notification_repo = await unit_env.get(NotificationRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        outcome = await invite_service.decline_invite(BOB, created.invite.id)

        assert outcome.success
        assert outcome.invite.status is InviteStatus.DECLINED
        notifications = await notification_repo.find_for_user(ALICE)
        assert notifications[0].type is NotificationType.COLLAB_DECLINED
        assert notifications[0].title == "Bob declined your friend invite"

    @pytest.mark.asyncio
    async def test_code_invites_cannot_be_declined(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)

        outcome = await invite_service.decline_invite(BOB, created.invite.id)

        assert outcome.error is InviteErrorKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_cancel_by_inviter(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        outcome = await invite_service.cancel_invite(ALICE, created.invite.id)

        assert outcome.success
        assert outcome.invite.status is InviteStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_cancel_by_recipient_is_forbidden(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )

        outcome = await invite_service.cancel_invite(BOB, created.invite.id)

        assert outcome.error is InviteErrorKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_cancel_expired_invite_is_already_resolved(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        await backdate_expiry(invite_repo, created.invite)

        outcome = await invite_service.cancel_invite(ALICE, created.invite.id)

        assert outcome.error is InviteErrorKind.ALREADY_RESOLVED

    @pytest.mark.asyncio
    async def test_cancelled_invite_cannot_be_accepted(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)
        await invite_service.cancel_invite(ALICE, created.invite.id)

        outcome = await invite_service.accept_invite(
            BOB, InviteRef.by_code(InviteKind.FRIEND, created.invite.code)
        )

        assert outcome.error is InviteErrorKind.ALREADY_RESOLVED


class TestInviteReads:
    """Tests for get_invite, list_sent and list_pending."""

    @pytest.mark.asyncio
    async def test_get_invite_reports_expired(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        created = await invite_service.create_invite(ALICE, InviteKind.FRIEND)
        await backdate_expiry(invite_repo, created.invite)

        outcome = await invite_service.get_invite(
            InviteRef.by_code(InviteKind.FRIEND, created.invite.code)
        )

        assert outcome.error is InviteErrorKind.EXPIRED

    @pytest.mark.asyncio
    async def test_list_pending_hides_expired_invites(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        stale = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        live = await invite_service.create_invite(
            CAROL, InviteKind.FRIEND, target_user_id=BOB
        )
        await backdate_expiry(invite_repo, stale.invite)

        pending = await invite_service.list_pending(BOB)

        assert [invite.id for invite in pending] == [live.invite.id]

    @pytest.mark.asyncio
    async def test_list_sent_shows_lazily_expired_status(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        await backdate_expiry(invite_repo, created.invite)

        sent = await invite_service.list_sent(ALICE)
        pending_only = await invite_service.list_sent(ALICE, InviteStatus.PENDING)

        assert [invite.status for invite in sent] == [InviteStatus.EXPIRED]
        assert pending_only == []

    @pytest.mark.asyncio
    async def test_list_sent_expired_filter_includes_stale_invites(self, unit_env):
        """Filtering by expired finds invites no unfiltered read has rewritten yet."""
        # Arrange
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        created = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        await backdate_expiry(invite_repo, created.invite)

        # Act
        expired = await invite_service.list_sent(ALICE, InviteStatus.EXPIRED)

        # Assert
        assert [invite.id for invite in expired] == [created.invite.id]
        assert expired[0].status is InviteStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_list_sent_pending_page_skips_stale_invites(self, unit_env):
        """A stale invite newer than a live one does not leave the page short."""
        # Arrange
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        live = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        stale = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=CAROL
        )
        await backdate_expiry(invite_repo, stale.invite)

        # Act
        page = await invite_service.list_sent(ALICE, InviteStatus.PENDING, limit=1)

        # Assert
        assert [invite.id for invite in page] == [live.invite.id]

    @pytest.mark.asyncio
    async def test_list_pending_page_skips_stale_invites(self, unit_env):
        await _seed_users(unit_env)
        invite_service = await unit_env.get(InviteService)
        invite_repo = await unit_env.get(InviteRepository)
        live = await invite_service.create_invite(
            ALICE, InviteKind.FRIEND, target_user_id=BOB
        )
        stale = await invite_service.create_invite(
            CAROL, InviteKind.FRIEND, target_user_id=BOB
        )
        await backdate_expiry(invite_repo, stale.invite)

        page = await invite_service.list_pending(BOB, limit=1)

        assert [invite.id for invite in page] == [live.invite.id]
