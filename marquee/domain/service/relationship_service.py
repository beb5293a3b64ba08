"""Relationship domain service.

Turns accepted invites into durable relationships (friendships, partnerships
and list collaborator grants) and tears those relationships down again.
It is the only writer of relationship rows.
"""

from collections.abc import Awaitable, Callable
from typing import Optional
from uuid import uuid4

import logfire

from marquee.config import InvitationSettings
from marquee.domain.error import (
    ListNotFoundError,
    NotAuthorizedError,
    NotFoundError,
)
from marquee.domain.model import (
    Friendship,
    Invite,
    ListCollaborator,
    Notification,
    Partnership,
    RelationshipResult,
    User,
    WatchList,
    ordered_pair,
)
from marquee.domain.repository import (
    FriendshipRepository,
    ListCollaboratorRepository,
    PartnershipRepository,
    UnitOfWork,
    UserRepository,
    WatchListRepository,
)
from marquee.domain.service.notification_service import NotificationService
from marquee.domain.value import (
    AccessLevel,
    CollaboratorId,
    FriendshipId,
    InviteKind,
    ListId,
    NotificationType,
    PartnershipId,
    UserId,
    WatchListType,
)

from .base import Service

Materializer = Callable[[Invite, UserId], Awaitable[RelationshipResult]]


class RelationshipService(Service):
    """Domain service for friendships, partnerships and list collaborators."""

    def __init__(
        self,
        friendship_repository: FriendshipRepository,
        partnership_repository: PartnershipRepository,
        watch_list_repository: WatchListRepository,
        collaborator_repository: ListCollaboratorRepository,
        user_repository: UserRepository,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        settings: InvitationSettings,
    ) -> None:
        """Initialize relationship service.

        Args:
            friendship_repository: Friendship repository
            partnership_repository: Partnership repository
            watch_list_repository: Watch list repository
            collaborator_repository: List collaborator repository
            user_repository: User repository (for notification names)
            notification_service: Notification service
            unit_of_work: Transaction boundary
            settings: Invitation settings (default partner list name)
        """
        self.friendship_repository = friendship_repository
        self.partnership_repository = partnership_repository
        self.watch_list_repository = watch_list_repository
        self.collaborator_repository = collaborator_repository
        self.user_repository = user_repository
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work
        self.settings = settings

        self._materializers: dict[InviteKind, Materializer] = {
            InviteKind.FRIEND: self._materialize_friendship,
            InviteKind.PARTNER: self._materialize_partnership,
            InviteKind.LIST_DIRECT: self._materialize_collaborator,
            InviteKind.LIST_CODE: self._materialize_collaborator,
        }

    # ------------------------------------------------------------------
    # Materialization (called from inside an invite acceptance transaction)
    # ------------------------------------------------------------------

    async def materialize(self, invite: Invite, accepter_id: UserId) -> RelationshipResult:
        """Create the relationship an accepted invite grants.

        Must run inside the transaction that moves the invite to accepted.

        Args:
            invite: The invite being accepted
            accepter_id: User accepting the invite

        Returns:
            The relationship that now exists

        Raises:
            ListNotFoundError: If a list invite's list was deleted
        """
        with logfire.span(
            "relationship_service.materialize",
            invite_id=str(invite.id),
            kind=invite.kind.value,
            accepter_id=accepter_id,
        ):
            result = await self._materializers[invite.kind](invite, accepter_id)
            logfire.info(
                "Relationship materialized",
                invite_id=str(invite.id),
                kind=invite.kind.value,
                created=result.created,
            )
            return result

    async def _materialize_friendship(
        self, invite: Invite, accepter_id: UserId
    ) -> RelationshipResult:
        low, high = ordered_pair(invite.inviter_id, accepter_id)
        friendship, created = await self.friendship_repository.add_if_absent(
            Friendship(
                id=FriendshipId(uuid4()),
                user_low_id=low,
                user_high_id=high,
                invite_id=invite.id,
            )
        )
        return RelationshipResult(
            kind=invite.kind, friendship_id=friendship.id, created=created
        )

    async def _materialize_partnership(
        self, invite: Invite, accepter_id: UserId
    ) -> RelationshipResult:
        # The inviter owns the shared list and the accepter holds a co-owner
        # grant, so both have the same rights without a redundant owner row.
        list_name = invite.list_name or self.settings.partner_list_default_name
        partner_list = await self.watch_list_repository.save(
            WatchList(
                id=ListId(uuid4()),
                owner_id=invite.inviter_id,
                name=list_name,
                type=WatchListType.PARTNER,
                is_shared=True,
            )
        )
        await self.collaborator_repository.add_if_absent(
            ListCollaborator(
                id=CollaboratorId(uuid4()),
                list_id=partner_list.id,
                user_id=accepter_id,
                access=AccessLevel.CO_OWNER,
                invite_id=invite.id,
            )
        )

        low, high = ordered_pair(invite.inviter_id, accepter_id)
        partnership = await self.partnership_repository.add(
            Partnership(
                id=PartnershipId(uuid4()),
                user_low_id=low,
                user_high_id=high,
                list_id=partner_list.id,
                invite_id=invite.id,
            )
        )
        return RelationshipResult(
            kind=invite.kind,
            partnership_id=partnership.id,
            list_id=partner_list.id,
            list_name=partner_list.name,
        )

    async def _materialize_collaborator(
        self, invite: Invite, accepter_id: UserId
    ) -> RelationshipResult:
        if invite.target_list_id is None:
            raise ListNotFoundError("<missing>")

        watch_list = await self.watch_list_repository.find_by_id(
            invite.target_list_id, for_update=True
        )
        if watch_list is None:
            raise ListNotFoundError(str(invite.target_list_id))

        collaborator, created = await self.collaborator_repository.add_if_absent(
            ListCollaborator(
                id=CollaboratorId(uuid4()),
                list_id=watch_list.id,
                user_id=accepter_id,
                access=AccessLevel.EDITOR,
                invite_id=invite.id,
            )
        )
        if not watch_list.is_shared:
            await self.watch_list_repository.save(
                watch_list.model_copy(update={"is_shared": True})
            )

        return RelationshipResult(
            kind=invite.kind,
            collaborator_id=collaborator.id,
            list_id=watch_list.id,
            list_name=watch_list.name,
            created=created,
        )

    # ------------------------------------------------------------------
    # Connection checks
    # ------------------------------------------------------------------

    async def find_existing_connection(
        self,
        kind: InviteKind,
        inviter_id: UserId,
        other_id: Optional[UserId],
        list_id: Optional[ListId] = None,
    ) -> Optional[str]:
        """Describe the relationship that would make an invite redundant.

        Args:
            kind: Invite kind
            inviter_id: User who sent (or is sending) the invite
            other_id: User on the receiving side, if known
            list_id: Target list for list invites

        Returns:
            A reason if the users are already connected, None otherwise

        Raises:
            ListNotFoundError: If a list invite's list does not exist
        """
        if kind is InviteKind.FRIEND:
            if other_id is None:
                return None
            if await self.friendship_repository.find_between(inviter_id, other_id):
                return "You are already friends"
            return None

        if kind is InviteKind.PARTNER:
            if await self.partnership_repository.find_for_user(inviter_id):
                if other_id is not None and await self.partnership_repository.find_between(
                    inviter_id, other_id
                ):
                    return "You are already partners"
                return "The inviter already has a partner"
            if other_id is not None and await self.partnership_repository.find_for_user(
                other_id
            ):
                return "This user already has a partner"
            return None

        if list_id is None:
            raise ListNotFoundError("<missing>")
        watch_list = await self.watch_list_repository.find_by_id(list_id)
        if watch_list is None:
            raise ListNotFoundError(str(list_id))
        if other_id is None:
            return None
        if watch_list.owner_id == other_id:
            return "User already owns this list"
        if await self.collaborator_repository.find(list_id, other_id):
            return "User is already a collaborator"
        return None

    async def are_connected(self, user_a: UserId, user_b: UserId) -> bool:
        """Whether two users are friends or partners."""
        if await self.friendship_repository.find_between(user_a, user_b):
            return True
        return await self.partnership_repository.find_between(user_a, user_b) is not None

    # ------------------------------------------------------------------
    # Revocation
    # ------------------------------------------------------------------

    async def remove_friend(self, actor_id: UserId, friend_id: UserId) -> None:
        """End a friendship and tell the other user.

        Raises:
            NotFoundError: If the users are not friends
        """
        with logfire.span(
            "relationship_service.remove_friend",
            actor_id=actor_id,
            friend_id=friend_id,
        ):
            async with self.unit_of_work.transaction():
                friendship = await self.friendship_repository.find_between(
                    actor_id, friend_id
                )
                if friendship is None:
                    raise NotFoundError("Friendship", f"{actor_id}:{friend_id}")

                await self.friendship_repository.delete(friendship.id)
                actor = await self.user_repository.find_by_id(actor_id)
                notice = await self.notification_service.notify(
                    friend_id,
                    NotificationType.COLLAB_ENDED,
                    f"{_name(actor)} removed you as a friend",
                    "You can no longer suggest titles to each other",
                    {"ender_id": actor_id, "ender_name": _name(actor)},
                )

            logfire.info(
                "Friendship removed",
                friendship_id=str(friendship.id),
                actor_id=actor_id,
            )
            self.notification_service.dispatch([notice])

    async def end_partnership(self, actor_id: UserId) -> None:
        """End the actor's partnership, removing the shared partner list.

        Raises:
            NotFoundError: If the actor has no partner
        """
        with logfire.span("relationship_service.end_partnership", actor_id=actor_id):
            async with self.unit_of_work.transaction():
                partnership = await self.partnership_repository.find_for_user(actor_id)
                if partnership is None:
                    raise NotFoundError("Partnership", str(actor_id))

                partner_id = partnership.other(actor_id)
                await self.partnership_repository.delete(partnership.id)
                await self.watch_list_repository.delete(partnership.list_id)

                actor = await self.user_repository.find_by_id(actor_id)
                notice = await self.notification_service.notify(
                    partner_id,
                    NotificationType.COLLAB_ENDED,
                    f"{_name(actor, 'Your partner')} ended your partner connection",
                    "Your shared lists have been removed",
                    {"ender_id": actor_id, "ender_name": _name(actor, "Your partner")},
                )

            logfire.info(
                "Partnership ended",
                partnership_id=str(partnership.id),
                actor_id=actor_id,
            )
            self.notification_service.dispatch([notice])

    async def remove_collaborator(
        self, actor_id: UserId, list_id: ListId, user_id: UserId
    ) -> None:
        """Revoke a collaborator grant.

        The list owner may remove anyone; a collaborator may only leave.
        Partner-list grants end with the partnership instead.

        Raises:
            NotFoundError: If the list or the grant does not exist
            NotAuthorizedError: If the actor may not remove this grant
        """
        with logfire.span(
            "relationship_service.remove_collaborator",
            actor_id=actor_id,
            list_id=str(list_id),
            user_id=user_id,
        ):
            notices: list[Notification] = []
            async with self.unit_of_work.transaction():
                watch_list = await self.watch_list_repository.find_by_id(
                    list_id, for_update=True
                )
                if watch_list is None:
                    raise NotFoundError("List", str(list_id))

                grant = await self.collaborator_repository.find(list_id, user_id)
                if grant is None:
                    raise NotFoundError("Collaborator", f"{list_id}:{user_id}")

                if actor_id not in (watch_list.owner_id, user_id):
                    raise NotAuthorizedError("collaborator", str(grant.id), str(actor_id))
                if grant.access is AccessLevel.CO_OWNER:
                    raise NotAuthorizedError("partner list", str(list_id), str(actor_id))

                await self.collaborator_repository.delete(grant.id)
                remaining = await self.collaborator_repository.find_for_list(list_id)
                if not remaining and watch_list.is_shared:
                    await self.watch_list_repository.save(
                        watch_list.model_copy(update={"is_shared": False})
                    )

                actor = await self.user_repository.find_by_id(actor_id)
                if actor_id == watch_list.owner_id:
                    recipient, title = user_id, f"You were removed from {watch_list.name}"
                else:
                    recipient = watch_list.owner_id
                    title = f"{_name(actor)} left {watch_list.name}"
                notices.append(
                    await self.notification_service.notify(
                        recipient,
                        NotificationType.COLLAB_ENDED,
                        title,
                        data={"list_id": str(list_id), "ender_id": actor_id},
                    )
                )

            logfire.info(
                "Collaborator removed",
                list_id=str(list_id),
                user_id=user_id,
                actor_id=actor_id,
            )
            self.notification_service.dispatch(notices)


def _name(user: Optional[User], fallback: str = "Someone") -> str:
    return user.display_name if user else fallback
