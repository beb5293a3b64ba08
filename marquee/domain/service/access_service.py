"""Access resolver: read-side queries over relationships."""

from collections import Counter
from typing import Optional

import logfire

from marquee.config import SearchSettings
from marquee.domain.model import FriendShare, FriendsWhoShare, UserSearchResult
from marquee.domain.repository import (
    FriendshipRepository,
    ListCollaboratorRepository,
    PartnershipRepository,
    UserRepository,
    WatchListRepository,
)
from marquee.domain.value import ListKind, UserId, WatchListType

from .base import Service


class AccessService(Service):
    """Answers which lists and people a user shares with.

    Never writes.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        friendship_repository: FriendshipRepository,
        partnership_repository: PartnershipRepository,
        watch_list_repository: WatchListRepository,
        collaborator_repository: ListCollaboratorRepository,
        settings: SearchSettings,
    ) -> None:
        self.user_repository = user_repository
        self.friendship_repository = friendship_repository
        self.partnership_repository = partnership_repository
        self.watch_list_repository = watch_list_repository
        self.collaborator_repository = collaborator_repository
        self.settings = settings

    async def shared_list_kinds(self, user_id: UserId) -> list[ListKind]:
        """Categories of lists the user can currently reach.

        Used to decide which list affordances to show, so a failure here
        degrades to an empty result instead of failing the request.

        Args:
            user_id: User to inspect

        Returns:
            Subset of owned, collaborative and partner, in that order
        """
        with logfire.span("access_service.shared_list_kinds", user_id=user_id):
            try:
                return await self._shared_list_kinds(user_id)
            except Exception as error:
                logfire.warn(
                    "Shared list kinds unavailable",
                    user_id=user_id,
                    error=str(error),
                    error_type=type(error).__name__,
                )
                return []

    async def _shared_list_kinds(self, user_id: UserId) -> list[ListKind]:
        owned = await self.watch_list_repository.find_owned_by(user_id)
        custom_owned = [wl for wl in owned if wl.type is WatchListType.CUSTOM]

        grants = await self.collaborator_repository.find_for_user(user_id)
        granted = await self.watch_list_repository.find_by_ids(
            [grant.list_id for grant in grants]
        )

        kinds: list[ListKind] = []
        if custom_owned:
            kinds.append(ListKind.OWNED)
        if any(wl.is_shared for wl in custom_owned) or any(
            wl.type is WatchListType.CUSTOM for wl in granted
        ):
            kinds.append(ListKind.COLLABORATIVE)
        if await self.partnership_repository.find_for_user(user_id):
            kinds.append(ListKind.PARTNER)
        return kinds

    async def friends_who_share(self, user_id: UserId) -> FriendsWhoShare:
        """Friends with at least one active list grant or partnership.

        Grants count in both directions: lists the user owns that the friend
        collaborates on, and lists the friend owns that the user collaborates on.

        Returns:
            Friends ordered by number of shared lists, then by name
        """
        with logfire.span("access_service.friends_who_share", user_id=user_id):
            friendships = await self.friendship_repository.find_for_user(user_id)
            friend_ids = {friendship.other(user_id) for friendship in friendships}
            if not friend_ids:
                return FriendsWhoShare(friends=[], total_count=0)

            shared: Counter[UserId] = Counter()

            # Lists owned by a friend that the user collaborates on
            grants = await self.collaborator_repository.find_for_user(user_id)
            for watch_list in await self.watch_list_repository.find_by_ids(
                [grant.list_id for grant in grants]
            ):
                if watch_list.owner_id in friend_ids:
                    shared[watch_list.owner_id] += 1

            # Lists owned by the user that a friend collaborates on
            for watch_list in await self.watch_list_repository.find_owned_by(user_id):
                for grant in await self.collaborator_repository.find_for_list(
                    watch_list.id
                ):
                    if grant.user_id in friend_ids:
                        shared[grant.user_id] += 1

            partnership = await self.partnership_repository.find_for_user(user_id)
            partner_id: Optional[UserId] = (
                partnership.other(user_id) if partnership else None
            )

            sharing_ids = set(shared)
            if partner_id is not None and partner_id in friend_ids:
                sharing_ids.add(partner_id)

            users = await self.user_repository.find_by_ids(sorted(sharing_ids))
            friends = [
                FriendShare(
                    friend_id=user.id,
                    name=user.display_name,
                    username=user.username,
                    image=user.image,
                    shared_list_count=shared[user.id],
                    is_partner=user.id == partner_id,
                )
                for user in users
            ]
            friends.sort(key=lambda f: (-f.shared_list_count, f.name.lower()))

            logfire.info(
                "Friends who share resolved", user_id=user_id, count=len(friends)
            )
            return FriendsWhoShare(friends=friends, total_count=len(friends))

    async def search_users(
        self, caller_id: UserId, query: str, limit: Optional[int] = None
    ) -> list[UserSearchResult]:
        """Find users to invite by username, name or exact email.

        Queries shorter than the configured minimum return no results
        without querying the store. The caller and users hidden from search
        never appear.

        Args:
            caller_id: User searching
            query: Raw search text
            limit: Maximum number of results

        Returns:
            Matching users, flagged when already connected to the caller
        """
        term = query.strip()
        if len(term) < self.settings.min_query_length:
            return []

        limit = min(limit or self.settings.default_limit, self.settings.max_limit)
        with logfire.span(
            "access_service.search_users", caller_id=caller_id, limit=limit
        ):
            if "@" in term:
                match = await self.user_repository.find_by_email(term)
                users = (
                    [match]
                    if match and match.id != caller_id and match.show_in_search
                    else []
                )
            else:
                users = await self.user_repository.search(term.lower(), caller_id, limit)

            friendships = await self.friendship_repository.find_for_user(caller_id)
            connected = {friendship.other(caller_id) for friendship in friendships}
            partnership = await self.partnership_repository.find_for_user(caller_id)
            if partnership:
                connected.add(partnership.other(caller_id))

            return [
                UserSearchResult(
                    id=user.id,
                    name=user.display_name,
                    username=user.username,
                    is_connection=user.id in connected,
                )
                for user in users
                if user.id != caller_id
            ]
