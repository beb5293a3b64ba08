"""In-memory relationship repositories for testing."""

import asyncio
from typing import Optional

from marquee.domain.error import AlreadyConnectedError
from marquee.domain.model import Friendship, ListCollaborator, Partnership, ordered_pair
from marquee.domain.repository import (
    FriendshipRepository,
    ListCollaboratorRepository,
    PartnershipRepository,
)
from marquee.domain.value import (
    CollaboratorId,
    FriendshipId,
    ListId,
    PartnershipId,
    UserId,
)

from .database import InMemoryDatabase


class InMemoryFriendshipRepository(FriendshipRepository):
    """In-memory implementation of FriendshipRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._friendships: dict[FriendshipId, Friendship] = database.table("friendships")

    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[Friendship]:
        low, high = ordered_pair(user_a, user_b)
        for friendship in self._friendships.values():
            if friendship.user_low_id == low and friendship.user_high_id == high:
                return friendship
        return None

    async def find_for_user(self, user_id: UserId) -> list[Friendship]:
        friendships = [f for f in self._friendships.values() if f.involves(user_id)]
        return sorted(friendships, key=lambda f: f.created_at)

    async def add_if_absent(self, friendship: Friendship) -> tuple[Friendship, bool]:
        await asyncio.sleep(0)
        existing = await self.find_between(friendship.user_low_id, friendship.user_high_id)
        if existing is not None:
            return existing, False
        self._friendships[friendship.id] = friendship
        return friendship, True

    async def delete(self, friendship_id: FriendshipId) -> bool:
        return self._friendships.pop(friendship_id, None) is not None


class InMemoryPartnershipRepository(PartnershipRepository):
    """In-memory implementation of PartnershipRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._partnerships: dict[PartnershipId, Partnership] = database.table(
            "partnerships"
        )

    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[Partnership]:
        low, high = ordered_pair(user_a, user_b)
        for partnership in self._partnerships.values():
            if partnership.user_low_id == low and partnership.user_high_id == high:
                return partnership
        return None

    async def find_for_user(self, user_id: UserId) -> Optional[Partnership]:
        for partnership in self._partnerships.values():
            if partnership.involves(user_id):
                return partnership
        return None

    async def add(self, partnership: Partnership) -> Partnership:
        """Insert a partnership.

        Raises:
            AlreadyConnectedError: If either user already has a partner
        """
        await asyncio.sleep(0)
        for existing in self._partnerships.values():
            if existing.involves(partnership.user_low_id) or existing.involves(
                partnership.user_high_id
            ):
                raise AlreadyConnectedError("This user already has a partner")
        self._partnerships[partnership.id] = partnership
        return partnership

    async def delete(self, partnership_id: PartnershipId) -> bool:
        return self._partnerships.pop(partnership_id, None) is not None


class InMemoryListCollaboratorRepository(ListCollaboratorRepository):
    """In-memory implementation of ListCollaboratorRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._collaborators: dict[CollaboratorId, ListCollaborator] = database.table(
            "list_collaborators"
        )

    async def find(
        self, list_id: ListId, user_id: UserId
    ) -> Optional[ListCollaborator]:
        for grant in self._collaborators.values():
            if grant.list_id == list_id and grant.user_id == user_id:
                return grant
        return None

    async def find_for_user(self, user_id: UserId) -> list[ListCollaborator]:
        return [g for g in self._collaborators.values() if g.user_id == user_id]

    async def find_for_list(self, list_id: ListId) -> list[ListCollaborator]:
        grants = [g for g in self._collaborators.values() if g.list_id == list_id]
        return sorted(grants, key=lambda g: g.created_at)

    async def add_if_absent(
        self, collaborator: ListCollaborator
    ) -> tuple[ListCollaborator, bool]:
        await asyncio.sleep(0)
        existing = await self.find(collaborator.list_id, collaborator.user_id)
        if existing is not None:
            return existing, False
        self._collaborators[collaborator.id] = collaborator
        return collaborator, True

    async def delete(self, collaborator_id: CollaboratorId) -> bool:
        return self._collaborators.pop(collaborator_id, None) is not None
