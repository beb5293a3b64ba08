"""Relationship repository interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from marquee.domain.model.relationship import (
    Friendship,
    ListCollaborator,
    Partnership,
)
from marquee.domain.value import (
    CollaboratorId,
    FriendshipId,
    ListId,
    PartnershipId,
    UserId,
)


class FriendshipRepository(ABC):
    """Repository for Friendship edges (unordered user pairs)."""

    @abstractmethod
    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[Friendship]:
        """Find the friendship between two users in either order."""
        pass

    @abstractmethod
    async def find_for_user(self, user_id: UserId) -> list[Friendship]:
        """Find every friendship the user is part of."""
        pass

    @abstractmethod
    async def add_if_absent(self, friendship: Friendship) -> tuple[Friendship, bool]:
        """Insert a friendship unless the pair already exists.

        Returns:
            The stored friendship and whether it was created by this call
        """
        pass

    @abstractmethod
    async def delete(self, friendship_id: FriendshipId) -> bool:
        """Delete a friendship. Returns True if a row was removed."""
        pass


class PartnershipRepository(ABC):
    """Repository for Partnership pairings."""

    @abstractmethod
    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[Partnership]:
        """Find the partnership between two users in either order."""
        pass

    @abstractmethod
    async def find_for_user(self, user_id: UserId) -> Optional[Partnership]:
        """Find the user's partnership; a user has at most one partner."""
        pass

    @abstractmethod
    async def add(self, partnership: Partnership) -> Partnership:
        """Insert a partnership."""
        pass

    @abstractmethod
    async def delete(self, partnership_id: PartnershipId) -> bool:
        """Delete a partnership. Returns True if a row was removed."""
        pass


class ListCollaboratorRepository(ABC):
    """Repository for ListCollaborator grants."""

    @abstractmethod
    async def find(
        self, list_id: ListId, user_id: UserId
    ) -> Optional[ListCollaborator]:
        """Find the grant of a user on a list."""
        pass

    @abstractmethod
    async def find_for_user(self, user_id: UserId) -> list[ListCollaborator]:
        """Find every grant held by a user."""
        pass

    @abstractmethod
    async def find_for_list(self, list_id: ListId) -> list[ListCollaborator]:
        """Find every grant on a list."""
        pass

    @abstractmethod
    async def add_if_absent(
        self, collaborator: ListCollaborator
    ) -> tuple[ListCollaborator, bool]:
        """Insert a grant unless the user already collaborates on the list.

        Returns:
            The stored grant and whether it was created by this call
        """
        pass

    @abstractmethod
    async def delete(self, collaborator_id: CollaboratorId) -> bool:
        """Delete a grant. Returns True if a row was removed."""
        pass
