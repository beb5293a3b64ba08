"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from marquee.domain.model.user import User
from marquee.domain.value import UserId


class UserRepository(ABC):
    """Repository for User entity.

    Users are owned by the surrounding account system; this contract covers
    the lookups the invite subsystem needs.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query)."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, case-insensitively.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def search(
        self, term: str, exclude_user_id: UserId, limit: int = 10
    ) -> list[User]:
        """Search searchable users by username prefix or name substring.

        Exact username matches rank first, then username prefix matches,
        then the rest ordered by name.

        Args:
            term: Lower-cased, trimmed search term
            exclude_user_id: User to leave out of the results (the caller)
            limit: Maximum number of results

        Returns:
            Matching users
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
