"""In-memory user repository for testing."""

from typing import Optional, Sequence

from marquee.domain.model import User
from marquee.domain.repository import UserRepository
from marquee.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._users: dict[UserId, User] = database.table("users")

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def find_by_email(self, email: str) -> Optional[User]:
        needle = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == needle:
                return user
        return None

    async def search(
        self, term: str, exclude_user_id: UserId, limit: int = 10
    ) -> list[User]:
        """Search by username prefix or name substring."""
        term = term.lower()

        def rank(user: User) -> tuple[int, str]:
            username = (user.username or "").lower()
            if username == term:
                return (0, user.name)
            if username.startswith(term):
                return (1, user.name)
            return (2, user.name)

        matches = [
            user
            for user in self._users.values()
            if user.show_in_search
            and user.id != exclude_user_id
            and (
                (user.username or "").lower().startswith(term)
                or term in user.name.lower()
            )
        ]
        matches.sort(key=rank)
        return matches[:limit]

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user
