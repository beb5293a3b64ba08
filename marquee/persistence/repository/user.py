"""PostgreSQL implementation of User repository."""

from typing import Optional, Sequence

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.domain.model import User
from marquee.domain.repository import UserRepository
from marquee.domain.value import UserId
from marquee.persistence.mappers import row_to_user, user_to_dict
from marquee.persistence.tables import users_table


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query)."""
        if not user_ids:
            return []

        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.strip().lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def search(
        self, term: str, exclude_user_id: UserId, limit: int = 10
    ) -> list[User]:
        """Search by username prefix or name substring.

        Exact username matches rank first, then username prefixes, then
        the rest by name.
        """
        escaped = _escape_like(term.lower())
        username = func.lower(users_table.c.username)
        name = func.lower(users_table.c.name)
        rank = case(
            (username == term.lower(), 0),
            (username.like(f"{escaped}%", escape="\\"), 1),
            else_=2,
        )
        stmt = (
            select(users_table)
            .where(
                and_(
                    users_table.c.show_in_search.is_(True),
                    users_table.c.id != exclude_user_id,
                    or_(
                        username.like(f"{escaped}%", escape="\\"),
                        name.like(f"%{escaped}%", escape="\\"),
                    ),
                )
            )
            .order_by(rank, users_table.c.name)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        user_dict = user_to_dict(user)
        stmt = pg_insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in user_dict.items() if k not in ("id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
