"""PostgreSQL implementations of the relationship repositories."""

from typing import Optional

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

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
from marquee.persistence.mappers import (
    collaborator_to_dict,
    row_to_collaborator,
    row_to_friendship,
    row_to_partnership,
)
from marquee.persistence.tables import (
    friendships_table,
    list_collaborators_table,
    partner_memberships_table,
    partnerships_table,
)


class PostgresFriendshipRepository(FriendshipRepository):
    """PostgreSQL implementation of FriendshipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[Friendship]:
        low, high = ordered_pair(user_a, user_b)
        stmt = select(friendships_table).where(
            and_(
                friendships_table.c.user_low_id == low,
                friendships_table.c.user_high_id == high,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_friendship(dict(row)) if row else None

    async def find_for_user(self, user_id: UserId) -> list[Friendship]:
        stmt = (
            select(friendships_table)
            .where(
                or_(
                    friendships_table.c.user_low_id == user_id,
                    friendships_table.c.user_high_id == user_id,
                )
            )
            .order_by(friendships_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_friendship(dict(row)) for row in result.mappings().all()]

    async def add_if_absent(self, friendship: Friendship) -> tuple[Friendship, bool]:
        """Insert a friendship unless the pair already exists.

        Uses ON CONFLICT DO NOTHING on the pair constraint, so concurrent
        inserts of the same pair create one row.
        """
        stmt = (
            pg_insert(friendships_table)
            .values(
                id=friendship.id,
                user_low_id=friendship.user_low_id,
                user_high_id=friendship.user_high_id,
                invite_id=friendship.invite_id,
                created_at=friendship.created_at,
            )
            .on_conflict_do_nothing(constraint="uq_friendships_pair")
            .returning(friendships_table.c.id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.first() is not None:
            return friendship, True

        existing = await self.find_between(friendship.user_low_id, friendship.user_high_id)
        assert existing is not None
        return existing, False

    async def delete(self, friendship_id: FriendshipId) -> bool:
        result = await self.session.execute(
            delete(friendships_table).where(friendships_table.c.id == friendship_id)
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]


class PostgresPartnershipRepository(PartnershipRepository):
    """PostgreSQL implementation of PartnershipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[Partnership]:
        low, high = ordered_pair(user_a, user_b)
        stmt = select(partnerships_table).where(
            and_(
                partnerships_table.c.user_low_id == low,
                partnerships_table.c.user_high_id == high,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_partnership(dict(row)) if row else None

    async def find_for_user(self, user_id: UserId) -> Optional[Partnership]:
        stmt = (
            select(partnerships_table)
            .join(
                partner_memberships_table,
                partner_memberships_table.c.partnership_id == partnerships_table.c.id,
            )
            .where(partner_memberships_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_partnership(dict(row)) if row else None

    async def add(self, partnership: Partnership) -> Partnership:
        """Insert a partnership and one membership row per partner.

        Raises:
            AlreadyConnectedError: If either user was partnered concurrently
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    pg_insert(partnerships_table).values(
                        id=partnership.id,
                        user_low_id=partnership.user_low_id,
                        user_high_id=partnership.user_high_id,
                        list_id=partnership.list_id,
                        invite_id=partnership.invite_id,
                        created_at=partnership.created_at,
                    )
                )
                await self.session.execute(
                    pg_insert(partner_memberships_table).values(
                        [
                            {"user_id": user_id, "partnership_id": partnership.id}
                            for user_id in (
                                partnership.user_low_id,
                                partnership.user_high_id,
                            )
                        ]
                    )
                )
        except IntegrityError as e:
            raise AlreadyConnectedError("This user already has a partner") from e
        return partnership

    async def delete(self, partnership_id: PartnershipId) -> bool:
        result = await self.session.execute(
            delete(partnerships_table).where(partnerships_table.c.id == partnership_id)
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]


class PostgresListCollaboratorRepository(ListCollaboratorRepository):
    """PostgreSQL implementation of ListCollaboratorRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(
        self, list_id: ListId, user_id: UserId
    ) -> Optional[ListCollaborator]:
        stmt = select(list_collaborators_table).where(
            and_(
                list_collaborators_table.c.list_id == list_id,
                list_collaborators_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_collaborator(dict(row)) if row else None

    async def find_for_user(self, user_id: UserId) -> list[ListCollaborator]:
        stmt = select(list_collaborators_table).where(
            list_collaborators_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return [row_to_collaborator(dict(row)) for row in result.mappings().all()]

    async def find_for_list(self, list_id: ListId) -> list[ListCollaborator]:
        stmt = (
            select(list_collaborators_table)
            .where(list_collaborators_table.c.list_id == list_id)
            .order_by(list_collaborators_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_collaborator(dict(row)) for row in result.mappings().all()]

    async def add_if_absent(
        self, collaborator: ListCollaborator
    ) -> tuple[ListCollaborator, bool]:
        stmt = (
            pg_insert(list_collaborators_table)
            .values(**collaborator_to_dict(collaborator))
            .on_conflict_do_nothing(constraint="uq_list_collaborators_list_user")
            .returning(list_collaborators_table.c.id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.first() is not None:
            return collaborator, True

        existing = await self.find(collaborator.list_id, collaborator.user_id)
        assert existing is not None
        return existing, False

    async def delete(self, collaborator_id: CollaboratorId) -> bool:
        result = await self.session.execute(
            delete(list_collaborators_table).where(
                list_collaborators_table.c.id == collaborator_id
            )
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
