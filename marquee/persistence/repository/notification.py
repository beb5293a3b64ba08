"""PostgreSQL implementation of Notification repository."""

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.domain.model import Notification
from marquee.domain.repository import NotificationRepository
from marquee.domain.value import NotificationId, UserId
from marquee.persistence.mappers import notification_to_dict, row_to_notification
from marquee.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add(self, notification: Notification) -> Notification:
        stmt = insert(notifications_table).values(**notification_to_dict(notification))
        await self.session.execute(stmt)
        await self.session.flush()
        return notification

    async def find_for_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        stmt = select(notifications_table).where(notifications_table.c.user_id == user_id)
        if unread_only:
            stmt = stmt.where(notifications_table.c.is_read.is_(False))
        stmt = (
            stmt.order_by(notifications_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def count_unread(self, user_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(
                and_(
                    notifications_table.c.user_id == user_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def mark_read(self, user_id: UserId, notification_id: NotificationId) -> bool:
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.id == notification_id,
                    notifications_table.c.user_id == user_id,
                )
            )
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def mark_all_read(self, user_id: UserId) -> int:
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.user_id == user_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete(self, user_id: UserId, notification_id: NotificationId) -> bool:
        stmt = delete(notifications_table).where(
            and_(
                notifications_table.c.id == notification_id,
                notifications_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_for_user(self, user_id: UserId, read_only: bool = False) -> int:
        stmt = delete(notifications_table).where(notifications_table.c.user_id == user_id)
        if read_only:
            stmt = stmt.where(notifications_table.c.is_read.is_(True))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
