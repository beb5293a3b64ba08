"""In-memory notification repository for testing."""

from marquee.domain.model import Notification
from marquee.domain.repository import NotificationRepository
from marquee.domain.value import NotificationId, UserId

from .database import InMemoryDatabase


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._notifications: dict[NotificationId, Notification] = database.table(
            "notifications"
        )

    def _for_user(self, user_id: UserId) -> list[Notification]:
        return [n for n in self._notifications.values() if n.user_id == user_id]

    async def add(self, notification: Notification) -> Notification:
        self._notifications[notification.id] = notification
        return notification

    async def find_for_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        # Insertion order breaks created_at ties
        ordered = [
            (n.created_at, position, n)
            for position, n in enumerate(self._for_user(user_id))
            if not unread_only or not n.is_read
        ]
        ordered.sort(key=lambda row: row[:2], reverse=True)
        return [n for _, _, n in ordered[offset : offset + limit]]

    async def count_unread(self, user_id: UserId) -> int:
        return sum(1 for n in self._for_user(user_id) if not n.is_read)

    async def mark_read(self, user_id: UserId, notification_id: NotificationId) -> bool:
        notification = self._notifications.get(notification_id)
        if notification is None or notification.user_id != user_id:
            return False
        self._notifications[notification_id] = notification.model_copy(
            update={"is_read": True}
        )
        return True

    async def mark_all_read(self, user_id: UserId) -> int:
        unread = [n for n in self._for_user(user_id) if not n.is_read]
        for notification in unread:
            self._notifications[notification.id] = notification.model_copy(
                update={"is_read": True}
            )
        return len(unread)

    async def delete(self, user_id: UserId, notification_id: NotificationId) -> bool:
        notification = self._notifications.get(notification_id)
        if notification is None or notification.user_id != user_id:
            return False
        del self._notifications[notification_id]
        return True

    async def delete_for_user(self, user_id: UserId, read_only: bool = False) -> int:
        doomed = [
            n.id for n in self._for_user(user_id) if not read_only or n.is_read
        ]
        for notification_id in doomed:
            del self._notifications[notification_id]
        return len(doomed)
