"""Notification repository interface."""

from abc import ABC, abstractmethod

from marquee.domain.model.notification import Notification
from marquee.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification feed entries."""

    @abstractmethod
    async def add(self, notification: Notification) -> Notification:
        """Insert a notification."""
        pass

    @abstractmethod
    async def find_for_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        """Find a user's notifications, newest first."""
        pass

    @abstractmethod
    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        pass

    @abstractmethod
    async def mark_read(self, user_id: UserId, notification_id: NotificationId) -> bool:
        """Mark one of the user's notifications read.

        Returns:
            True if the notification exists and belongs to the user
        """
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every unread notification of a user read.

        Returns:
            Number of notifications changed
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId, notification_id: NotificationId) -> bool:
        """Delete one of the user's notifications."""
        pass

    @abstractmethod
    async def delete_for_user(self, user_id: UserId, read_only: bool = False) -> int:
        """Delete a user's notifications, or only the read ones.

        Returns:
            Number of notifications deleted
        """
        pass
