"""Notification domain service."""

from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

import logfire

from marquee.domain.model import Notification, NotificationSummary
from marquee.domain.model.common import utc_now
from marquee.domain.repository import InviteRepository, NotificationRepository
from marquee.domain.service.alert import AlertPusher
from marquee.domain.value import NotificationId, NotificationType, UserId
from marquee.util.background import fire_and_forget

from .base import Service


class NotificationService(Service):
    """Domain service for the per-user notification feed.

    Sole writer of read/deleted state on notifications. Notifications are
    inserted by the invite and relationship services inside their own
    transactions, then handed to `dispatch` once those commit.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        invite_repository: InviteRepository,
        alert_pusher: AlertPusher,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            invite_repository: Invite repository (for pending counts)
            alert_pusher: Best-effort delivery of new notifications
            now: Clock for the pending-invite count, replaceable in tests
        """
        self.notification_repository = notification_repository
        self.invite_repository = invite_repository
        self.alert_pusher = alert_pusher
        self._now = now

    async def notify(
        self,
        user_id: UserId,
        type: NotificationType,
        title: str,
        message: Optional[str] = None,
        data: Optional[dict[str, Any]] = None,
    ) -> Notification:
        """Insert a notification for a user.

        Runs inside the caller's transaction, so the notification commits or
        rolls back together with the event that caused it.
        """
        notification = Notification(
            id=NotificationId(uuid4()),
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            data=data or {},
        )
        saved = await self.notification_repository.add(notification)
        logfire.info(
            "Notification created",
            notification_id=str(saved.id),
            user_id=user_id,
            type=type.value,
        )
        return saved

    def dispatch(self, notifications: list[Notification]) -> None:
        """Push committed notifications without waiting for delivery."""
        for notification in notifications:
            fire_and_forget(
                self.alert_pusher.push(notification),
                name=f"push-notification-{notification.id}",
            )

    async def list_notifications(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        with logfire.span(
            "notification_service.list_notifications",
            user_id=user_id,
            unread_only=unread_only,
        ):
            return await self.notification_repository.find_for_user(
                user_id, unread_only, limit, offset
            )

    async def unread_count(self, user_id: UserId) -> int:
        with logfire.span("notification_service.unread_count", user_id=user_id):
            return await self.notification_repository.count_unread(user_id)

    async def summary(self, user_id: UserId) -> NotificationSummary:
        """Unread notification count plus pending invites awaiting the user."""
        with logfire.span("notification_service.summary", user_id=user_id):
            unread = await self.notification_repository.count_unread(user_id)
            pending = await self.invite_repository.count_pending_for(user_id, self._now())
            return NotificationSummary(
                unread_count=unread, pending_invite_count=pending
            )

    async def mark_read(
        self, user_id: UserId, notification_id: NotificationId
    ) -> bool:
        with logfire.span(
            "notification_service.mark_read",
            user_id=user_id,
            notification_id=str(notification_id),
        ):
            return await self.notification_repository.mark_read(
                user_id, notification_id
            )

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every notification of the user read.

        Returns:
            Number of notifications that were unread
        """
        with logfire.span("notification_service.mark_all_read", user_id=user_id):
            count = await self.notification_repository.mark_all_read(user_id)
            logfire.info("Notifications marked read", user_id=user_id, count=count)
            return count

    async def clear(self, user_id: UserId, read_only: bool = False) -> int:
        """Delete the user's notifications.

        Args:
            user_id: Owner of the feed
            read_only: Only delete notifications already read

        Returns:
            Number of notifications deleted
        """
        with logfire.span(
            "notification_service.clear", user_id=user_id, read_only=read_only
        ):
            count = await self.notification_repository.delete_for_user(
                user_id, read_only
            )
            logfire.info(
                "Notifications cleared",
                user_id=user_id,
                read_only=read_only,
                count=count,
            )
            return count

    async def delete(self, user_id: UserId, notification_id: NotificationId) -> bool:
        with logfire.span(
            "notification_service.delete",
            user_id=user_id,
            notification_id=str(notification_id),
        ):
            return await self.notification_repository.delete(user_id, notification_id)
