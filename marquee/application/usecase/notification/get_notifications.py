"""Get notifications use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from marquee.domain.service import NotificationService
from marquee.domain.value import NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification item in response."""

    notification_id: str
    type: NotificationType
    title: str
    message: str | None = None
    data: dict[str, Any]
    is_read: bool
    created_at: datetime


class GetNotificationsRequest(BaseModel):
    """Get notifications request."""

    user_id: int  # User ID from auth
    unread_only: bool = False
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class GetNotificationsResponse(BaseModel):
    """Get notifications response."""

    notifications: list[NotificationItem]
    unread_count: int


class GetNotificationsUseCase:
    """Use case for reading the user's notification feed."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: GetNotificationsRequest) -> GetNotificationsResponse:
        user_id = UserId(request.user_id)
        notifications = await self.notification_service.list_notifications(
            user_id,
            unread_only=request.unread_only,
            limit=request.limit,
            offset=request.offset,
        )
        unread_count = await self.notification_service.unread_count(user_id)

        return GetNotificationsResponse(
            notifications=[
                NotificationItem(
                    notification_id=str(n.id),
                    type=n.type,
                    title=n.title,
                    message=n.message,
                    data=n.data,
                    is_read=n.is_read,
                    created_at=n.created_at,
                )
                for n in notifications
            ],
            unread_count=unread_count,
        )
