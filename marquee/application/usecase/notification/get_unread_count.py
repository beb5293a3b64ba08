"""Get unread notification count use case."""

from pydantic import BaseModel

from marquee.domain.service import NotificationService
from marquee.domain.value import UserId


class GetUnreadCountRequest(BaseModel):
    """Get unread count request."""

    user_id: int  # User ID from auth


class GetUnreadCountResponse(BaseModel):
    """Get unread count response."""

    count: int


class GetUnreadCountUseCase:
    """Use case for the notification badge count."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: GetUnreadCountRequest) -> GetUnreadCountResponse:
        count = await self.notification_service.unread_count(UserId(request.user_id))
        return GetUnreadCountResponse(count=count)
