"""Mark all notifications read use case."""

from pydantic import BaseModel

from marquee.domain.service import NotificationService
from marquee.domain.value import UserId


class MarkAllNotificationsReadRequest(BaseModel):
    """Mark all notifications read request."""

    user_id: int  # User ID from auth


class MarkAllNotificationsReadResponse(BaseModel):
    """Mark all notifications read response."""

    updated: int


class MarkAllNotificationsReadUseCase:
    """Use case for marking the whole feed read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkAllNotificationsReadRequest
    ) -> MarkAllNotificationsReadResponse:
        updated = await self.notification_service.mark_all_read(UserId(request.user_id))
        return MarkAllNotificationsReadResponse(updated=updated)
