"""Clear notifications use case."""

from pydantic import BaseModel

from marquee.domain.service import NotificationService
from marquee.domain.value import UserId


class ClearNotificationsRequest(BaseModel):
    """Clear notifications request."""

    user_id: int  # User ID from auth
    read_only: bool = False  # Only delete notifications already read


class ClearNotificationsResponse(BaseModel):
    """Clear notifications response."""

    deleted: int


class ClearNotificationsUseCase:
    """Use case for emptying the notification feed."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: ClearNotificationsRequest
    ) -> ClearNotificationsResponse:
        deleted = await self.notification_service.clear(
            UserId(request.user_id), read_only=request.read_only
        )
        return ClearNotificationsResponse(deleted=deleted)
