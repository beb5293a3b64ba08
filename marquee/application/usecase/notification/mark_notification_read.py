"""Mark notification read use case."""

from uuid import UUID

from pydantic import BaseModel

from marquee.domain.error import NotFoundError
from marquee.domain.service import NotificationService
from marquee.domain.value import NotificationId, UserId


class MarkNotificationReadRequest(BaseModel):
    """Mark notification read request."""

    user_id: int  # User ID from auth
    notification_id: UUID


class MarkNotificationReadResponse(BaseModel):
    """Mark notification read response."""

    success: bool


class MarkNotificationReadUseCase:
    """Use case for marking one notification read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkNotificationReadRequest
    ) -> MarkNotificationReadResponse:
        """Mark a notification read.

        Raises:
            NotFoundError: If the user has no such notification
        """
        found = await self.notification_service.mark_read(
            UserId(request.user_id), NotificationId(request.notification_id)
        )
        if not found:
            raise NotFoundError("Notification", str(request.notification_id))
        return MarkNotificationReadResponse(success=True)
