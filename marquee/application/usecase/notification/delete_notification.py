"""Delete notification use case."""

from uuid import UUID

from pydantic import BaseModel

from marquee.domain.error import NotFoundError
from marquee.domain.service import NotificationService
from marquee.domain.value import NotificationId, UserId


class DeleteNotificationRequest(BaseModel):
    """Delete notification request."""

    user_id: int  # User ID from auth
    notification_id: UUID


class DeleteNotificationResponse(BaseModel):
    """Delete notification response."""

    success: bool


class DeleteNotificationUseCase:
    """Use case for deleting one notification."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: DeleteNotificationRequest
    ) -> DeleteNotificationResponse:
        """Delete a notification.

        Raises:
            NotFoundError: If the user has no such notification
        """
        deleted = await self.notification_service.delete(
            UserId(request.user_id), NotificationId(request.notification_id)
        )
        if not deleted:
            raise NotFoundError("Notification", str(request.notification_id))
        return DeleteNotificationResponse(success=True)
