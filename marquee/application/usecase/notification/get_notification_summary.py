"""Get notification summary use case."""

from pydantic import BaseModel

from marquee.domain.service import NotificationService
from marquee.domain.value import UserId


class GetNotificationSummaryRequest(BaseModel):
    """Get notification summary request."""

    user_id: int  # User ID from auth


class GetNotificationSummaryResponse(BaseModel):
    """Get notification summary response."""

    unread_count: int
    pending_invite_count: int
    total: int


class GetNotificationSummaryUseCase:
    """Use case for the combined badge: unread notifications plus pending invites."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: GetNotificationSummaryRequest
    ) -> GetNotificationSummaryResponse:
        summary = await self.notification_service.summary(UserId(request.user_id))
        return GetNotificationSummaryResponse(
            unread_count=summary.unread_count,
            pending_invite_count=summary.pending_invite_count,
            total=summary.unread_count + summary.pending_invite_count,
        )
