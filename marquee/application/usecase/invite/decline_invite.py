"""Decline invite use case."""

from uuid import UUID

from pydantic import BaseModel

from marquee.application.usecase.invite.common import InviteItem, to_invite_item
from marquee.config import Settings
from marquee.domain.service import InviteService
from marquee.domain.value import InviteErrorKind, InviteId, UserId


class DeclineInviteRequest(BaseModel):
    """Decline invite request."""

    actor_id: int  # User ID from auth
    invite_id: UUID


class DeclineInviteResponse(BaseModel):
    """Decline invite response."""

    success: bool
    error: InviteErrorKind | None = None
    message: str | None = None
    invite: InviteItem | None = None


class DeclineInviteUseCase:
    """Use case for declining an invite addressed to the user."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: DeclineInviteRequest) -> DeclineInviteResponse:
        outcome = await self.invite_service.decline_invite(
            UserId(request.actor_id), InviteId(request.invite_id)
        )
        if not outcome.success or outcome.invite is None:
            return DeclineInviteResponse(
                success=False, error=outcome.error, message=outcome.message
            )
        return DeclineInviteResponse(
            success=True,
            invite=to_invite_item(outcome.invite, self.settings.api.frontend_url),
        )
