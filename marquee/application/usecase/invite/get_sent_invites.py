"""Get sent invites use case."""

from pydantic import BaseModel, Field

from marquee.application.usecase.invite.common import InviteItem, to_invite_item
from marquee.config import Settings
from marquee.domain.service import InviteService
from marquee.domain.value import InviteStatus, UserId


class GetSentInvitesRequest(BaseModel):
    """Get sent invites request."""

    inviter_id: int  # User ID from auth
    status: InviteStatus | None = None
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class GetSentInvitesResponse(BaseModel):
    """Get sent invites response."""

    invites: list[InviteItem]
    total: int


class GetSentInvitesUseCase:
    """Use case for listing invites created by a user."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: GetSentInvitesRequest) -> GetSentInvitesResponse:
        invites = await self.invite_service.list_sent(
            UserId(request.inviter_id),
            status=request.status,
            limit=request.limit,
            offset=request.offset,
        )
        frontend_url = self.settings.api.frontend_url
        items = [to_invite_item(invite, frontend_url) for invite in invites]
        return GetSentInvitesResponse(invites=items, total=len(items))
