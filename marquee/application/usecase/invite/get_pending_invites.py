"""Get pending invites use case."""

from pydantic import BaseModel, Field

from marquee.application.usecase.invite.common import InviteItem, to_invite_item
from marquee.config import Settings
from marquee.domain.repository import UserRepository
from marquee.domain.service import InviteService
from marquee.domain.value import UserId


class GetPendingInvitesRequest(BaseModel):
    """Get pending invites request."""

    user_id: int  # User ID from auth
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class GetPendingInvitesResponse(BaseModel):
    """Get pending invites response."""

    invites: list[InviteItem]
    total: int


class GetPendingInvitesUseCase:
    """Use case for listing invites waiting for the user's answer."""

    def __init__(
        self,
        invite_service: InviteService,
        user_repository: UserRepository,
        settings: Settings,
    ) -> None:
        """Initialize get pending invites use case.

        Args:
            invite_service: Invite domain service
            user_repository: User repository (inviter names)
            settings: Application settings
        """
        self.invite_service = invite_service
        self.user_repository = user_repository
        self.settings = settings

    async def execute(
        self, request: GetPendingInvitesRequest
    ) -> GetPendingInvitesResponse:
        """List live direct invites addressed to the user, with inviter names."""
        invites = await self.invite_service.list_pending(
            UserId(request.user_id), limit=request.limit, offset=request.offset
        )

        # Batch fetch inviters
        inviters = {
            user.id: user
            for user in await self.user_repository.find_by_ids(
                list({invite.inviter_id for invite in invites})
            )
        }

        frontend_url = self.settings.api.frontend_url
        items = [
            to_invite_item(invite, frontend_url, inviters.get(invite.inviter_id))
            for invite in invites
        ]
        return GetPendingInvitesResponse(invites=items, total=len(items))
