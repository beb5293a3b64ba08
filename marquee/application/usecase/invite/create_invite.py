"""Create invite use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from marquee.application.usecase.base import BaseUseCase
from marquee.application.usecase.invite.common import InviteItem, to_invite_item
from marquee.config import Settings
from marquee.domain.service import InviteService
from marquee.domain.value import InviteErrorKind, InviteKind, ListId, UserId


class CreateInviteRequest(BaseModel):
    """Create invite request."""

    inviter_id: int  # User ID from auth
    kind: InviteKind
    target_user_id: int | None = None
    target_list_id: UUID | None = None
    list_name: str | None = Field(default=None, max_length=100)
    message: str | None = Field(default=None, max_length=500)


class CreateInviteResponse(BaseModel):
    """Create invite response."""

    success: bool
    error: InviteErrorKind | None = None
    message: str | None = None
    invite: InviteItem | None = None


class CreateInviteUseCase(BaseUseCase):
    """Use case for sending a friend, partner or list invite."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        """Initialize create invite use case.

        Args:
            invite_service: Invite domain service
            settings: Application settings (for invite links)
        """
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Execute create invite flow.

        Args:
            request: Create invite request

        Returns:
            The created invite with its link, or the reason it was refused
        """
        with logfire.span(
            "create_invite.execute",
            inviter_id=request.inviter_id,
            kind=request.kind.value,
        ):
            outcome = await self.invite_service.create_invite(
                inviter_id=UserId(request.inviter_id),
                kind=request.kind,
                target_user_id=(
                    UserId(request.target_user_id)
                    if request.target_user_id is not None
                    else None
                ),
                target_list_id=(
                    ListId(request.target_list_id) if request.target_list_id else None
                ),
                list_name=request.list_name,
                message=request.message,
            )

            if not outcome.success or outcome.invite is None:
                return CreateInviteResponse(
                    success=False, error=outcome.error, message=outcome.message
                )

            return CreateInviteResponse(
                success=True,
                invite=to_invite_item(outcome.invite, self.settings.api.frontend_url),
            )
