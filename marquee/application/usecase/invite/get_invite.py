"""Get invite (link preview) use case."""

import logfire
from pydantic import BaseModel, ValidationError

from marquee.application.usecase.invite.common import InviteItem, to_invite_item
from marquee.config import Settings
from marquee.domain.repository import UserRepository
from marquee.domain.service import InviteService
from marquee.domain.value import InviteCode, InviteErrorKind, InviteKind, InviteRef


class GetInviteRequest(BaseModel):
    """Get invite request."""

    kind: InviteKind
    code: str


class GetInviteResponse(BaseModel):
    """Get invite response.

    `valid` is true only while the invite can still be accepted.
    """

    valid: bool
    error: InviteErrorKind | None = None
    message: str | None = None
    invite: InviteItem | None = None


class GetInviteUseCase:
    """Use case for previewing an invite link before accepting it.

    Lets the frontend show who sent the invite and whether it is still
    usable.
    """

    def __init__(
        self,
        invite_service: InviteService,
        user_repository: UserRepository,
        settings: Settings,
    ) -> None:
        """Initialize get invite use case.

        Args:
            invite_service: Invite domain service
            user_repository: User repository (inviter name)
            settings: Application settings
        """
        self.invite_service = invite_service
        self.user_repository = user_repository
        self.settings = settings

    async def execute(self, request: GetInviteRequest) -> GetInviteResponse:
        """Look up an invite by kind and code."""
        try:
            code = InviteCode(root=request.code)
        except ValidationError:
            return GetInviteResponse(
                valid=False,
                error=InviteErrorKind.VALIDATION_ERROR,
                message="Invalid invite code",
            )

        with logfire.span(
            "get_invite.execute", kind=request.kind.value, code=code.masked()
        ):
            outcome = await self.invite_service.get_invite(
                InviteRef.by_code(request.kind, code)
            )
            if not outcome.success or outcome.invite is None:
                return GetInviteResponse(
                    valid=False, error=outcome.error, message=outcome.message
                )

            invite = outcome.invite
            inviter = await self.user_repository.find_by_id(invite.inviter_id)
            item = to_invite_item(invite, self.settings.api.frontend_url, inviter)
            if not invite.is_pending:
                return GetInviteResponse(
                    valid=False,
                    error=InviteErrorKind.ALREADY_RESOLVED,
                    message=f"Invite has already been {invite.status.value}",
                    invite=item,
                )
            return GetInviteResponse(valid=True, invite=item)
