"""Accept invite use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, ValidationError

from marquee.application.usecase.base import BaseUseCase
from marquee.application.usecase.invite.common import (
    InviteItem,
    RelationshipItem,
    to_invite_item,
    to_relationship_item,
)
from marquee.config import Settings
from marquee.domain.service import InviteService
from marquee.domain.value import (
    InviteCode,
    InviteErrorKind,
    InviteId,
    InviteKind,
    InviteRef,
    UserId,
)


class AcceptInviteRequest(BaseModel):
    """Accept invite request.

    Carries either an invite ID (from the pending list) or the kind and
    code of an invite link.
    """

    actor_id: int  # User ID from auth
    invite_id: UUID | None = None
    kind: InviteKind | None = None
    code: str | None = None


class AcceptInviteResponse(BaseModel):
    """Accept invite response."""

    success: bool
    error: InviteErrorKind | None = None
    message: str | None = None
    invite: InviteItem | None = None
    relationship: RelationshipItem | None = None


class AcceptInviteUseCase(BaseUseCase):
    """Use case for accepting an invite."""

    def __init__(self, invite_service: InviteService, settings: Settings) -> None:
        self.invite_service = invite_service
        self.settings = settings

    async def execute(self, request: AcceptInviteRequest) -> AcceptInviteResponse:
        """Execute accept invite flow.

        A malformed code is reported as a validation error without touching
        the store.
        """
        with logfire.span("accept_invite.execute", actor_id=request.actor_id):
            try:
                if request.invite_id is not None:
                    ref = InviteRef.by_id(InviteId(request.invite_id))
                else:
                    ref = InviteRef.by_code(
                        request.kind, InviteCode(root=request.code or "")
                    )
            except ValidationError:
                logfire.info("Malformed invite reference", actor_id=request.actor_id)
                return AcceptInviteResponse(
                    success=False,
                    error=InviteErrorKind.VALIDATION_ERROR,
                    message="Invalid invite reference",
                )

            outcome = await self.invite_service.accept_invite(
                UserId(request.actor_id), ref
            )
            if not outcome.success or outcome.invite is None:
                return AcceptInviteResponse(
                    success=False, error=outcome.error, message=outcome.message
                )

            return AcceptInviteResponse(
                success=True,
                invite=to_invite_item(outcome.invite, self.settings.api.frontend_url),
                relationship=(
                    to_relationship_item(outcome.relationship)
                    if outcome.relationship
                    else None
                ),
            )
