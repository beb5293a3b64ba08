"""End partnership use case."""

from pydantic import BaseModel

from marquee.domain.service import RelationshipService
from marquee.domain.value import UserId


class EndPartnershipRequest(BaseModel):
    """End partnership request."""

    user_id: int  # User ID from auth


class EndPartnershipResponse(BaseModel):
    """End partnership response."""

    success: bool


class EndPartnershipUseCase:
    """Use case for ending the user's partnership and its shared list."""

    def __init__(self, relationship_service: RelationshipService) -> None:
        self.relationship_service = relationship_service

    async def execute(self, request: EndPartnershipRequest) -> EndPartnershipResponse:
        """Execute end partnership flow.

        Raises:
            NotFoundError: If the user has no partner
        """
        await self.relationship_service.end_partnership(UserId(request.user_id))
        return EndPartnershipResponse(success=True)
