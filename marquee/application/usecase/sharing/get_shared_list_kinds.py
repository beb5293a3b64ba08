"""Get shared list kinds use case."""

from pydantic import BaseModel

from marquee.domain.service import AccessService
from marquee.domain.value import ListKind, UserId


class GetSharedListKindsRequest(BaseModel):
    """Get shared list kinds request."""

    user_id: int  # User ID from auth


class GetSharedListKindsResponse(BaseModel):
    """Get shared list kinds response."""

    kinds: list[ListKind]


class GetSharedListKindsUseCase:
    """Use case for deciding which list sections the user sees."""

    def __init__(self, access_service: AccessService) -> None:
        self.access_service = access_service

    async def execute(
        self, request: GetSharedListKindsRequest
    ) -> GetSharedListKindsResponse:
        kinds = await self.access_service.shared_list_kinds(UserId(request.user_id))
        return GetSharedListKindsResponse(kinds=kinds)
