"""Remove friend use case."""

from pydantic import BaseModel

from marquee.domain.service import RelationshipService
from marquee.domain.value import UserId


class RemoveFriendRequest(BaseModel):
    """Remove friend request."""

    user_id: int  # User ID from auth
    friend_id: int


class RemoveFriendResponse(BaseModel):
    """Remove friend response."""

    success: bool


class RemoveFriendUseCase:
    """Use case for ending a friendship."""

    def __init__(self, relationship_service: RelationshipService) -> None:
        self.relationship_service = relationship_service

    async def execute(self, request: RemoveFriendRequest) -> RemoveFriendResponse:
        """Execute remove friend flow.

        Raises:
            NotFoundError: If the users are not friends
        """
        await self.relationship_service.remove_friend(
            UserId(request.user_id), UserId(request.friend_id)
        )
        return RemoveFriendResponse(success=True)
