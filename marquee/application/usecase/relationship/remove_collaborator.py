"""Remove collaborator use case."""

from uuid import UUID

from pydantic import BaseModel

from marquee.domain.service import RelationshipService
from marquee.domain.value import ListId, UserId


class RemoveCollaboratorRequest(BaseModel):
    """Remove collaborator request."""

    actor_id: int  # User ID from auth
    list_id: UUID
    user_id: int  # Collaborator to remove (the actor when leaving a list)


class RemoveCollaboratorResponse(BaseModel):
    """Remove collaborator response."""

    success: bool


class RemoveCollaboratorUseCase:
    """Use case for removing a collaborator from a list, or leaving one."""

    def __init__(self, relationship_service: RelationshipService) -> None:
        self.relationship_service = relationship_service

    async def execute(
        self, request: RemoveCollaboratorRequest
    ) -> RemoveCollaboratorResponse:
        """Execute remove collaborator flow.

        Raises:
            NotFoundError: If the list or the grant does not exist
            NotAuthorizedError: If the actor may not remove this collaborator
        """
        await self.relationship_service.remove_collaborator(
            UserId(request.actor_id), ListId(request.list_id), UserId(request.user_id)
        )
        return RemoveCollaboratorResponse(success=True)
