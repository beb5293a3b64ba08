"""Relationship revocation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from marquee.application.usecase.relationship import (
    EndPartnershipRequest,
    EndPartnershipResponse,
    EndPartnershipUseCase,
    RemoveCollaboratorRequest,
    RemoveCollaboratorResponse,
    RemoveCollaboratorUseCase,
    RemoveFriendRequest,
    RemoveFriendResponse,
    RemoveFriendUseCase,
)
from marquee.domain.service import JWTService
from marquee.interface.api.auth import require_user_id

router = APIRouter(tags=["relationships"], route_class=DishkaRoute)


@router.delete("/friends/{friend_id}", response_model=RemoveFriendResponse)
async def remove_friend(
    friend_id: int,
    remove_friend_use_case: FromDishka[RemoveFriendUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemoveFriendResponse:
    """Unfriend a user.

    Raises:
        HTTPException: If not authenticated
        NotFoundError: If the users are not friends (404)
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await remove_friend_use_case.execute(
        RemoveFriendRequest(user_id=user_id, friend_id=friend_id)
    )


@router.delete("/partners", response_model=EndPartnershipResponse)
async def end_partnership(
    end_partnership_use_case: FromDishka[EndPartnershipUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> EndPartnershipResponse:
    """End the current user's partnership and delete the shared list."""
    user_id = require_user_id(jwt_service, auth_token)
    return await end_partnership_use_case.execute(EndPartnershipRequest(user_id=user_id))


@router.delete(
    "/lists/{list_id}/collaborators/{collaborator_id}",
    response_model=RemoveCollaboratorResponse,
)
async def remove_collaborator(
    list_id: UUID,
    collaborator_id: int,
    remove_collaborator_use_case: FromDishka[RemoveCollaboratorUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemoveCollaboratorResponse:
    """Remove a collaborator from a list, or leave it.

    The list owner may remove anyone; a collaborator may only remove
    themselves.
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await remove_collaborator_use_case.execute(
        RemoveCollaboratorRequest(
            actor_id=user_id, list_id=list_id, user_id=collaborator_id
        )
    )
