"""Invite routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from marquee.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
    CancelInviteRequest,
    CancelInviteResponse,
    CancelInviteUseCase,
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    DeclineInviteRequest,
    DeclineInviteResponse,
    DeclineInviteUseCase,
    GetInviteRequest,
    GetInviteResponse,
    GetInviteUseCase,
    GetPendingInvitesRequest,
    GetPendingInvitesResponse,
    GetPendingInvitesUseCase,
    GetSentInvitesRequest,
    GetSentInvitesResponse,
    GetSentInvitesUseCase,
)
from marquee.domain.service import JWTService
from marquee.domain.value import InviteErrorKind, InviteKind, InviteStatus
from marquee.interface.api.auth import require_user_id
from marquee.interface.api.errors import invite_result

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class CreateInviteAPIRequest(BaseModel):
    """API request for creating an invite."""

    kind: InviteKind
    target_user_id: int | None = None
    target_list_id: UUID | None = None
    list_name: str | None = Field(default=None, max_length=100)
    message: str | None = Field(default=None, max_length=500)


@router.post(
    "/", response_model=CreateInviteResponse, status_code=status.HTTP_201_CREATED
)
async def create_invite(
    request: CreateInviteAPIRequest,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInviteResponse | JSONResponse:
    """Send a friend, partner or list invite.

    Direct invites name a target user. A `list_code` invite has no target
    and is shared as a link instead.

    Raises:
        HTTPException: If not authenticated
    """
    user_id = require_user_id(jwt_service, auth_token)

    response = await create_invite_use_case.execute(
        CreateInviteRequest(
            inviter_id=user_id,
            kind=request.kind,
            target_user_id=request.target_user_id,
            target_list_id=request.target_list_id,
            list_name=request.list_name,
            message=request.message,
        )
    )
    return invite_result(
        response, response.error, success_status=status.HTTP_201_CREATED
    )


@router.get("/sent", response_model=GetSentInvitesResponse)
async def get_sent_invites(
    get_sent_invites_use_case: FromDishka[GetSentInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    status_filter: InviteStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> GetSentInvitesResponse:
    """Get invites created by the current user.

    Args:
        get_sent_invites_use_case: Get sent invites use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        status_filter: Optional status filter
        limit: Maximum number of results (1-100)
        offset: Number of results to skip

    Raises:
        HTTPException: If not authenticated
    """
    user_id = require_user_id(jwt_service, auth_token)

    return await get_sent_invites_use_case.execute(
        GetSentInvitesRequest(
            inviter_id=user_id, status=status_filter, limit=limit, offset=offset
        )
    )


@router.get("/pending", response_model=GetPendingInvitesResponse)
async def get_pending_invites(
    get_pending_invites_use_case: FromDishka[GetPendingInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> GetPendingInvitesResponse:
    """Get invites waiting for the current user's answer."""
    user_id = require_user_id(jwt_service, auth_token)

    return await get_pending_invites_use_case.execute(
        GetPendingInvitesRequest(user_id=user_id, limit=limit, offset=offset)
    )


@router.get("/{kind}/code/{code}", response_model=GetInviteResponse)
async def get_invite(
    kind: InviteKind,
    code: str,
    get_invite_use_case: FromDishka[GetInviteUseCase],
) -> GetInviteResponse | JSONResponse:
    """Preview an invite link.

    Public, so the landing page can show who sent the invite before the
    recipient signs in. An invite that was already answered is returned with
    `valid` false.
    """
    response = await get_invite_use_case.execute(GetInviteRequest(kind=kind, code=code))
    if response.error is InviteErrorKind.ALREADY_RESOLVED:
        return response
    return invite_result(response, response.error)


@router.post("/{kind}/code/{code}/accept", response_model=AcceptInviteResponse)
async def accept_invite_by_code(
    kind: InviteKind,
    code: str,
    accept_invite_use_case: FromDishka[AcceptInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptInviteResponse | JSONResponse:
    """Accept an invite link."""
    user_id = require_user_id(jwt_service, auth_token)

    response = await accept_invite_use_case.execute(
        AcceptInviteRequest(actor_id=user_id, kind=kind, code=code)
    )
    return invite_result(response, response.error)


@router.post("/{invite_id}/accept", response_model=AcceptInviteResponse)
async def accept_invite(
    invite_id: UUID,
    accept_invite_use_case: FromDishka[AcceptInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptInviteResponse | JSONResponse:
    """Accept a direct invite from the pending list."""
    user_id = require_user_id(jwt_service, auth_token)

    response = await accept_invite_use_case.execute(
        AcceptInviteRequest(actor_id=user_id, invite_id=invite_id)
    )
    return invite_result(response, response.error)


@router.post("/{invite_id}/decline", response_model=DeclineInviteResponse)
async def decline_invite(
    invite_id: UUID,
    decline_invite_use_case: FromDishka[DeclineInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeclineInviteResponse | JSONResponse:
    """Decline a direct invite."""
    user_id = require_user_id(jwt_service, auth_token)

    response = await decline_invite_use_case.execute(
        DeclineInviteRequest(actor_id=user_id, invite_id=invite_id)
    )
    return invite_result(response, response.error)


@router.post("/{invite_id}/cancel", response_model=CancelInviteResponse)
async def cancel_invite(
    invite_id: UUID,
    cancel_invite_use_case: FromDishka[CancelInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CancelInviteResponse | JSONResponse:
    """Withdraw an invite the current user sent."""
    user_id = require_user_id(jwt_service, auth_token)

    response = await cancel_invite_use_case.execute(
        CancelInviteRequest(actor_id=user_id, invite_id=invite_id)
    )
    return invite_result(response, response.error)
