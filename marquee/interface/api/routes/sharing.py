"""Sharing routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from marquee.application.usecase.sharing import (
    GetFriendsWhoShareRequest,
    GetFriendsWhoShareResponse,
    GetFriendsWhoShareUseCase,
    GetSharedListKindsRequest,
    GetSharedListKindsResponse,
    GetSharedListKindsUseCase,
)
from marquee.domain.service import JWTService
from marquee.interface.api.auth import require_user_id

router = APIRouter(prefix="/sharing", tags=["sharing"], route_class=DishkaRoute)


@router.get("/list-kinds", response_model=GetSharedListKindsResponse)
async def get_shared_list_kinds(
    get_shared_list_kinds_use_case: FromDishka[GetSharedListKindsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetSharedListKindsResponse:
    """Kinds of lists (owned, collaborative, partner) the user can reach."""
    user_id = require_user_id(jwt_service, auth_token)
    return await get_shared_list_kinds_use_case.execute(
        GetSharedListKindsRequest(user_id=user_id)
    )


@router.get("/friends", response_model=GetFriendsWhoShareResponse)
async def get_friends_who_share(
    get_friends_who_share_use_case: FromDishka[GetFriendsWhoShareUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetFriendsWhoShareResponse:
    """Friends the user shares at least one list or a partnership with."""
    user_id = require_user_id(jwt_service, auth_token)
    return await get_friends_who_share_use_case.execute(
        GetFriendsWhoShareRequest(user_id=user_id)
    )
