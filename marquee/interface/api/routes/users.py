"""User search routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from marquee.application.usecase.user import (
    SearchUsersRequest,
    SearchUsersResponse,
    SearchUsersUseCase,
)
from marquee.domain.service import JWTService
from marquee.interface.api.auth import require_user_id

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/search", response_model=SearchUsersResponse)
async def search_users(
    search_users_use_case: FromDishka[SearchUsersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    q: str = Query(default="", max_length=100),
    limit: int | None = Query(default=None, ge=1, le=50),
) -> SearchUsersResponse:
    """Find people to invite.

    Args:
        search_users_use_case: Search users use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie
        q: Username, name or exact email
        limit: Maximum number of results

    Example:
        GET /users/search?q=ali

        Response:
        {
            "users": [
                {"id": 42, "name": "Alice", "username": "alice", "is_connection": false}
            ]
        }
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await search_users_use_case.execute(
        SearchUsersRequest(caller_id=user_id, query=q, limit=limit)
    )
