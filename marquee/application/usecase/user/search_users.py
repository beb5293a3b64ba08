"""Search users use case."""

import logfire
from pydantic import BaseModel, Field

from marquee.domain.service import AccessService
from marquee.domain.value import UserId


class UserSearchItem(BaseModel):
    """User entry in search results."""

    id: int
    name: str
    username: str | None = None
    is_connection: bool


class SearchUsersRequest(BaseModel):
    """Search users request."""

    caller_id: int  # User ID from auth
    query: str = Field(default="", max_length=100)
    limit: int | None = Field(default=None, ge=1, le=50)


class SearchUsersResponse(BaseModel):
    """Search users response."""

    users: list[UserSearchItem]


class SearchUsersUseCase:
    """Use case for finding users to invite."""

    def __init__(self, access_service: AccessService) -> None:
        self.access_service = access_service

    async def execute(self, request: SearchUsersRequest) -> SearchUsersResponse:
        with logfire.span("search_users.execute", caller_id=request.caller_id):
            results = await self.access_service.search_users(
                UserId(request.caller_id), request.query, request.limit
            )
            return SearchUsersResponse(
                users=[
                    UserSearchItem(
                        id=result.id,
                        name=result.name,
                        username=result.username,
                        is_connection=result.is_connection,
                    )
                    for result in results
                ]
            )
