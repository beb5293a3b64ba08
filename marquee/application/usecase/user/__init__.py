"""User use cases."""

from marquee.application.usecase.user.search_users import (
    SearchUsersRequest,
    SearchUsersResponse,
    SearchUsersUseCase,
    UserSearchItem,
)

__all__ = [
    "SearchUsersRequest",
    "SearchUsersResponse",
    "SearchUsersUseCase",
    "UserSearchItem",
]
