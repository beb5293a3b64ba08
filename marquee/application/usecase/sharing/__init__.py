"""Sharing use cases."""

from marquee.application.usecase.sharing.get_friends_who_share import (
    GetFriendsWhoShareRequest,
    GetFriendsWhoShareResponse,
    GetFriendsWhoShareUseCase,
    SharingFriendItem,
)
from marquee.application.usecase.sharing.get_shared_list_kinds import (
    GetSharedListKindsRequest,
    GetSharedListKindsResponse,
    GetSharedListKindsUseCase,
)

__all__ = [
    "GetFriendsWhoShareRequest",
    "GetFriendsWhoShareResponse",
    "GetFriendsWhoShareUseCase",
    "GetSharedListKindsRequest",
    "GetSharedListKindsResponse",
    "GetSharedListKindsUseCase",
    "SharingFriendItem",
]
