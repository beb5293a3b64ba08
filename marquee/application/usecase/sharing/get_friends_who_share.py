"""Get friends who share use case."""

from pydantic import BaseModel

from marquee.domain.service import AccessService
from marquee.domain.value import UserId


class SharingFriendItem(BaseModel):
    """Friend entry in response."""

    friend_id: int
    name: str
    username: str | None = None
    image: str | None = None
    shared_list_count: int
    is_partner: bool


class GetFriendsWhoShareRequest(BaseModel):
    """Get friends who share request."""

    user_id: int  # User ID from auth


class GetFriendsWhoShareResponse(BaseModel):
    """Get friends who share response."""

    friends: list[SharingFriendItem]
    total_count: int


class GetFriendsWhoShareUseCase:
    """Use case for listing friends the user shares lists with."""

    def __init__(self, access_service: AccessService) -> None:
        self.access_service = access_service

    async def execute(
        self, request: GetFriendsWhoShareRequest
    ) -> GetFriendsWhoShareResponse:
        result = await self.access_service.friends_who_share(UserId(request.user_id))
        return GetFriendsWhoShareResponse(
            friends=[
                SharingFriendItem(
                    friend_id=friend.friend_id,
                    name=friend.name,
                    username=friend.username,
                    image=friend.image,
                    shared_list_count=friend.shared_list_count,
                    is_partner=friend.is_partner,
                )
                for friend in result.friends
            ],
            total_count=result.total_count,
        )
