"""Watch list entity."""

from datetime import datetime

from pydantic import Field

from marquee.domain.model.common import DomainModel, utc_now
from marquee.domain.value import ListId, UserId, WatchListType


class WatchList(DomainModel):
    """A list of titles owned by one user and optionally shared.

    The owner never appears as a collaborator on their own list.
    """

    id: ListId
    owner_id: UserId
    name: str = Field(min_length=1, max_length=100)
    type: WatchListType = WatchListType.CUSTOM
    is_shared: bool = False
    created_at: datetime = Field(default_factory=utc_now)
