"""In-memory watch list repository for testing."""

import asyncio
from typing import Optional

from marquee.domain.model import ListCollaborator, WatchList
from marquee.domain.repository import WatchListRepository
from marquee.domain.value import CollaboratorId, ListId, UserId

from .database import InMemoryDatabase


class InMemoryWatchListRepository(WatchListRepository):
    """In-memory implementation of WatchListRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self._lists: dict[ListId, WatchList] = database.table("watch_lists")
        self._collaborators: dict[CollaboratorId, ListCollaborator] = database.table(
            "list_collaborators"
        )

    async def find_by_id(
        self, list_id: ListId, for_update: bool = False
    ) -> Optional[WatchList]:
        await asyncio.sleep(0)
        return self._lists.get(list_id)

    async def find_owned_by(self, owner_id: UserId) -> list[WatchList]:
        lists = [wl for wl in self._lists.values() if wl.owner_id == owner_id]
        return sorted(lists, key=lambda wl: wl.created_at)

    async def find_by_ids(self, list_ids: list[ListId]) -> list[WatchList]:
        return [self._lists[lid] for lid in list_ids if lid in self._lists]

    async def save(self, watch_list: WatchList) -> WatchList:
        self._lists[watch_list.id] = watch_list
        return watch_list

    async def delete(self, list_id: ListId) -> bool:
        """Delete a list and its collaborator grants."""
        for grant_id in [
            g.id for g in self._collaborators.values() if g.list_id == list_id
        ]:
            del self._collaborators[grant_id]
        return self._lists.pop(list_id, None) is not None
