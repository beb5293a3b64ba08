"""Watch list repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from marquee.domain.model.watch_list import WatchList
from marquee.domain.value import ListId, UserId


class WatchListRepository(ABC):
    """Repository for WatchList entity."""

    @abstractmethod
    async def find_by_id(
        self, list_id: ListId, for_update: bool = False
    ) -> Optional[WatchList]:
        """Find a list by ID.

        Args:
            list_id: The list's unique identifier
            for_update: Lock the row for the rest of the transaction

        Returns:
            The list if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_owned_by(self, owner_id: UserId) -> list[WatchList]:
        """Find the lists a user owns."""
        pass

    @abstractmethod
    async def find_by_ids(self, list_ids: list[ListId]) -> list[WatchList]:
        """Find several lists at once (batch query)."""
        pass

    @abstractmethod
    async def save(self, watch_list: WatchList) -> WatchList:
        """Save a list (create or update)."""
        pass

    @abstractmethod
    async def delete(self, list_id: ListId) -> bool:
        """Delete a list and its collaborator grants."""
        pass
