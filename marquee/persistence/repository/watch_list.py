"""PostgreSQL implementation of WatchList repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.domain.model import WatchList
from marquee.domain.repository import WatchListRepository
from marquee.domain.value import ListId, UserId
from marquee.persistence.mappers import row_to_watch_list, watch_list_to_dict
from marquee.persistence.tables import list_collaborators_table, watch_lists_table


class PostgresWatchListRepository(WatchListRepository):
    """PostgreSQL implementation of WatchListRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(
        self, list_id: ListId, for_update: bool = False
    ) -> Optional[WatchList]:
        stmt = select(watch_lists_table).where(watch_lists_table.c.id == list_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_watch_list(dict(row)) if row else None

    async def find_owned_by(self, owner_id: UserId) -> list[WatchList]:
        stmt = (
            select(watch_lists_table)
            .where(watch_lists_table.c.owner_id == owner_id)
            .order_by(watch_lists_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_watch_list(dict(row)) for row in result.mappings().all()]

    async def find_by_ids(self, list_ids: list[ListId]) -> list[WatchList]:
        """Find several lists at once (batch query)."""
        if not list_ids:
            return []

        stmt = select(watch_lists_table).where(watch_lists_table.c.id.in_(list_ids))
        result = await self.session.execute(stmt)
        return [row_to_watch_list(dict(row)) for row in result.mappings().all()]

    async def save(self, watch_list: WatchList) -> WatchList:
        """Save a list (create or update)."""
        list_dict = watch_list_to_dict(watch_list)
        stmt = pg_insert(watch_lists_table).values(**list_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[watch_lists_table.c.id],
            set_={
                "name": list_dict["name"],
                "type": list_dict["type"],
                "is_shared": list_dict["is_shared"],
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return watch_list

    async def delete(self, list_id: ListId) -> bool:
        """Delete a list and its collaborator grants."""
        await self.session.execute(
            delete(list_collaborators_table).where(
                list_collaborators_table.c.list_id == list_id
            )
        )
        result = await self.session.execute(
            delete(watch_lists_table).where(watch_lists_table.c.id == list_id)
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
