"""Shared in-memory store and unit of work for testing."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional

from marquee.domain.repository import UnitOfWork

TABLES = (
    "users",
    "invites",
    "friendships",
    "partnerships",
    "watch_lists",
    "list_collaborators",
    "notifications",
)


class InMemoryDatabase:
    """Dict-backed tables shared by the in-memory repositories.

    Rows are immutable domain models keyed by ID, so a shallow copy of each
    table is a complete snapshot.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[Any, Any]] = {name: {} for name in TABLES}
        self.lock = asyncio.Lock()
        self.owner: Optional[asyncio.Task[Any]] = None

    def table(self, name: str) -> dict[Any, Any]:
        return self.tables[name]

    def snapshot(self) -> dict[str, dict[Any, Any]]:
        return {name: dict(rows) for name, rows in self.tables.items()}

    def restore(self, snapshot: dict[str, dict[Any, Any]]) -> None:
        for name, rows in snapshot.items():
            self.tables[name].clear()
            self.tables[name].update(rows)


class InMemoryUnitOfWork(UnitOfWork):
    """Serializes transactions with a lock and undoes them on failure.

    The lock is reentrant for the task that holds it, so nested blocks act
    like savepoints: an inner failure restores the state at the inner block's
    start.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        task = asyncio.current_task()
        if self.database.owner is not None and self.database.owner is task:
            async with self._rollback_on_error():
                yield
            return

        async with self.database.lock:
            self.database.owner = task
            try:
                async with self._rollback_on_error():
                    yield
            finally:
                self.database.owner = None

    @asynccontextmanager
    async def _rollback_on_error(self) -> AsyncIterator[None]:
        snapshot = self.database.snapshot()
        try:
            yield
        except BaseException:
            self.database.restore(snapshot)
            raise
