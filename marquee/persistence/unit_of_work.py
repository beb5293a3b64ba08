"""PostgreSQL unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.domain.error import StoreError
from marquee.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Transaction boundary over the request's SQLAlchemy session.

    The outermost block opens a transaction; blocks opened while one is
    already active (including the session's autobegun transaction) become
    savepoints, so an inner failure only undoes the inner block.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self.session.in_transaction():
            context = self.session.begin_nested()
        else:
            context = self.session.begin()

        try:
            async with context:
                yield
        except SQLAlchemyError as e:
            logfire.error(
                "Transaction rolled back after store failure",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StoreError(f"Store operation failed: {type(e).__name__}") from e
