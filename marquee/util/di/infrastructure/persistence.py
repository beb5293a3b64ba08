"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from marquee.config import Settings
from marquee.domain.repository import (
    FriendshipRepository,
    InviteRepository,
    ListCollaboratorRepository,
    NotificationRepository,
    PartnershipRepository,
    UnitOfWork,
    UserRepository,
    WatchListRepository,
)
from marquee.persistence.database import create_engine, create_session_factory
from marquee.persistence.repository import (
    PostgresFriendshipRepository,
    PostgresInviteRepository,
    PostgresListCollaboratorRepository,
    PostgresNotificationRepository,
    PostgresPartnershipRepository,
    PostgresUserRepository,
    PostgresWatchListRepository,
)
from marquee.persistence.unit_of_work import PostgresUnitOfWork
from marquee.util.di.base import ProviderBase
from marquee.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the app shuts down."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Work left open by the request is committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide unit of work over the request session."""
        return PostgresUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, session: AsyncSession) -> InviteRepository:
        """Provide Invite repository."""
        return PostgresInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_friendship_repository(self, session: AsyncSession) -> FriendshipRepository:
        return PostgresFriendshipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_partnership_repository(
        self, session: AsyncSession
    ) -> PartnershipRepository:
        return PostgresPartnershipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_collaborator_repository(
        self, session: AsyncSession
    ) -> ListCollaboratorRepository:
        return PostgresListCollaboratorRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_watch_list_repository(self, session: AsyncSession) -> WatchListRepository:
        return PostgresWatchListRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        return PostgresNotificationRepository(session)
