"""Mock persistence providers for testing."""

from dishka import Scope, provide

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
from marquee.persistence.repository.inmemory import (
    InMemoryDatabase,
    InMemoryFriendshipRepository,
    InMemoryInviteRepository,
    InMemoryListCollaboratorRepository,
    InMemoryNotificationRepository,
    InMemoryPartnershipRepository,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
    InMemoryWatchListRepository,
)
from marquee.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The database is APP-scoped so that every request of one container sees
    the same data; each test builds its own container for isolation.
    Repositories are REQUEST-scoped like their PostgreSQL counterparts.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory store."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, database: InMemoryDatabase) -> UnitOfWork:
        return InMemoryUnitOfWork(database)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, database: InMemoryDatabase) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, database: InMemoryDatabase) -> InviteRepository:
        """Provide in-memory invite repository."""
        return InMemoryInviteRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_friendship_repository(
        self, database: InMemoryDatabase
    ) -> FriendshipRepository:
        return InMemoryFriendshipRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_partnership_repository(
        self, database: InMemoryDatabase
    ) -> PartnershipRepository:
        return InMemoryPartnershipRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_watch_list_repository(
        self, database: InMemoryDatabase
    ) -> WatchListRepository:
        return InMemoryWatchListRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_collaborator_repository(
        self, database: InMemoryDatabase
    ) -> ListCollaboratorRepository:
        return InMemoryListCollaboratorRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, database: InMemoryDatabase
    ) -> NotificationRepository:
        return InMemoryNotificationRepository(database)
