"""In-memory repository implementations for testing."""

from .database import InMemoryDatabase, InMemoryUnitOfWork
from .invite import InMemoryInviteRepository
from .notification import InMemoryNotificationRepository
from .relationship import (
    InMemoryFriendshipRepository,
    InMemoryListCollaboratorRepository,
    InMemoryPartnershipRepository,
)
from .user import InMemoryUserRepository
from .watch_list import InMemoryWatchListRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryUnitOfWork",
    "InMemoryFriendshipRepository",
    "InMemoryInviteRepository",
    "InMemoryListCollaboratorRepository",
    "InMemoryNotificationRepository",
    "InMemoryPartnershipRepository",
    "InMemoryUserRepository",
    "InMemoryWatchListRepository",
]
