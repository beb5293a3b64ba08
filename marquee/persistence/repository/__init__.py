"""PostgreSQL repository implementations."""

from marquee.persistence.repository.invite import PostgresInviteRepository
from marquee.persistence.repository.notification import PostgresNotificationRepository
from marquee.persistence.repository.relationship import (
    PostgresFriendshipRepository,
    PostgresListCollaboratorRepository,
    PostgresPartnershipRepository,
)
from marquee.persistence.repository.user import PostgresUserRepository
from marquee.persistence.repository.watch_list import PostgresWatchListRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresInviteRepository",
    "PostgresFriendshipRepository",
    "PostgresPartnershipRepository",
    "PostgresListCollaboratorRepository",
    "PostgresWatchListRepository",
    "PostgresNotificationRepository",
]
