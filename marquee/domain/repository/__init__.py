"""Repository interfaces for the Marquee domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from marquee.domain.repository.invite import InviteRepository
from marquee.domain.repository.notification import NotificationRepository
from marquee.domain.repository.relationship import (
    FriendshipRepository,
    ListCollaboratorRepository,
    PartnershipRepository,
)
from marquee.domain.repository.unit_of_work import UnitOfWork
from marquee.domain.repository.user import UserRepository
from marquee.domain.repository.watch_list import WatchListRepository

__all__ = [
    "UserRepository",
    "InviteRepository",
    "FriendshipRepository",
    "PartnershipRepository",
    "ListCollaboratorRepository",
    "WatchListRepository",
    "NotificationRepository",
    "UnitOfWork",
]
