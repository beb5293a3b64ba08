"""Domain value objects for Marquee."""

from marquee.domain.value.identifiers import (
    CollaboratorId,
    FriendshipId,
    InviteId,
    ListId,
    NotificationId,
    PartnershipId,
    UserId,
)
from marquee.domain.value.invite_ref import InviteRef
from marquee.domain.value.types import (
    AccessLevel,
    InviteCode,
    InviteErrorKind,
    InviteKind,
    InvitePolicy,
    InviteStatus,
    ListKind,
    NotificationType,
    WatchListType,
)

__all__ = [
    # Identifiers
    "UserId",
    "InviteId",
    "FriendshipId",
    "PartnershipId",
    "ListId",
    "CollaboratorId",
    "NotificationId",
    # Types
    "AccessLevel",
    "InviteCode",
    "InviteErrorKind",
    "InviteKind",
    "InvitePolicy",
    "InviteRef",
    "InviteStatus",
    "ListKind",
    "NotificationType",
    "WatchListType",
]
