"""Domain model entities for Marquee."""

from marquee.domain.model.invite import Invite
from marquee.domain.model.notification import Notification
from marquee.domain.model.relationship import (
    Friendship,
    ListCollaborator,
    Partnership,
    ordered_pair,
)
from marquee.domain.model.results import (
    FriendShare,
    FriendsWhoShare,
    InviteOutcome,
    NotificationSummary,
    RelationshipResult,
    UserSearchResult,
)
from marquee.domain.model.user import User
from marquee.domain.model.watch_list import WatchList

__all__ = [
    "User",
    "Invite",
    "Friendship",
    "Partnership",
    "WatchList",
    "ListCollaborator",
    "Notification",
    "ordered_pair",
    # Operation results
    "FriendShare",
    "FriendsWhoShare",
    "InviteOutcome",
    "NotificationSummary",
    "RelationshipResult",
    "UserSearchResult",
]
