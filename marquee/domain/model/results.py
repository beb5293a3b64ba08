"""Results returned by domain operations."""

from typing import Optional

from marquee.domain.model.common import DomainModel
from marquee.domain.model.invite import Invite
from marquee.domain.value import (
    CollaboratorId,
    FriendshipId,
    InviteErrorKind,
    InviteKind,
    ListId,
    PartnershipId,
    UserId,
)


class RelationshipResult(DomainModel):
    """Durable relationship produced by accepting an invite."""

    kind: InviteKind
    friendship_id: Optional[FriendshipId] = None
    partnership_id: Optional[PartnershipId] = None
    collaborator_id: Optional[CollaboratorId] = None
    list_id: Optional[ListId] = None
    list_name: Optional[str] = None
    created: bool = True  # False when an existing relationship was returned


class InviteOutcome(DomainModel):
    """Result of an invite lifecycle operation.

    Expected failures are reported through `error` rather than raised.
    """

    success: bool
    error: Optional[InviteErrorKind] = None
    message: Optional[str] = None
    invite: Optional[Invite] = None
    relationship: Optional[RelationshipResult] = None

    @classmethod
    def ok(
        cls, invite: Invite, relationship: Optional[RelationshipResult] = None
    ) -> "InviteOutcome":
        return cls(success=True, invite=invite, relationship=relationship)

    @classmethod
    def failed(cls, error: InviteErrorKind, message: str) -> "InviteOutcome":
        return cls(success=False, error=error, message=message)


class FriendShare(DomainModel):
    """A friend with at least one active sharing grant with the user."""

    friend_id: UserId
    name: str
    username: Optional[str] = None
    image: Optional[str] = None
    shared_list_count: int
    is_partner: bool = False


class FriendsWhoShare(DomainModel):
    friends: list[FriendShare]
    total_count: int


class UserSearchResult(DomainModel):
    id: UserId
    name: str
    username: Optional[str] = None
    is_connection: bool = False


class NotificationSummary(DomainModel):
    unread_count: int
    pending_invite_count: int
