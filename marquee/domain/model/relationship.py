"""Durable relationships created by accepting invites."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from marquee.domain.model.common import DomainModel, utc_now
from marquee.domain.value import (
    AccessLevel,
    CollaboratorId,
    FriendshipId,
    InviteId,
    ListId,
    PartnershipId,
    UserId,
)


def ordered_pair(a: UserId, b: UserId) -> tuple[UserId, UserId]:
    """Return an unordered user pair in canonical (low, high) order."""
    return (a, b) if a <= b else (b, a)


class PairModel(DomainModel):
    """Symmetric relationship stored with the lower user ID first."""

    user_low_id: UserId
    user_high_id: UserId

    @model_validator(mode="after")
    def check_pair(self) -> "PairModel":
        if self.user_low_id >= self.user_high_id:
            raise ValueError("Pair must hold two distinct users in ascending order")
        return self

    def involves(self, user_id: UserId) -> bool:
        return user_id in (self.user_low_id, self.user_high_id)

    def other(self, user_id: UserId) -> UserId:
        """Return the member of the pair that is not `user_id`."""
        return self.user_high_id if user_id == self.user_low_id else self.user_low_id


class Friendship(PairModel):
    """Friendship edge between two users, created once per unordered pair."""

    id: FriendshipId
    invite_id: Optional[InviteId] = None
    created_at: datetime = Field(default_factory=utc_now)


class Partnership(PairModel):
    """Partner pairing with the shared list provisioned at acceptance."""

    id: PartnershipId
    list_id: ListId
    invite_id: Optional[InviteId] = None
    created_at: datetime = Field(default_factory=utc_now)


class ListCollaborator(DomainModel):
    """Grant giving a non-owner user access to a list."""

    id: CollaboratorId
    list_id: ListId
    user_id: UserId
    access: AccessLevel = AccessLevel.EDITOR
    invite_id: Optional[InviteId] = None
    created_at: datetime = Field(default_factory=utc_now)
