"""Invite entity.

One invite model covers every kind of access offer: friendship, partnership
and list collaboration, either targeted at a user or shared as a code.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from marquee.domain.model.common import DomainModel, utc_now
from marquee.domain.value import (
    InviteCode,
    InviteId,
    InviteKind,
    InviteStatus,
    ListId,
    UserId,
)

OPEN_TARGET = "open"


def target_key_for(
    kind: InviteKind,
    target_user_id: Optional[UserId] = None,
    target_list_id: Optional[ListId] = None,
) -> str:
    """Build the key used to keep at most one pending invite per target.

    Combined with the inviter and kind, this key is unique among pending
    invites.
    """
    if kind is InviteKind.LIST_DIRECT:
        return f"user:{target_user_id}/list:{target_list_id}"
    if kind is InviteKind.LIST_CODE:
        return f"list:{target_list_id}"
    if target_user_id is not None:
        return f"user:{target_user_id}"
    return OPEN_TARGET


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - Pending is the only non-terminal status; accepted, declined, cancelled
      and expired are final
    - At most one pending invite per (inviter, kind, target)
    - An invite past its expiry is never accepted, even before the stored
      status has been rewritten to expired
    - Direct invites can only be resolved by their target user
    """

    id: InviteId
    kind: InviteKind
    inviter_id: UserId
    target_user_id: Optional[UserId] = None
    target_list_id: Optional[ListId] = None
    code: Optional[InviteCode] = None
    status: InviteStatus = InviteStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    accepted_by_user_id: Optional[UserId] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def target_key(self) -> str:
        return target_key_for(self.kind, self.target_user_id, self.target_list_id)

    @property
    def is_direct(self) -> bool:
        """Whether the invite names the user allowed to resolve it."""
        return self.target_user_id is not None

    @property
    def is_pending(self) -> bool:
        return self.status is InviteStatus.PENDING

    def is_past_expiry(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def is_expired(self, now: datetime) -> bool:
        """Expired either by stored status or by the clock."""
        if self.status is InviteStatus.EXPIRED:
            return True
        return self.is_pending and self.is_past_expiry(now)

    def transition(
        self,
        status: InviteStatus,
        now: datetime,
        accepted_by: Optional[UserId] = None,
    ) -> "Invite":
        """Return a copy moved from pending into a terminal status.

        Raises:
            ValueError: If the invite is already terminal or the target
                status is pending
        """
        if not self.is_pending:
            raise ValueError(
                f"Invite {self.id} is already {self.status.value}; cannot move to {status.value}"
            )
        if not status.is_terminal:
            raise ValueError("Invites can only move from pending to a terminal status")
        return self.model_copy(
            update={
                "status": status,
                "resolved_at": now,
                "accepted_by_user_id": accepted_by,
            }
        )

    @property
    def list_name(self) -> Optional[str]:
        return self.metadata.get("list_name")

    @property
    def message(self) -> Optional[str]:
        return self.metadata.get("message")
