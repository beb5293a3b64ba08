"""In-memory invite repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional

from marquee.domain.error import DuplicatePendingInviteError, InviteCodeCollisionError
from marquee.domain.model import Invite
from marquee.domain.repository import InviteRepository
from marquee.domain.value import InviteCode, InviteId, InviteKind, InviteStatus, UserId

from .database import InMemoryDatabase


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    Enforces the same constraints as the database: unique codes and one
    pending invite per (inviter, kind, target). Each call yields to the event
    loop once so concurrent tests interleave.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._invites: dict[InviteId, Invite] = database.table("invites")

    async def find_by_id(
        self, invite_id: InviteId, for_update: bool = False
    ) -> Optional[Invite]:
        await asyncio.sleep(0)
        return self._invites.get(invite_id)

    async def find_by_code(
        self, kind: InviteKind, code: InviteCode, for_update: bool = False
    ) -> Optional[Invite]:
        await asyncio.sleep(0)
        for invite in self._invites.values():
            if invite.kind is kind and invite.code == code:
                return invite
        return None

    async def find_pending_between(
        self,
        inviter_id: UserId,
        kind: InviteKind,
        target_key: str,
        for_update: bool = False,
    ) -> Optional[Invite]:
        await asyncio.sleep(0)
        for invite in self._invites.values():
            if (
                invite.is_pending
                and invite.inviter_id == inviter_id
                and invite.kind is kind
                and invite.target_key == target_key
            ):
                return invite
        return None

    async def find_sent_by(
        self,
        inviter_id: UserId,
        status: Optional[InviteStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        invites = [
            invite
            for invite in self._invites.values()
            if invite.inviter_id == inviter_id and (status is None or invite.status is status)
        ]
        invites.sort(key=lambda i: i.created_at, reverse=True)
        return invites[offset : offset + limit]

    async def find_pending_for(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invite]:
        invites = [
            invite
            for invite in self._invites.values()
            if invite.target_user_id == user_id and invite.is_pending
        ]
        invites.sort(key=lambda i: i.created_at, reverse=True)
        return invites[offset : offset + limit]

    async def find_stale(
        self,
        now: datetime,
        inviter_id: Optional[UserId] = None,
        target_user_id: Optional[UserId] = None,
    ) -> list[Invite]:
        await asyncio.sleep(0)
        return [
            invite
            for invite in self._invites.values()
            if invite.is_pending
            and invite.is_past_expiry(now)
            and (inviter_id is None or invite.inviter_id == inviter_id)
            and (target_user_id is None or invite.target_user_id == target_user_id)
        ]

    async def count_pending_for(self, user_id: UserId, now: datetime) -> int:
        return sum(
            1
            for invite in self._invites.values()
            if invite.target_user_id == user_id
            and invite.is_pending
            and not invite.is_past_expiry(now)
        )

    async def add(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Raises:
            DuplicatePendingInviteError: If a pending invite exists for the key
            InviteCodeCollisionError: If the code is taken
        """
        await asyncio.sleep(0)
        for existing in self._invites.values():
            if invite.code is not None and existing.code == invite.code:
                raise InviteCodeCollisionError("Invite code already in use")
            if (
                invite.is_pending
                and existing.is_pending
                and existing.inviter_id == invite.inviter_id
                and existing.kind is invite.kind
                and existing.target_key == invite.target_key
            ):
                raise DuplicatePendingInviteError(
                    "A pending invite already exists for this recipient"
                )
        self._invites[invite.id] = invite
        return invite

    async def update(self, invite: Invite) -> Invite:
        await asyncio.sleep(0)
        self._invites[invite.id] = invite
        return invite
