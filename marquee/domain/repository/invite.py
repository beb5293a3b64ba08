"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from marquee.domain.model.invite import Invite
from marquee.domain.value import InviteCode, InviteId, InviteKind, InviteStatus, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the persistence layer.

    Reads made with `for_update=True` lock the row until the surrounding
    transaction ends, so a read-modify-write inside one transaction cannot
    lose an update to a concurrent request.
    """

    @abstractmethod
    async def find_by_id(
        self, invite_id: InviteId, for_update: bool = False
    ) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier
            for_update: Lock the row for the rest of the transaction

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_code(
        self, kind: InviteKind, code: InviteCode, for_update: bool = False
    ) -> Invite | None:
        """Find an invite of a given kind by its code.

        Used when a user opens an invite link. Returns the invite whatever
        its status so callers can tell a replayed code from an unknown one.

        Args:
            kind: The invite kind the link was issued for
            code: The invite code
            for_update: Lock the row for the rest of the transaction

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_between(
        self,
        inviter_id: UserId,
        kind: InviteKind,
        target_key: str,
        for_update: bool = False,
    ) -> Invite | None:
        """Find the pending invite for an (inviter, kind, target) tuple.

        Args:
            inviter_id: The inviter's ID
            kind: The invite kind
            target_key: Target key built by `target_key_for`
            for_update: Lock the row for the rest of the transaction

        Returns:
            The pending invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_sent_by(
        self,
        inviter_id: UserId,
        status: InviteStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        """Find invites created by a user, newest first.

        Args:
            inviter_id: The inviter's ID
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def find_pending_for(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invite]:
        """Find pending direct invites addressed to a user, newest first.

        Args:
            user_id: The recipient's ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of pending invites
        """
        pass

    @abstractmethod
    async def find_stale(
        self,
        now: datetime,
        inviter_id: UserId | None = None,
        target_user_id: UserId | None = None,
    ) -> list[Invite]:
        """Find pending invites whose expiry is at or before `now`.

        Args:
            now: The reference time
            inviter_id: Only invites created by this user
            target_user_id: Only direct invites addressed to this user

        Returns:
            List of pending invites awaiting the expired rewrite
        """
        pass

    @abstractmethod
    async def count_pending_for(self, user_id: UserId, now: datetime) -> int:
        """Count pending direct invites addressed to a user.

        Rows past their expiry at `now` that have not yet been rewritten are
        excluded.
        """
        pass

    @abstractmethod
    async def add(self, invite: Invite) -> Invite:
        """Insert a new invite.

        Args:
            invite: The invite to insert

        Returns:
            The saved invite

        Raises:
            DuplicatePendingInviteError: If a pending invite already exists
                for the same inviter, kind and target
            InviteCodeCollisionError: If the invite code is already taken
        """
        pass

    @abstractmethod
    async def update(self, invite: Invite) -> Invite:
        """Persist a status transition of an existing invite.

        Args:
            invite: The invite with its new state

        Returns:
            The saved invite
        """
        pass
