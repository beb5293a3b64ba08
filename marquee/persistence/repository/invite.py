"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marquee.domain.error import DuplicatePendingInviteError, InviteCodeCollisionError
from marquee.domain.model import Invite
from marquee.domain.repository import InviteRepository
from marquee.domain.value import InviteCode, InviteId, InviteKind, InviteStatus, UserId
from marquee.persistence.mappers import invite_to_dict, row_to_invite
from marquee.persistence.tables import invites_table

PENDING_TARGET_CONSTRAINT = "uq_invites_pending_target"
CODE_CONSTRAINT = "uq_invites_code"


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _first(self, stmt, for_update: bool) -> Optional[Invite]:
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_id(
        self, invite_id: InviteId, for_update: bool = False
    ) -> Optional[Invite]:
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        return await self._first(stmt, for_update)

    async def find_by_code(
        self, kind: InviteKind, code: InviteCode, for_update: bool = False
    ) -> Optional[Invite]:
        stmt = select(invites_table).where(
            and_(
                invites_table.c.kind == kind.value,
                invites_table.c.code == code.root,
            )
        )
        return await self._first(stmt, for_update)

    async def find_pending_between(
        self,
        inviter_id: UserId,
        kind: InviteKind,
        target_key: str,
        for_update: bool = False,
    ) -> Optional[Invite]:
        """Find the pending invite for an (inviter, kind, target) tuple.

        Served by the partial unique index on pending invites.
        """
        stmt = select(invites_table).where(
            and_(
                invites_table.c.inviter_id == inviter_id,
                invites_table.c.kind == kind.value,
                invites_table.c.target_key == target_key,
                invites_table.c.status == InviteStatus.PENDING.value,
            )
        )
        return await self._first(stmt, for_update)

    async def find_sent_by(
        self,
        inviter_id: UserId,
        status: Optional[InviteStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        stmt = select(invites_table).where(invites_table.c.inviter_id == inviter_id)
        if status:
            stmt = stmt.where(invites_table.c.status == status.value)
        stmt = (
            stmt.order_by(invites_table.c.created_at.desc()).limit(limit).offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def find_pending_for(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invite]:
        stmt = (
            select(invites_table)
            .where(
                and_(
                    invites_table.c.target_user_id == user_id,
                    invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .order_by(invites_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def find_stale(
        self,
        now: datetime,
        inviter_id: Optional[UserId] = None,
        target_user_id: Optional[UserId] = None,
    ) -> list[Invite]:
        stmt = select(invites_table).where(
            and_(
                invites_table.c.status == InviteStatus.PENDING.value,
                invites_table.c.expires_at <= now,
            )
        )
        if inviter_id is not None:
            stmt = stmt.where(invites_table.c.inviter_id == inviter_id)
        if target_user_id is not None:
            stmt = stmt.where(invites_table.c.target_user_id == target_user_id)
        result = await self.session.execute(stmt)
        return [row_to_invite(dict(row)) for row in result.mappings().all()]

    async def count_pending_for(self, user_id: UserId, now: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(invites_table)
            .where(
                and_(
                    invites_table.c.target_user_id == user_id,
                    invites_table.c.status == InviteStatus.PENDING.value,
                    or_(
                        invites_table.c.expires_at.is_(None),
                        invites_table.c.expires_at > now,
                    ),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def add(self, invite: Invite) -> Invite:
        """Insert a new invite.

        The insert runs in a savepoint so a constraint violation leaves the
        surrounding transaction usable.

        Raises:
            DuplicatePendingInviteError: If a pending invite exists for the key
            InviteCodeCollisionError: If the code is taken
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(invites_table).values(**invite_to_dict(invite))
                )
        except IntegrityError as e:
            detail = str(e.orig)
            if PENDING_TARGET_CONSTRAINT in detail:
                raise DuplicatePendingInviteError(
                    "A pending invite already exists for this recipient"
                ) from e
            if CODE_CONSTRAINT in detail:
                raise InviteCodeCollisionError("Invite code already in use") from e
            raise
        return invite

    async def update(self, invite: Invite) -> Invite:
        stmt = (
            update(invites_table)
            .where(invites_table.c.id == invite.id)
            .values(
                status=invite.status.value,
                resolved_at=invite.resolved_at,
                accepted_by_user_id=invite.accepted_by_user_id,
                metadata=invite.metadata,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return invite
