"""Invite domain service.

Drives the invite state machine: pending is the initial status, accepted,
declined, cancelled and expired are final. Expected failures come back as
`InviteOutcome` values; only infrastructure failures are raised.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import logfire

from marquee.config import InvitationSettings
from marquee.domain.error import (
    AlreadyConnectedError,
    AlreadyResolvedError,
    DuplicatePendingInviteError,
    InviteCodeCollisionError,
    InviteError,
    InviteExpiredError,
    InviteForbiddenError,
    InviteNotFoundError,
    InviteValidationError,
    ListNotFoundError,
    StoreError,
)
from marquee.domain.model import (
    Invite,
    InviteOutcome,
    Notification,
    RelationshipResult,
    User,
    WatchList,
)
from marquee.domain.model.common import utc_now
from marquee.domain.model.invite import target_key_for
from marquee.domain.repository import (
    InviteRepository,
    UnitOfWork,
    UserRepository,
    WatchListRepository,
)
from marquee.domain.service.code_generator import InviteCodeGenerator
from marquee.domain.service.notification_service import NotificationService
from marquee.domain.service.relationship_service import RelationshipService
from marquee.domain.value import (
    InviteId,
    InviteKind,
    InvitePolicy,
    InviteRef,
    InviteStatus,
    ListId,
    NotificationType,
    UserId,
)

from .base import Service

MAX_LIST_NAME_LENGTH = 100
MAX_MESSAGE_LENGTH = 500

_KIND_LABELS = {
    InviteKind.FRIEND: "friend",
    InviteKind.PARTNER: "partner",
    InviteKind.LIST_DIRECT: "list",
    InviteKind.LIST_CODE: "list",
}


class InviteService(Service):
    """Domain service for the invite lifecycle."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        invite_repository: InviteRepository,
        user_repository: UserRepository,
        watch_list_repository: WatchListRepository,
        relationship_service: RelationshipService,
        notification_service: NotificationService,
        code_generator: InviteCodeGenerator,
        settings: InvitationSettings,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize invite service.

        Args:
            unit_of_work: Transaction boundary
            invite_repository: Invite repository
            user_repository: User repository
            watch_list_repository: Watch list repository
            relationship_service: Materializes accepted invites
            notification_service: Notification feed and push dispatch
            code_generator: Invite code generator
            settings: Invitation settings
            now: Clock, replaceable in tests
        """
        self.unit_of_work = unit_of_work
        self.invite_repository = invite_repository
        self.user_repository = user_repository
        self.watch_list_repository = watch_list_repository
        self.relationship_service = relationship_service
        self.notification_service = notification_service
        self.code_generator = code_generator
        self.settings = settings
        self._now = now

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_invite(
        self,
        inviter_id: UserId,
        kind: InviteKind,
        target_user_id: Optional[UserId] = None,
        target_list_id: Optional[ListId] = None,
        list_name: Optional[str] = None,
        message: Optional[str] = None,
    ) -> InviteOutcome:
        """Create a pending invite.

        Args:
            inviter_id: User sending the invite
            kind: Invite kind
            target_user_id: Recipient for direct invites
            target_list_id: List for list invites
            list_name: Name of the shared list a partner invite creates
            message: Optional note shown to the recipient

        Returns:
            Outcome carrying the created invite, or the reason it was refused

        Raises:
            StoreError: If the store fails or no unique code could be generated
        """
        with logfire.span(
            "invite_service.create_invite",
            inviter_id=inviter_id,
            kind=kind.value,
            target_user_id=target_user_id,
            target_list_id=str(target_list_id) if target_list_id else None,
        ):
            try:
                list_name, message = self._validate_create(
                    inviter_id, kind, target_user_id, target_list_id, list_name, message
                )
                async with self.unit_of_work.transaction():
                    invite, notices = await self._create(
                        inviter_id, kind, target_user_id, target_list_id, list_name, message
                    )
            except InviteError as error:
                logfire.warn(
                    "Invite creation refused",
                    inviter_id=inviter_id,
                    kind=kind.value,
                    error=error.kind.value,
                    reason=error.message,
                )
                return InviteOutcome.failed(error.kind, error.message)

            logfire.info(
                "Invite created",
                invite_id=str(invite.id),
                inviter_id=inviter_id,
                kind=kind.value,
            )
            self.notification_service.dispatch(notices)
            return InviteOutcome.ok(invite)

    def _validate_create(
        self,
        inviter_id: UserId,
        kind: InviteKind,
        target_user_id: Optional[UserId],
        target_list_id: Optional[ListId],
        list_name: Optional[str],
        message: Optional[str],
    ) -> tuple[Optional[str], Optional[str]]:
        if kind.is_list and target_list_id is None:
            raise InviteValidationError("List invites require a list")
        if not kind.is_list and target_list_id is not None:
            raise InviteValidationError(f"{kind.value} invites do not take a list")
        if kind is InviteKind.LIST_DIRECT and target_user_id is None:
            raise InviteValidationError("Direct list invites require a recipient")
        if kind is InviteKind.LIST_CODE and target_user_id is not None:
            raise InviteValidationError("Code list invites cannot name a recipient")
        if target_user_id is not None and target_user_id == inviter_id:
            raise InviteValidationError("You cannot invite yourself")

        if list_name is not None:
            if kind is not InviteKind.PARTNER:
                raise InviteValidationError("Only partner invites take a list name")
            list_name = list_name.strip() or None
            if list_name and len(list_name) > MAX_LIST_NAME_LENGTH:
                raise InviteValidationError(
                    f"List name must be at most {MAX_LIST_NAME_LENGTH} characters"
                )

        if message is not None:
            message = message.strip() or None
            if message and len(message) > MAX_MESSAGE_LENGTH:
                raise InviteValidationError(
                    f"Message must be at most {MAX_MESSAGE_LENGTH} characters"
                )
        return list_name, message

    async def _create(
        self,
        inviter_id: UserId,
        kind: InviteKind,
        target_user_id: Optional[UserId],
        target_list_id: Optional[ListId],
        list_name: Optional[str],
        message: Optional[str],
    ) -> tuple[Invite, list[Notification]]:
        now = self._now()

        target: Optional[User] = None
        if target_user_id is not None:
            target = await self.user_repository.find_by_id(target_user_id)
            if target is None:
                raise InviteNotFoundError("User not found")
            await self._check_invite_policy(target, inviter_id)

        watch_list: Optional[WatchList] = None
        if target_list_id is not None:
            watch_list = await self.watch_list_repository.find_by_id(target_list_id)
            if watch_list is None:
                raise ListNotFoundError(str(target_list_id))
            if watch_list.owner_id != inviter_id:
                raise InviteForbiddenError("Only the list owner can invite collaborators")

        reason = await self.relationship_service.find_existing_connection(
            kind, inviter_id, target_user_id, target_list_id
        )
        if reason:
            raise AlreadyConnectedError(reason)

        target_key = target_key_for(kind, target_user_id, target_list_id)
        existing = await self.invite_repository.find_pending_between(
            inviter_id, kind, target_key, for_update=True
        )
        if existing is not None:
            if not existing.is_past_expiry(now):
                raise DuplicatePendingInviteError(
                    "A pending invite already exists for this recipient"
                )
            await self.invite_repository.update(
                existing.transition(InviteStatus.EXPIRED, now)
            )

        metadata: dict[str, str] = {}
        if list_name:
            metadata["list_name"] = list_name
        elif watch_list is not None:
            metadata["list_name"] = watch_list.name
        if message:
            metadata["message"] = message

        invite = await self._insert_with_fresh_code(
            Invite(
                id=InviteId(uuid4()),
                kind=kind,
                inviter_id=inviter_id,
                target_user_id=target_user_id,
                target_list_id=target_list_id,
                created_at=now,
                expires_at=now + timedelta(days=self.settings.expiry_days),
                metadata=metadata,
            )
        )

        notices: list[Notification] = []
        if target is not None:
            inviter = await self.user_repository.find_by_id(inviter_id)
            notices.append(await self._notify_invited(invite, inviter, target))
        return invite, notices

    async def _insert_with_fresh_code(self, invite: Invite) -> Invite:
        for attempt in range(1, self.settings.code_retry_limit + 1):
            candidate = invite.model_copy(update={"code": self.code_generator.generate()})
            try:
                return await self.invite_repository.add(candidate)
            except InviteCodeCollisionError:
                logfire.warn(
                    "Invite code collision, regenerating",
                    invite_id=str(invite.id),
                    attempt=attempt,
                )
        raise StoreError(
            f"Could not generate a unique invite code in {self.settings.code_retry_limit} attempts"
        )

    async def _check_invite_policy(self, target: User, inviter_id: UserId) -> None:
        policy = target.allow_invites_from
        if policy is InvitePolicy.NOBODY:
            raise InviteForbiddenError("This user is not accepting invites")
        if policy is InvitePolicy.CONNECTIONS_ONLY and not (
            await self.relationship_service.are_connected(target.id, inviter_id)
        ):
            raise InviteForbiddenError("This user only accepts invites from connections")

    # ------------------------------------------------------------------
    # Accept / decline / cancel
    # ------------------------------------------------------------------

    async def accept_invite(self, actor_id: UserId, ref: InviteRef) -> InviteOutcome:
        """Accept an invite and materialize the relationship it grants.

        The status transition, the relationship rows and the inviter's
        notification commit together or not at all.

        Args:
            actor_id: User accepting the invite
            ref: Invite ID, or kind and code from an invite link

        Returns:
            Outcome carrying the accepted invite and the relationship

        Raises:
            StoreError: If the store fails
        """
        with logfire.span(
            "invite_service.accept_invite", actor_id=actor_id, ref=ref.describe()
        ):
            try:
                await self._resolve_if_expired(ref)
                async with self.unit_of_work.transaction():
                    invite = await self._find(ref, for_update=True)
                    invite = self._check_resolvable(invite, actor_id, "accept")

                    reason = await self.relationship_service.find_existing_connection(
                        invite.kind, invite.inviter_id, actor_id, invite.target_list_id
                    )
                    if reason:
                        raise AlreadyConnectedError(reason)

                    accepted = await self.invite_repository.update(
                        invite.transition(
                            InviteStatus.ACCEPTED, self._now(), accepted_by=actor_id
                        )
                    )
                    relationship = await self.relationship_service.materialize(
                        accepted, actor_id
                    )
                    notice = await self._notify_accepted(accepted, actor_id, relationship)
            except InviteError as error:
                logfire.warn(
                    "Invite acceptance refused",
                    actor_id=actor_id,
                    ref=ref.describe(),
                    error=error.kind.value,
                    reason=error.message,
                )
                return InviteOutcome.failed(error.kind, error.message)

            logfire.info(
                "Invite accepted",
                invite_id=str(accepted.id),
                kind=accepted.kind.value,
                actor_id=actor_id,
            )
            self.notification_service.dispatch([notice])
            return InviteOutcome.ok(accepted, relationship)

    async def decline_invite(self, actor_id: UserId, invite_id: InviteId) -> InviteOutcome:
        """Decline a direct invite addressed to the actor."""
        with logfire.span(
            "invite_service.decline_invite",
            actor_id=actor_id,
            invite_id=str(invite_id),
        ):
            ref = InviteRef.by_id(invite_id)
            try:
                await self._resolve_if_expired(ref)
                async with self.unit_of_work.transaction():
                    invite = await self._find(ref, for_update=True)
                    invite = self._check_resolvable(invite, actor_id, "decline")
                    declined = await self.invite_repository.update(
                        invite.transition(InviteStatus.DECLINED, self._now())
                    )
                    actor = await self.user_repository.find_by_id(actor_id)
                    notice = await self.notification_service.notify(
                        declined.inviter_id,
                        NotificationType.COLLAB_DECLINED,
                        f"{_name(actor)} declined your {_KIND_LABELS[declined.kind]} invite",
                        data=_invite_data(declined, responder_id=actor_id),
                    )
            except InviteError as error:
                logfire.warn(
                    "Invite decline refused",
                    actor_id=actor_id,
                    invite_id=str(invite_id),
                    error=error.kind.value,
                )
                return InviteOutcome.failed(error.kind, error.message)

            logfire.info("Invite declined", invite_id=str(invite_id), actor_id=actor_id)
            self.notification_service.dispatch([notice])
            return InviteOutcome.ok(declined)

    async def cancel_invite(self, actor_id: UserId, invite_id: InviteId) -> InviteOutcome:
        """Withdraw an invite the actor sent.

        Cancelling an invite that is no longer pending (expired included)
        reports already_resolved.
        """
        with logfire.span(
            "invite_service.cancel_invite",
            actor_id=actor_id,
            invite_id=str(invite_id),
        ):
            ref = InviteRef.by_id(invite_id)
            try:
                await self._resolve_if_expired(ref)
                async with self.unit_of_work.transaction():
                    invite = await self._find(ref, for_update=True)
                    if invite is None:
                        raise InviteNotFoundError("Invite not found")
                    if invite.inviter_id != actor_id:
                        raise InviteForbiddenError("Only the inviter can cancel an invite")
                    if not invite.is_pending:
                        raise AlreadyResolvedError(
                            f"Invite has already been {invite.status.value}"
                        )
                    cancelled = await self.invite_repository.update(
                        invite.transition(InviteStatus.CANCELLED, self._now())
                    )
            except InviteError as error:
                logfire.warn(
                    "Invite cancel refused",
                    actor_id=actor_id,
                    invite_id=str(invite_id),
                    error=error.kind.value,
                )
                return InviteOutcome.failed(error.kind, error.message)

            logfire.info("Invite cancelled", invite_id=str(invite_id), actor_id=actor_id)
            return InviteOutcome.ok(cancelled)

    def _check_resolvable(
        self, invite: Optional[Invite], actor_id: UserId, action: str
    ) -> Invite:
        """Recipient-side checks shared by accept and decline, in order."""
        if invite is None:
            raise InviteNotFoundError("Invite not found")
        if invite.is_expired(self._now()):
            raise InviteExpiredError()
        if invite.inviter_id == actor_id:
            raise InviteForbiddenError(f"You cannot {action} your own invite")
        if invite.is_direct and invite.target_user_id != actor_id:
            raise InviteForbiddenError("This invite was sent to someone else")
        if action == "decline" and not invite.is_direct:
            raise InviteForbiddenError("Invite links cannot be declined")
        if not invite.is_pending:
            raise AlreadyResolvedError(f"Invite has already been {invite.status.value}")
        return invite

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_invite(self, ref: InviteRef) -> InviteOutcome:
        """Look up an invite for a landing page.

        Resolved invites are returned so the page can say so; expired ones
        report expired.
        """
        with logfire.span("invite_service.get_invite", ref=ref.describe()):
            invite = await self._resolve_if_expired(ref)
            if invite is None:
                return InviteOutcome.failed(
                    InviteNotFoundError.kind, "Invite not found"
                )
            if invite.status is InviteStatus.EXPIRED:
                return InviteOutcome.failed(InviteExpiredError.kind, "Invite has expired")
            return InviteOutcome.ok(invite)

    async def list_sent(
        self,
        user_id: UserId,
        status: Optional[InviteStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invite]:
        """List invites the user sent, newest first."""
        with logfire.span(
            "invite_service.list_sent",
            user_id=user_id,
            status=status.value if status else None,
        ):
            await self._expire_stale(inviter_id=user_id)
            return await self.invite_repository.find_sent_by(
                user_id, status, limit, offset
            )

    async def list_pending(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invite]:
        """List live direct invites waiting for the user's answer."""
        with logfire.span("invite_service.list_pending", user_id=user_id):
            await self._expire_stale(target_user_id=user_id)
            return await self.invite_repository.find_pending_for(user_id, limit, offset)

    async def _find(self, ref: InviteRef, for_update: bool = False) -> Optional[Invite]:
        if ref.invite_id is not None:
            return await self.invite_repository.find_by_id(ref.invite_id, for_update)
        assert ref.kind is not None and ref.code is not None
        return await self.invite_repository.find_by_code(ref.kind, ref.code, for_update)

    async def _resolve_if_expired(self, ref: InviteRef) -> Optional[Invite]:
        """Rewrite a pending invite past its expiry to expired.

        Runs in its own transaction so the rewrite survives a later rollback.

        Returns:
            The invite as stored afterwards, or None if it does not exist
        """
        async with self.unit_of_work.transaction():
            invite = await self._find(ref, for_update=True)
            if invite is None or not invite.is_pending:
                return invite
            now = self._now()
            if not invite.is_past_expiry(now):
                return invite
            expired = await self.invite_repository.update(
                invite.transition(InviteStatus.EXPIRED, now)
            )
        logfire.info("Invite expired", invite_id=str(expired.id), kind=expired.kind.value)
        return expired

    async def _expire_stale(
        self,
        inviter_id: Optional[UserId] = None,
        target_user_id: Optional[UserId] = None,
    ) -> None:
        """Rewrite stale pending rows so filtered and paged reads agree."""
        now = self._now()
        stale = await self.invite_repository.find_stale(
            now, inviter_id=inviter_id, target_user_id=target_user_id
        )
        if not stale:
            return

        expired = 0
        async with self.unit_of_work.transaction():
            for invite in stale:
                current = await self.invite_repository.find_by_id(invite.id, for_update=True)
                if current is None or not current.is_pending:
                    continue
                await self.invite_repository.update(
                    current.transition(InviteStatus.EXPIRED, now)
                )
                expired += 1
        logfire.info("Stale invites expired", count=expired)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def _notify_invited(
        self, invite: Invite, inviter: Optional[User], target: User
    ) -> Notification:
        name = _name(inviter)
        if invite.kind is InviteKind.FRIEND:
            title = f"{name} wants to be friends"
        elif invite.kind is InviteKind.PARTNER:
            title = f"{name} invited you to be partners"
        else:
            title = f"{name} invited you to collaborate on {invite.list_name}"
        return await self.notification_service.notify(
            target.id,
            NotificationType.COLLAB_INVITE,
            title,
            invite.message,
            _invite_data(invite),
        )

    async def _notify_accepted(
        self, invite: Invite, accepter_id: UserId, relationship: RelationshipResult
    ) -> Notification:
        accepter = await self.user_repository.find_by_id(accepter_id)
        name = _name(accepter)
        if invite.kind is InviteKind.FRIEND:
            title = f"{name} is now your friend!"
            message = "You can now suggest titles to each other"
        elif invite.kind is InviteKind.PARTNER:
            title = f"{name} is now your partner!"
            message = f'You\'re now sharing "{relationship.list_name}" together'
        else:
            title = f"{name} joined {relationship.list_name}"
            message = "They can now add titles to the list"

        data = _invite_data(invite, responder_id=accepter_id)
        if relationship.list_id is not None:
            data["list_id"] = str(relationship.list_id)
        return await self.notification_service.notify(
            invite.inviter_id, NotificationType.COLLAB_ACCEPTED, title, message, data
        )


def _name(user: Optional[User]) -> str:
    return user.display_name if user else "Someone"


def _invite_data(invite: Invite, responder_id: Optional[UserId] = None) -> dict:
    data: dict = {
        "invite_id": str(invite.id),
        "kind": invite.kind.value,
        "inviter_id": invite.inviter_id,
    }
    if invite.target_list_id is not None:
        data["list_id"] = str(invite.target_list_id)
    if responder_id is not None:
        data["responder_id"] = responder_id
    return data
