"""Test configuration and shared helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from marquee.domain.model import Invite, InviteOutcome, User, WatchList
from marquee.domain.repository import (
    InviteRepository,
    UserRepository,
    WatchListRepository,
)
from marquee.domain.service import InviteService
from marquee.domain.value import InviteKind, InvitePolicy, InviteRef, ListId, UserId


async def make_user(
    user_repo: UserRepository,
    user_id: int,
    name: str,
    username: str | None = None,
    show_in_search: bool = True,
    allow_invites_from: InvitePolicy = InvitePolicy.EVERYONE,
) -> User:
    """Store a user the way the account system would create one."""
    user = User(
        id=UserId(user_id),
        email=f"{(username or name).lower().replace(' ', '.')}@example.com",
        name=name,
        username=username,
        show_in_search=show_in_search,
        allow_invites_from=allow_invites_from,
    )
    return await user_repo.save(user)


async def make_watch_list(
    list_repo: WatchListRepository, owner_id: UserId, name: str = "Weekend Picks"
) -> WatchList:
    watch_list = WatchList(id=ListId(uuid4()), owner_id=owner_id, name=name)
    return await list_repo.save(watch_list)


async def backdate_expiry(invite_repo: InviteRepository, invite: Invite) -> Invite:
    """Move an invite's expiry into the past without touching its status."""
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    return await invite_repo.update(invite.model_copy(update={"expires_at": past}))


async def connect_users(
    env, kind: InviteKind, inviter_id: UserId, target_id: UserId
) -> InviteOutcome:
    """Send a direct invite and accept it as the target."""
    invite_service = await env.get(InviteService)
    created = await invite_service.create_invite(
        inviter_id, kind, target_user_id=target_id
    )
    accepted = await invite_service.accept_invite(
        target_id, InviteRef.by_id(created.invite.id)
    )
    assert accepted.success
    return accepted
