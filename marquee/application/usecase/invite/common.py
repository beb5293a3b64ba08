"""Response models shared by the invite use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from marquee.domain.model import Invite, RelationshipResult, User
from marquee.domain.value import InviteKind, InviteStatus


class InviteItem(BaseModel):
    """Invite as shown to its sender or recipient."""

    invite_id: str
    kind: InviteKind
    status: InviteStatus
    inviter_id: int
    inviter_name: str | None = None
    target_user_id: int | None = None
    target_list_id: str | None = None
    list_name: str | None = None
    message: str | None = None
    code: str | None = None
    invite_url: str | None = None
    created_at: datetime
    expires_at: datetime | None = None
    resolved_at: datetime | None = None


class RelationshipItem(BaseModel):
    """Relationship created by accepting an invite."""

    kind: InviteKind
    friendship_id: str | None = None
    partnership_id: str | None = None
    collaborator_id: str | None = None
    list_id: str | None = None
    list_name: str | None = None


def invite_url(invite: Invite, frontend_url: str) -> str | None:
    """Link a recipient opens to accept a code-based invite."""
    if invite.code is None or invite.is_direct:
        return None
    return f"{frontend_url}/invite/{invite.kind.value}/{invite.code.root}"


def to_invite_item(
    invite: Invite, frontend_url: str, inviter: Optional[User] = None
) -> InviteItem:
    return InviteItem(
        invite_id=str(invite.id),
        kind=invite.kind,
        status=invite.status,
        inviter_id=invite.inviter_id,
        inviter_name=inviter.display_name if inviter else None,
        target_user_id=invite.target_user_id,
        target_list_id=str(invite.target_list_id) if invite.target_list_id else None,
        list_name=invite.list_name,
        message=invite.message,
        code=invite.code.root if invite.code else None,
        invite_url=invite_url(invite, frontend_url),
        created_at=invite.created_at,
        expires_at=invite.expires_at,
        resolved_at=invite.resolved_at,
    )


def to_relationship_item(result: RelationshipResult) -> RelationshipItem:
    return RelationshipItem(
        kind=result.kind,
        friendship_id=str(result.friendship_id) if result.friendship_id else None,
        partnership_id=str(result.partnership_id) if result.partnership_id else None,
        collaborator_id=str(result.collaborator_id) if result.collaborator_id else None,
        list_id=str(result.list_id) if result.list_id else None,
        list_name=result.list_name,
    )
