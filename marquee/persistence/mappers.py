"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict
from uuid import UUID

from marquee.domain.model import (
    Friendship,
    Invite,
    ListCollaborator,
    Notification,
    Partnership,
    User,
    WatchList,
)
from marquee.domain.value import (
    AccessLevel,
    CollaboratorId,
    FriendshipId,
    InviteCode,
    InviteId,
    InviteKind,
    InvitePolicy,
    InviteStatus,
    ListId,
    NotificationId,
    NotificationType,
    PartnershipId,
    UserId,
    WatchListType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return None if value is None else _uuid(value)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        email=row["email"],
        name=row["name"],
        username=row.get("username"),
        password_hash=row.get("password_hash"),
        image=row.get("image"),
        show_in_search=row["show_in_search"],
        allow_invites_from=InvitePolicy(row["allow_invites_from"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["allow_invites_from"] = user.allow_invites_from.value
    return data


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    target_list_id = _optional_uuid(row.get("target_list_id"))
    target_user_id = row.get("target_user_id")
    accepted_by = row.get("accepted_by_user_id")
    return Invite(
        id=InviteId(_uuid(row["id"])),
        kind=InviteKind(row["kind"]),
        inviter_id=UserId(row["inviter_id"]),
        target_user_id=UserId(target_user_id) if target_user_id is not None else None,
        target_list_id=ListId(target_list_id) if target_list_id else None,
        code=InviteCode(root=row["code"]) if row.get("code") else None,
        status=InviteStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row.get("expires_at"),
        resolved_at=row.get("resolved_at"),
        accepted_by_user_id=UserId(accepted_by) if accepted_by is not None else None,
        metadata=row.get("metadata") or {},
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    The derived `target_key` column is written alongside the model fields.
    """
    return {
        "id": invite.id,
        "kind": invite.kind.value,
        "inviter_id": invite.inviter_id,
        "target_user_id": invite.target_user_id,
        "target_list_id": invite.target_list_id,
        "target_key": invite.target_key,
        "code": invite.code.root if invite.code else None,
        "status": invite.status.value,
        "created_at": invite.created_at,
        "expires_at": invite.expires_at,
        "resolved_at": invite.resolved_at,
        "accepted_by_user_id": invite.accepted_by_user_id,
        "metadata": invite.metadata,
    }


def row_to_friendship(row: Dict[str, Any]) -> Friendship:
    return Friendship(
        id=FriendshipId(_uuid(row["id"])),
        user_low_id=UserId(row["user_low_id"]),
        user_high_id=UserId(row["user_high_id"]),
        invite_id=_optional_uuid(row.get("invite_id")),
        created_at=row["created_at"],
    )


def row_to_partnership(row: Dict[str, Any]) -> Partnership:
    return Partnership(
        id=PartnershipId(_uuid(row["id"])),
        user_low_id=UserId(row["user_low_id"]),
        user_high_id=UserId(row["user_high_id"]),
        list_id=ListId(_uuid(row["list_id"])),
        invite_id=_optional_uuid(row.get("invite_id")),
        created_at=row["created_at"],
    )


def row_to_watch_list(row: Dict[str, Any]) -> WatchList:
    return WatchList(
        id=ListId(_uuid(row["id"])),
        owner_id=UserId(row["owner_id"]),
        name=row["name"],
        type=WatchListType(row["type"]),
        is_shared=row["is_shared"],
        created_at=row["created_at"],
    )


def watch_list_to_dict(watch_list: WatchList) -> Dict[str, Any]:
    data = watch_list.model_dump()
    data["type"] = watch_list.type.value
    return data


def row_to_collaborator(row: Dict[str, Any]) -> ListCollaborator:
    return ListCollaborator(
        id=CollaboratorId(_uuid(row["id"])),
        list_id=ListId(_uuid(row["list_id"])),
        user_id=UserId(row["user_id"]),
        access=AccessLevel(row["access"]),
        invite_id=_optional_uuid(row.get("invite_id")),
        created_at=row["created_at"],
    )


def collaborator_to_dict(collaborator: ListCollaborator) -> Dict[str, Any]:
    data = collaborator.model_dump()
    data["access"] = collaborator.access.value
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(row["user_id"]),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row.get("message"),
        data=row.get("data") or {},
        is_read=row["is_read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    data = notification.model_dump()
    data["type"] = notification.type.value
    return data
