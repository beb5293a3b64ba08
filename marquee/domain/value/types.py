"""Domain value objects for Marquee.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from marquee.domain.value.common import RootValueObject


class InviteKind(str, Enum):
    """Kind of access an invite grants.

    Friend and partner invites may target a user directly or be shared as an
    open code. List invites either target a user (direct) or travel as a code.
    """

    FRIEND = "friend"
    PARTNER = "partner"
    LIST_DIRECT = "list_direct"
    LIST_CODE = "list_code"

    @property
    def is_list(self) -> bool:
        return self in (InviteKind.LIST_DIRECT, InviteKind.LIST_CODE)


class InviteStatus(str, Enum):
    """Status of an invite.

    PENDING is the only non-terminal state.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not InviteStatus.PENDING


class InviteErrorKind(str, Enum):
    """Expected failure of an invite operation."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    EXPIRED = "expired"
    ALREADY_RESOLVED = "already_resolved"
    ALREADY_CONNECTED = "already_connected"
    DUPLICATE_PENDING = "duplicate_pending"
    LIST_NOT_FOUND = "list_not_found"
    VALIDATION_ERROR = "validation_error"


class ListKind(str, Enum):
    """Category of list a user can reach."""

    OWNED = "owned"
    COLLABORATIVE = "collaborative"
    PARTNER = "partner"


class WatchListType(str, Enum):
    """Type of a stored list."""

    CUSTOM = "custom"
    PARTNER = "partner"


class AccessLevel(str, Enum):
    """Access granted to a list collaborator."""

    CO_OWNER = "co_owner"
    EDITOR = "editor"
    VIEWER = "viewer"


class InvitePolicy(str, Enum):
    """Who may send a user direct invites."""

    EVERYONE = "everyone"
    CONNECTIONS_ONLY = "connections_only"
    NOBODY = "nobody"


class NotificationType(str, Enum):
    """Type of a notification feed entry."""

    COLLAB_INVITE = "collab_invite"
    COLLAB_ACCEPTED = "collab_accepted"
    COLLAB_DECLINED = "collab_declined"
    COLLAB_ENDED = "collab_ended"


class InviteCode(RootValueObject[str]):
    """URL-safe single-use invite code.

    Generated with secrets.token_urlsafe, so the alphabet is [A-Za-z0-9_-].
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate code alphabet and length."""
        if not re.match(r"^[A-Za-z0-9_-]{16,64}$", v):
            raise ValueError(
                "Invite code must be 16-64 URL-safe characters (A-Z, a-z, 0-9, _, -)"
            )
        return v

    def masked(self) -> str:
        """Return a log-safe prefix of the code."""
        return self.root[:6] + "..."
