"""Reference to an invite by ID or by kind-scoped code."""

from typing import Optional

from pydantic import model_validator

from marquee.domain.value.common import ValueObject
from marquee.domain.value.identifiers import InviteId
from marquee.domain.value.types import InviteCode, InviteKind


class InviteRef(ValueObject):
    """Identifies an invite either by ID or by (kind, code).

    Direct invites are usually addressed by ID from the recipient's pending
    list; code-based invites arrive as links carrying the code.
    """

    invite_id: Optional[InviteId] = None
    kind: Optional[InviteKind] = None
    code: Optional[InviteCode] = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> "InviteRef":
        """Require either an ID or a kind and code, never both."""
        by_code = self.code is not None
        if by_code and self.kind is None:
            raise ValueError("A code reference requires an invite kind")
        if by_code == (self.invite_id is not None):
            raise ValueError("Reference an invite by ID or by code, not both")
        return self

    @classmethod
    def by_id(cls, invite_id: InviteId) -> "InviteRef":
        return cls(invite_id=invite_id)

    @classmethod
    def by_code(cls, kind: InviteKind, code: InviteCode) -> "InviteRef":
        return cls(kind=kind, code=code)

    def describe(self) -> str:
        """Log-safe description of the reference."""
        if self.code is not None and self.kind is not None:
            return f"{self.kind.value}:{self.code.masked()}"
        return str(self.invite_id)
