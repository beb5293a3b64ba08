"""User entity.

Users are created by the surrounding account system; Marquee only reads them
to resolve invite targets, privacy settings and search results.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from marquee.domain.model.common import DomainModel, utc_now
from marquee.domain.value import InvitePolicy, UserId


class User(DomainModel):
    """User account.

    A user without a password hash signs in only through the external
    identity provider.
    """

    id: UserId
    email: str
    name: str
    username: Optional[str] = None
    password_hash: Optional[str] = None
    image: Optional[str] = None
    show_in_search: bool = True
    allow_invites_from: InvitePolicy = InvitePolicy.EVERYONE
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def display_name(self) -> str:
        return self.name or self.username or "Someone"
