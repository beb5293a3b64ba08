"""Strongly typed identifiers for Marquee domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.

User IDs are numeric and come from the identity provider; every other
entity is keyed by a UUID generated in the domain layer.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", int)
InviteId = NewType("InviteId", UUID)
FriendshipId = NewType("FriendshipId", UUID)
PartnershipId = NewType("PartnershipId", UUID)
ListId = NewType("ListId", UUID)
CollaboratorId = NewType("CollaboratorId", UUID)
NotificationId = NewType("NotificationId", UUID)
