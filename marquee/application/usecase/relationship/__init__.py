"""Relationship use cases."""

from marquee.application.usecase.relationship.end_partnership import (
    EndPartnershipRequest,
    EndPartnershipResponse,
    EndPartnershipUseCase,
)
from marquee.application.usecase.relationship.remove_collaborator import (
    RemoveCollaboratorRequest,
    RemoveCollaboratorResponse,
    RemoveCollaboratorUseCase,
)
from marquee.application.usecase.relationship.remove_friend import (
    RemoveFriendRequest,
    RemoveFriendResponse,
    RemoveFriendUseCase,
)

__all__ = [
    "EndPartnershipRequest",
    "EndPartnershipResponse",
    "EndPartnershipUseCase",
    "RemoveCollaboratorRequest",
    "RemoveCollaboratorResponse",
    "RemoveCollaboratorUseCase",
    "RemoveFriendRequest",
    "RemoveFriendResponse",
    "RemoveFriendUseCase",
]
