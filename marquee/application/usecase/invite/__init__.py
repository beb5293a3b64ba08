"""Invite use cases."""

from marquee.application.usecase.invite.accept_invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
)
from marquee.application.usecase.invite.cancel_invite import (
    CancelInviteRequest,
    CancelInviteResponse,
    CancelInviteUseCase,
)
from marquee.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from marquee.application.usecase.invite.decline_invite import (
    DeclineInviteRequest,
    DeclineInviteResponse,
    DeclineInviteUseCase,
)
from marquee.application.usecase.invite.get_invite import (
    GetInviteRequest,
    GetInviteResponse,
    GetInviteUseCase,
)
from marquee.application.usecase.invite.get_pending_invites import (
    GetPendingInvitesRequest,
    GetPendingInvitesResponse,
    GetPendingInvitesUseCase,
)
from marquee.application.usecase.invite.get_sent_invites import (
    GetSentInvitesRequest,
    GetSentInvitesResponse,
    GetSentInvitesUseCase,
)

__all__ = [
    "AcceptInviteRequest",
    "AcceptInviteResponse",
    "AcceptInviteUseCase",
    "CancelInviteRequest",
    "CancelInviteResponse",
    "CancelInviteUseCase",
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "DeclineInviteRequest",
    "DeclineInviteResponse",
    "DeclineInviteUseCase",
    "GetInviteRequest",
    "GetInviteResponse",
    "GetInviteUseCase",
    "GetPendingInvitesRequest",
    "GetPendingInvitesResponse",
    "GetPendingInvitesUseCase",
    "GetSentInvitesRequest",
    "GetSentInvitesResponse",
    "GetSentInvitesUseCase",
]
