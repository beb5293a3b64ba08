"""Invite code generation."""

import secrets

from marquee.config import InvitationSettings
from marquee.domain.value import InviteCode

from .base import Service


class InviteCodeGenerator(Service):
    """Produces unguessable, URL-safe invite codes.

    Codes come from `secrets.token_urlsafe`, so collisions are negligible;
    the store's unique constraint catches the rare one and the lifecycle
    engine asks for another code.
    """

    def __init__(self, settings: InvitationSettings) -> None:
        self.code_bytes = settings.code_bytes

    def generate(self) -> InviteCode:
        return InviteCode(root=secrets.token_urlsafe(self.code_bytes))
