"""Domain services."""

from .access_service import AccessService
from .alert import AlertPusher
from .base import Service
from .code_generator import InviteCodeGenerator
from .invite_service import InviteService
from .jwt_service import JWTService
from .notification_service import NotificationService
from .relationship_service import RelationshipService

__all__ = [
    "AccessService",
    "AlertPusher",
    "InviteCodeGenerator",
    "InviteService",
    "JWTService",
    "NotificationService",
    "RelationshipService",
    "Service",
]
