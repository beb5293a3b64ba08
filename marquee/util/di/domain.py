"""Domain layer DI providers."""

from dishka import Scope, provide

from marquee.config import AuthSettings, InvitationSettings, SearchSettings
from marquee.domain.repository import (
    FriendshipRepository,
    InviteRepository,
    ListCollaboratorRepository,
    NotificationRepository,
    PartnershipRepository,
    UnitOfWork,
    UserRepository,
    WatchListRepository,
)
from marquee.domain.service import (
    AccessService,
    AlertPusher,
    InviteCodeGenerator,
    InviteService,
    JWTService,
    NotificationService,
    RelationshipService,
)
from marquee.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances sharing one unit of work.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_code_generator(self, settings: InvitationSettings) -> InviteCodeGenerator:
        """Provide invite code generator."""
        return InviteCodeGenerator(settings)

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        invite_repository: InviteRepository,
        alert_pusher: AlertPusher,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            invite_repository=invite_repository,
            alert_pusher=alert_pusher,
        )

    @provide
    def get_relationship_service(
        self,
        friendship_repository: FriendshipRepository,
        partnership_repository: PartnershipRepository,
        watch_list_repository: WatchListRepository,
        collaborator_repository: ListCollaboratorRepository,
        user_repository: UserRepository,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        settings: InvitationSettings,
    ) -> RelationshipService:
        """Provide relationship domain service."""
        return RelationshipService(
            friendship_repository=friendship_repository,
            partnership_repository=partnership_repository,
            watch_list_repository=watch_list_repository,
            collaborator_repository=collaborator_repository,
            user_repository=user_repository,
            notification_service=notification_service,
            unit_of_work=unit_of_work,
            settings=settings,
        )

    @provide
    def get_invite_service(
        self,
        unit_of_work: UnitOfWork,
        invite_repository: InviteRepository,
        user_repository: UserRepository,
        watch_list_repository: WatchListRepository,
        relationship_service: RelationshipService,
        notification_service: NotificationService,
        code_generator: InviteCodeGenerator,
        settings: InvitationSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            unit_of_work=unit_of_work,
            invite_repository=invite_repository,
            user_repository=user_repository,
            watch_list_repository=watch_list_repository,
            relationship_service=relationship_service,
            notification_service=notification_service,
            code_generator=code_generator,
            settings=settings,
        )

    @provide
    def get_access_service(
        self,
        user_repository: UserRepository,
        friendship_repository: FriendshipRepository,
        partnership_repository: PartnershipRepository,
        watch_list_repository: WatchListRepository,
        collaborator_repository: ListCollaboratorRepository,
        settings: SearchSettings,
    ) -> AccessService:
        """Provide access resolver domain service."""
        return AccessService(
            user_repository=user_repository,
            friendship_repository=friendship_repository,
            partnership_repository=partnership_repository,
            watch_list_repository=watch_list_repository,
            collaborator_repository=collaborator_repository,
            settings=settings,
        )
