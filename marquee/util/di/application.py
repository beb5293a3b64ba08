"""Application layer DI providers."""

from dishka import Scope, provide

from marquee.application.usecase.invite import (
    AcceptInviteUseCase,
    CancelInviteUseCase,
    CreateInviteUseCase,
    DeclineInviteUseCase,
    GetInviteUseCase,
    GetPendingInvitesUseCase,
    GetSentInvitesUseCase,
)
from marquee.application.usecase.notification import (
    ClearNotificationsUseCase,
    DeleteNotificationUseCase,
    GetNotificationSummaryUseCase,
    GetNotificationsUseCase,
    GetUnreadCountUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from marquee.application.usecase.relationship import (
    EndPartnershipUseCase,
    RemoveCollaboratorUseCase,
    RemoveFriendUseCase,
)
from marquee.application.usecase.sharing import (
    GetFriendsWhoShareUseCase,
    GetSharedListKindsUseCase,
)
from marquee.application.usecase.user import SearchUsersUseCase
from marquee.config import Settings
from marquee.domain.repository import UserRepository
from marquee.domain.service import (
    AccessService,
    InviteService,
    NotificationService,
    RelationshipService,
)
from marquee.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invite use cases
    @provide
    def get_create_invite_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(invite_service=invite_service, settings=settings)

    @provide
    def get_accept_invite_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(invite_service=invite_service, settings=settings)

    @provide
    def get_decline_invite_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> DeclineInviteUseCase:
        """Provide decline invite use case."""
        return DeclineInviteUseCase(invite_service=invite_service, settings=settings)

    @provide
    def get_cancel_invite_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> CancelInviteUseCase:
        """Provide cancel invite use case."""
        return CancelInviteUseCase(invite_service=invite_service, settings=settings)

    @provide
    def get_invite_use_case(
        self,
        invite_service: InviteService,
        user_repository: UserRepository,
        settings: Settings,
    ) -> GetInviteUseCase:
        """Provide invite preview use case."""
        return GetInviteUseCase(
            invite_service=invite_service,
            user_repository=user_repository,
            settings=settings,
        )

    @provide
    def get_sent_invites_use_case(
        self, invite_service: InviteService, settings: Settings
    ) -> GetSentInvitesUseCase:
        """Provide sent invites use case."""
        return GetSentInvitesUseCase(invite_service=invite_service, settings=settings)

    @provide
    def get_pending_invites_use_case(
        self,
        invite_service: InviteService,
        user_repository: UserRepository,
        settings: Settings,
    ) -> GetPendingInvitesUseCase:
        """Provide pending invites use case."""
        return GetPendingInvitesUseCase(
            invite_service=invite_service,
            user_repository=user_repository,
            settings=settings,
        )

    # Relationship use cases
    @provide
    def get_remove_friend_use_case(
        self, relationship_service: RelationshipService
    ) -> RemoveFriendUseCase:
        return RemoveFriendUseCase(relationship_service=relationship_service)

    @provide
    def get_end_partnership_use_case(
        self, relationship_service: RelationshipService
    ) -> EndPartnershipUseCase:
        return EndPartnershipUseCase(relationship_service=relationship_service)

    @provide
    def get_remove_collaborator_use_case(
        self, relationship_service: RelationshipService
    ) -> RemoveCollaboratorUseCase:
        return RemoveCollaboratorUseCase(relationship_service=relationship_service)

    # Sharing and search use cases
    @provide
    def get_shared_list_kinds_use_case(
        self, access_service: AccessService
    ) -> GetSharedListKindsUseCase:
        return GetSharedListKindsUseCase(access_service=access_service)

    @provide
    def get_friends_who_share_use_case(
        self, access_service: AccessService
    ) -> GetFriendsWhoShareUseCase:
        return GetFriendsWhoShareUseCase(access_service=access_service)

    @provide
    def get_search_users_use_case(
        self, access_service: AccessService
    ) -> SearchUsersUseCase:
        return SearchUsersUseCase(access_service=access_service)

    # Notification use cases
    @provide
    def get_notifications_use_case(
        self, notification_service: NotificationService
    ) -> GetNotificationsUseCase:
        return GetNotificationsUseCase(notification_service=notification_service)

    @provide
    def get_unread_count_use_case(
        self, notification_service: NotificationService
    ) -> GetUnreadCountUseCase:
        return GetUnreadCountUseCase(notification_service=notification_service)

    @provide
    def get_notification_summary_use_case(
        self, notification_service: NotificationService
    ) -> GetNotificationSummaryUseCase:
        return GetNotificationSummaryUseCase(notification_service=notification_service)

    @provide
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide
    def get_mark_all_notifications_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllNotificationsReadUseCase:
        return MarkAllNotificationsReadUseCase(
            notification_service=notification_service
        )

    @provide
    def get_clear_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ClearNotificationsUseCase:
        return ClearNotificationsUseCase(notification_service=notification_service)

    @provide
    def get_delete_notification_use_case(
        self, notification_service: NotificationService
    ) -> DeleteNotificationUseCase:
        return DeleteNotificationUseCase(notification_service=notification_service)
