"""Notification use cases."""

from marquee.application.usecase.notification.clear_notifications import (
    ClearNotificationsRequest,
    ClearNotificationsResponse,
    ClearNotificationsUseCase,
)
from marquee.application.usecase.notification.delete_notification import (
    DeleteNotificationRequest,
    DeleteNotificationResponse,
    DeleteNotificationUseCase,
)
from marquee.application.usecase.notification.get_notification_summary import (
    GetNotificationSummaryRequest,
    GetNotificationSummaryResponse,
    GetNotificationSummaryUseCase,
)
from marquee.application.usecase.notification.get_notifications import (
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
    NotificationItem,
)
from marquee.application.usecase.notification.get_unread_count import (
    GetUnreadCountRequest,
    GetUnreadCountResponse,
    GetUnreadCountUseCase,
)
from marquee.application.usecase.notification.mark_all_notifications_read import (
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadResponse,
    MarkAllNotificationsReadUseCase,
)
from marquee.application.usecase.notification.mark_notification_read import (
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
)

__all__ = [
    "ClearNotificationsRequest",
    "ClearNotificationsResponse",
    "ClearNotificationsUseCase",
    "DeleteNotificationRequest",
    "DeleteNotificationResponse",
    "DeleteNotificationUseCase",
    "GetNotificationSummaryRequest",
    "GetNotificationSummaryResponse",
    "GetNotificationSummaryUseCase",
    "GetNotificationsRequest",
    "GetNotificationsResponse",
    "GetNotificationsUseCase",
    "GetUnreadCountRequest",
    "GetUnreadCountResponse",
    "GetUnreadCountUseCase",
    "MarkAllNotificationsReadRequest",
    "MarkAllNotificationsReadResponse",
    "MarkAllNotificationsReadUseCase",
    "MarkNotificationReadRequest",
    "MarkNotificationReadResponse",
    "MarkNotificationReadUseCase",
    "NotificationItem",
]
