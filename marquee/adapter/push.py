"""Alert push adapters."""

import logfire

from marquee.domain.model import Notification
from marquee.domain.service.alert import AlertPusher


class LoggingAlertPusher(AlertPusher):
    """Records alert deliveries in the log.

    Stands in for a device push transport, which this service does not own.
    """

    async def push(self, notification: Notification) -> None:
        logfire.info(
            "Alert pushed",
            notification_id=str(notification.id),
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
        )


class MockAlertPusher(AlertPusher):
    """Mock pusher for testing: keeps delivered notifications, can be told to fail."""

    def __init__(self) -> None:
        self.pushed: list[Notification] = []
        self.fail_with: Exception | None = None

    async def push(self, notification: Notification) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.pushed.append(notification)
