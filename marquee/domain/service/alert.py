"""Alert delivery port."""

from abc import ABC, abstractmethod

from marquee.domain.model import Notification


class AlertPusher(ABC):
    """Delivers a stored notification to the user's devices.

    Delivery is best-effort: it runs detached from the request that created
    the notification and its failures never reach that request.
    """

    @abstractmethod
    async def push(self, notification: Notification) -> None:
        """Deliver a notification."""
        pass
