"""Alert push infrastructure providers."""

from dishka import Scope, provide

from marquee.adapter.push import LoggingAlertPusher
from marquee.domain.service import AlertPusher
from marquee.util.di.base import ProviderBase


class PushProvider(ProviderBase):
    """Alert push component base."""

    __mock_component__ = "push"


class ProdPushProvider(PushProvider):
    """Production push provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_alert_pusher(self) -> AlertPusher:
        """Provide alert pusher."""
        return LoggingAlertPusher()
