"""Clock infrastructure providers."""

from dishka import Scope, provide

from gatekeeper.util.clock import Clock, SystemClock
from gatekeeper.util.di.base import ProviderBase


class ClockProvider(ProviderBase):
    """Clock component base."""

    __mock_component__ = "clock"


class ProdClockProvider(ClockProvider):
    """Production clock provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide the operating system clock."""
        return SystemClock()
