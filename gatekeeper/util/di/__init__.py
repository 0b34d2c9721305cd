"""Dependency injection wiring.

``PROVIDERS`` lists every provider the bot needs. Production and test
containers walk the same list and differ only in which implementation they
pick for each mockable component.
"""

from gatekeeper.util.di.application import ProdApplicationProvider
from gatekeeper.util.di.base import Component, ProviderBase
from gatekeeper.util.di.core import ProdAttributionStateProvider, ProdConfigProvider
from gatekeeper.util.di.domain import ProdDomainProvider
from gatekeeper.util.di.infrastructure import (
    ClockProvider,
    DiscordProvider,
    PersistenceProvider,
    ProdClockProvider,
    ProdDiscordProvider,
    ProdPersistenceProvider,
)
from gatekeeper.util.error import DependencyInjectionError

PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdAttributionStateProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ClockProvider,
    DiscordProvider,
    PersistenceProvider,
]


def get_provider(
    base: type[ProviderBase], use_mock: bool = False
) -> type[ProviderBase]:
    """Pick the implementation of a provider entry.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Whether to pick the test implementation of a component

    Returns:
        ``base`` itself if it has no subclasses, otherwise the subclass whose
        ``__is_mock__`` matches ``use_mock``

    Raises:
        DependencyInjectionError: If the component has no such implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if implementation.__is_mock__ == use_mock:
            return implementation

    raise DependencyInjectionError(
        f"No {'mock' if use_mock else 'production'} provider for "
        f"component {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdAttributionStateProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ClockProvider",
    "DiscordProvider",
    "PersistenceProvider",
    "ProdClockProvider",
    "ProdDiscordProvider",
    "ProdPersistenceProvider",
]
