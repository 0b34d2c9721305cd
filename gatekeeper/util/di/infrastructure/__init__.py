"""Infrastructure providers."""

# Import bases
from .clock import ClockProvider
from .discord import DiscordProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .clock import ProdClockProvider  # noqa: F401
from .discord import ProdDiscordProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "ClockProvider",
    "DiscordProvider",
    "PersistenceProvider",
    "ProdClockProvider",
    "ProdDiscordProvider",
    "ProdPersistenceProvider",
]
