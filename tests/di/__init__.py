"""Mock providers for testing."""

from .clock import MockClockProvider
from .discord import MockDiscordProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockClockProvider",
    "MockDiscordProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
