"""Discord adapter."""

from .client import (
    DiscordGuildClient,
    MockDiscordGuildClient,
    RealDiscordGuildClient,
)

__all__ = ["DiscordGuildClient", "RealDiscordGuildClient", "MockDiscordGuildClient"]
