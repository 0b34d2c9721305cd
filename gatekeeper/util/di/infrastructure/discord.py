"""Discord infrastructure providers."""

from dishka import Scope, provide

from gatekeeper.adapter.discord.client import RealDiscordGuildClient
from gatekeeper.config import Settings
from gatekeeper.domain.service import GuildClient
from gatekeeper.util.di.base import ProviderBase


class DiscordProvider(ProviderBase):
    """Discord component base."""

    __mock_component__ = "discord"


class ProdDiscordProvider(DiscordProvider):
    """Production Discord provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_guild_client(self, settings: Settings) -> GuildClient:
        """Provide Discord guild client.

        Returns:
            REST client for the configured guild

        Raises:
            ValueError: If the bot token or guild is not configured
        """
        if not settings.discord.bot_token:
            raise ValueError("Discord bot token must be configured")
        if not settings.discord.guild_id:
            raise ValueError("Discord guild ID must be configured")

        return RealDiscordGuildClient(
            bot_token=settings.discord.bot_token,
            guild_id=settings.discord.guild_id,
            api_base_url=settings.discord.api_base_url,
            timeout=settings.discord.request_timeout,
            max_retry_after=settings.discord.max_retry_after,
        )
