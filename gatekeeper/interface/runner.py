"""Process runner.

Starts the gateway client and, when enabled, the health API in one event
loop, and tears both down together.
"""

import asyncio

import uvicorn

from gatekeeper.adapter.discord.gateway import GatekeeperBot
from gatekeeper.config import Settings
from gatekeeper.interface.api.app import create_app
from gatekeeper.util.di.container import create_container
from gatekeeper.util.logging import get_logger
from gatekeeper.util.observability import instrument_httpx

logger = get_logger(__name__)


async def run(settings: Settings) -> None:
    """Run the bot until the gateway connection closes.

    Args:
        settings: Validated application settings
    """
    instrument_httpx()

    container = create_container()
    bot = GatekeeperBot(container=container, settings=settings)
    tasks = [bot.start(settings.discord.bot_token)]

    if settings.health.enabled:
        server = uvicorn.Server(
            uvicorn.Config(
                create_app(container),
                host=settings.health.host,
                port=settings.health.port,
                log_level="info",
            )
        )
        tasks.append(server.serve())

    try:
        await asyncio.gather(*tasks)
    finally:
        logger.info("Shutting down")
        if not bot.is_closed():
            await bot.close()
        await container.close()
