#!/usr/bin/env python3
"""Start the Discord bot with Logfire error tracking for startup errors."""

import asyncio
import sys

import logfire

from gatekeeper.config import Settings
from gatekeeper.interface.runner import run
from gatekeeper.util.error import ConfigurationError
from gatekeeper.util.logging import setup_logging
from gatekeeper.util.observability import configure_logfire


def main() -> int:
    """Validate configuration, start the bot and log startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    missing = settings.missing_required()
    if missing:
        error = ConfigurationError(missing)
        logfire.error("Invalid configuration", missing=missing)
        print(str(error), file=sys.stderr)
        return 1

    try:
        logfire.info("Starting Discord bot", guild_id=settings.discord.guild_id)
        asyncio.run(run(settings))
        return 0

    except KeyboardInterrupt:
        return 0

    except Exception as e:
        logfire.error(
            "Bot startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
