"""Stdlib logging for the libraries underneath the bot.

Application events go through Logfire. discord.py, httpx and uvicorn log
through the standard library and are configured here.
"""

import logging
import sys

from gatekeeper.config import Settings

# Chatty at INFO: gateway heartbeats, every HTTP request, every probe
QUIET_LOGGERS = ("discord", "httpx", "httpcore", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route library logs to stdout.

    Args:
        settings: Application settings, ``debug`` lowers the level
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Session lifecycle (connect, resume, reconnect) stays visible
    logging.getLogger("discord.gateway").setLevel(logging.INFO)
    logging.getLogger("discord.client").setLevel(logging.INFO)

    logging.getLogger("gatekeeper").setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``gatekeeper`` hierarchy."""
    return logging.getLogger(name)
