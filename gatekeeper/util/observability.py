"""Logfire setup and library instrumentation.

Every attribution decision is logged with its evidence tier, so a wrong
role can be traced back to the join that caused it. Invite codes are public
and logged in full; the bot token and ``Authorization`` headers are scrubbed.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from gatekeeper.config import Settings

# Attribute names Logfire redacts on top of its defaults
SCRUB_PATTERNS = ["bot_token", "authorization"]


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the bot process.

    Telemetry goes to Logfire cloud when ``OBSERVABILITY__SEND_TO_LOGFIRE``
    says so, or when a token is configured and the flag is unset. Otherwise
    events only reach the console.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name="gatekeeper-bot",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        git_sha=settings.git_sha,
    )


def _should_send(settings: Settings) -> bool:
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def instrument_fastapi(app: FastAPI) -> None:
    """Trace requests to the health API."""
    logfire.instrument_fastapi(app)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace account store queries.

    Args:
        engine: Engine for the account store
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace Discord REST calls made through httpx."""
    logfire.instrument_httpx()
