"""Health API application.

Served by uvicorn in the same event loop as the gateway client so hosting
platforms can probe the process.
"""

from dishka import AsyncContainer
from fastapi import FastAPI

from gatekeeper.interface.api.routes import health
from gatekeeper.util.di.container import setup_di
from gatekeeper.util.observability import instrument_fastapi


def create_app(container: AsyncContainer) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.

    Args:
        container: The container shared with the gateway client
    """
    app_instance = FastAPI(
        title="Gatekeeper",
        description="Health endpoints for the Discord onboarding bot",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container)

    app_instance.include_router(health.router)

    return app_instance
