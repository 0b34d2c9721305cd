"""Production container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from gatekeeper.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container shared by the gateway client and the health API.

    Attribution state is APP-scoped, so both see the same cache, ledger and
    claim registry.

    Returns:
        Container with every production provider
    """
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the health API."""
    setup_dishka(container, app)
