"""Test harness for unit and integration tests.

Integration tests assume PostgreSQL is reachable at ``DATABASE__URL`` and
the ``users`` table exists. Settings are loaded from environment variables.
"""

import pytest_asyncio

from gatekeeper.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a fresh test container and yields
    a request-scoped container for service access. App-scoped attribution
    state (cache, ledger, claims, clock, mock guild) is shared across
    everything resolved from that one container.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_find_pending(unit_env):
            repo = await unit_env.get(AccountRepository)
            assert await repo.find_pending() == []
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
