"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from gatekeeper.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container with mocks for every component not in ``unmock``.

    Settings still come from the environment, so integration runs pick up
    ``DATABASE__URL`` from ``.env``.

    Args:
        unmock: Components to run with their production implementation

    Returns:
        Test container

    Raises:
        ValueError: If ``unmock`` names an unknown component

    Examples:
        # Unit tests - in-memory accounts, mock guild, manual clock
        container = build_test_container()

        # Integration tests - real PostgreSQL
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers)


def _validate_unmock(unmock: set[Component]) -> None:
    known = {base.__mock_component__ for base in PROVIDERS if base.__mock_component__}
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
