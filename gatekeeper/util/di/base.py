"""Provider base class."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a production and a test implementation:
#   clock       - system monotonic clock / manually advanced clock
#   discord     - Discord REST client / in-memory guild
#   persistence - PostgreSQL account store / in-memory accounts
Component = Literal["clock", "discord", "persistence"]


class ProviderBase(Provider):
    """Base for every provider in ``PROVIDERS``.

    A component base sets ``__mock_component__``; its subclasses set
    ``__is_mock__`` to say which implementation they are. Providers without
    subclasses are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
