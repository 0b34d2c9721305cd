"""Base class for value objects."""

from typing import Generic, TypeVar

from pydantic import ConfigDict, RootModel

T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Base class for value objects wrapping one primitive.

    The primitive is exposed as ``.root`` and ``model_dump()`` returns it
    directly, so wrappers such as ``InviteToken`` serialize as plain strings.
    Instances are hashable and usable as dict keys.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """Return string representation of the root value."""
        return str(self.root)
