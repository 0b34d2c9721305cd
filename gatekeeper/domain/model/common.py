"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    Updates go through ``model_copy(update=...)`` and produce a new instance.
    """

    model_config = ConfigDict(frozen=True)
