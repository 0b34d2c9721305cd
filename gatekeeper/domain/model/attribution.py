"""Attribution result entity."""

from typing import Optional

from gatekeeper.domain.model.common import DomainModel
from gatekeeper.domain.value import AttributionConfidence, InviteToken


class AttributionResult(DomainModel):
    """Outcome of resolving which invite a join used.

    Produced fresh for every join and never stored. ``token`` is set for
    every confidence except ``UNKNOWN``.
    """

    token: Optional[InviteToken] = None
    confidence: AttributionConfidence = AttributionConfidence.UNKNOWN

    @classmethod
    def unknown(cls) -> "AttributionResult":
        """Result for a join that could not be attributed."""
        return cls(token=None, confidence=AttributionConfidence.UNKNOWN)

    @property
    def is_attributed(self) -> bool:
        """Whether an invite token was identified."""
        return self.token is not None
