"""Domain model entities."""

from gatekeeper.domain.model.account import Account, PendingIdentity
from gatekeeper.domain.model.attribution import AttributionResult
from gatekeeper.domain.model.invite import DeletionRecord, InviteUsage
from gatekeeper.domain.model.onboarding import OnboardingOutcome

__all__ = [
    "Account",
    "AttributionResult",
    "DeletionRecord",
    "InviteUsage",
    "OnboardingOutcome",
    "PendingIdentity",
]
