"""Onboarding outcome entity."""

from typing import Optional

from gatekeeper.domain.model.attribution import AttributionResult
from gatekeeper.domain.model.common import DomainModel
from gatekeeper.domain.value import AccessTier, AccountId, MemberId


class OnboardingOutcome(DomainModel):
    """What happened to a member who joined the guild."""

    member_id: MemberId
    attribution: AttributionResult
    tier: AccessTier
    account_id: Optional[AccountId] = None
    linked: bool = False
    role_granted: bool = False
    welcome_sent: bool = False
