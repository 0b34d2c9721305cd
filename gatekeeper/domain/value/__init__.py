"""Domain value objects."""

from gatekeeper.domain.value.identifiers import AccountId, MemberId, RoleId
from gatekeeper.domain.value.types import (
    AccessTier,
    AttributionConfidence,
    InviteToken,
    SubscriptionStatus,
)

__all__ = [
    # Identifiers
    "AccountId",
    "MemberId",
    "RoleId",
    # Types
    "AccessTier",
    "AttributionConfidence",
    "InviteToken",
    "SubscriptionStatus",
]
