"""Domain value types for invite attribution and onboarding."""

from enum import Enum

from pydantic import field_validator

from gatekeeper.domain.value.common import RootValueObject


class InviteToken(RootValueObject[str]):
    """Opaque invite code issued by the guild's invitation system."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v


class AttributionConfidence(str, Enum):
    """Strength of the evidence behind an attribution, strongest first."""

    DIFF = "diff"
    DELETION_MATCH = "deletion_match"
    SOLE_CANDIDATE = "sole_candidate"
    UNKNOWN = "unknown"


class SubscriptionStatus(str, Enum):
    """Subscription states written by the billing side of the account store."""

    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value: str | None) -> "SubscriptionStatus":
        """Map a raw store value onto a status, unknown values are inactive."""
        try:
            return cls(value)
        except ValueError:
            return cls.INACTIVE


class AccessTier(str, Enum):
    """Access tier granted to a member on join."""

    MEMBER = "member"
    VISITOR = "visitor"
