"""Domain services."""

from .access_policy import select_access_tier
from .account_service import AccountService
from .attribution_claims import AttributionClaimRegistry
from .attribution_resolver import AttributionResolver
from .base import Service
from .deleted_invite_ledger import DeletedInviteLedger
from .guild_client import GuildClient
from .invite_tracking_service import InviteTrackingService
from .invite_usage_cache import InviteUsageCache

__all__ = [
    "AccountService",
    "AttributionClaimRegistry",
    "AttributionResolver",
    "DeletedInviteLedger",
    "GuildClient",
    "InviteTrackingService",
    "InviteUsageCache",
    "Service",
    "select_access_tier",
]
