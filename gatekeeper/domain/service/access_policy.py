"""Access tier selection."""

from gatekeeper.domain.model.account import Account
from gatekeeper.domain.model.attribution import AttributionResult
from gatekeeper.domain.value import AccessTier


def select_access_tier(
    attribution: AttributionResult, account: Account | None
) -> AccessTier:
    """Pick the tier for a joining member.

    Only an attributed join whose account has an active subscription gets
    the full tier; everything else is restricted.
    """
    if not attribution.is_attributed or account is None:
        return AccessTier.VISITOR
    if account.subscription_active:
        return AccessTier.MEMBER
    return AccessTier.VISITOR
