"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from gatekeeper.domain.model import Account, InviteUsage
from gatekeeper.domain.value import AccountId, InviteToken, SubscriptionStatus

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_account(
    token: str | None,
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    name: str | None = "Ada Lovelace",
    member_id: int | None = None,
    updated_offset: int = 0,
) -> Account:
    """Build an account issued ``token``.

    Args:
        token: Invite code, None for accounts without one
        status: Subscription status
        name: Display name
        member_id: Linked Discord member, None while pending
        updated_offset: Seconds after ``BASE_TIME`` the account was updated,
            higher ranks first among pending candidates
    """
    return Account(
        id=AccountId(uuid4()),
        email=f"{token or 'nobody'}@example.com",
        name=name,
        invite_token=InviteToken(token) if token else None,
        member_id=member_id,
        subscription_status=status,
        updated_at=BASE_TIME + timedelta(seconds=updated_offset),
    )


def invites(*pairs: tuple[str, int]) -> list[InviteUsage]:
    """Build an invite list from ``(code, uses)`` pairs."""
    return [InviteUsage(token=InviteToken(code), uses=uses) for code, uses in pairs]
