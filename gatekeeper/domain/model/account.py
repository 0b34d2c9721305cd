"""Account records from the external account store.

Accounts are created by the web application when someone subscribes. Each
carries the invite code issued to them and, once they join the guild, the
Discord member id linked to it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from gatekeeper.domain.model.common import DomainModel
from gatekeeper.domain.value import AccountId, InviteToken, MemberId, SubscriptionStatus


class Account(DomainModel):
    """Subscriber account."""

    id: AccountId
    email: str
    name: Optional[str] = None
    invite_token: Optional[InviteToken] = None
    member_id: Optional[MemberId] = None
    joined_at: Optional[datetime] = None
    subscription_status: SubscriptionStatus = SubscriptionStatus.INACTIVE
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def subscription_active(self) -> bool:
        """Whether the account currently pays for full access."""
        return self.subscription_status == SubscriptionStatus.ACTIVE

    @property
    def is_pending(self) -> bool:
        """Whether the account is waiting for its Discord identity."""
        return (
            self.member_id is None
            and self.invite_token is not None
            and self.subscription_active
        )

    def first_name(self) -> Optional[str]:
        """First word of the display name, if one is set."""
        if not self.name or not self.name.strip():
            return None
        return self.name.split()[0]


class PendingIdentity(DomainModel):
    """Read-only view of an account awaiting linkage.

    Candidates are ranked most recently updated first.
    """

    account_id: AccountId
    invite_token: InviteToken
    subscription_active: bool
    last_updated: datetime

    @classmethod
    def from_account(cls, account: Account) -> "PendingIdentity":
        """Project a pending account onto the candidate view."""
        if account.invite_token is None:
            raise ValueError(f"Account {account.id} has no invite token")
        return cls(
            account_id=account.id,
            invite_token=account.invite_token,
            subscription_active=account.subscription_active,
            last_updated=account.updated_at,
        )
