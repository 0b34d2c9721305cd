"""In-memory account repository for testing."""

from datetime import datetime
from typing import Optional

from gatekeeper.domain.error import StoreError
from gatekeeper.domain.model import Account
from gatekeeper.domain.repository import AccountRepository
from gatekeeper.domain.value import AccountId, InviteToken, MemberId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    Set ``fail_with`` to make every call raise ``StoreError``.
    """

    def __init__(self) -> None:
        self._accounts: list[Account] = []
        self.fail_with: str | None = None

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        self._check()
        for account in self._accounts:
            if account.id == account_id:
                return account
        return None

    async def find_by_invite_token(self, token: InviteToken) -> Optional[Account]:
        """Find an account by invite token."""
        self._check()
        for account in self._accounts:
            if account.invite_token == token:
                return account
        return None

    async def find_pending(self, limit: int = 10) -> list[Account]:
        """Find pending accounts, most recently updated first."""
        self._check()
        pending = [account for account in self._accounts if account.is_pending]
        pending.sort(key=lambda account: account.updated_at, reverse=True)
        return pending[:limit]

    async def link_identity(
        self, account_id: AccountId, member_id: MemberId, linked_at: datetime
    ) -> Optional[Account]:
        """Link a member to an account."""
        self._check()
        for i, account in enumerate(self._accounts):
            if account.id == account_id:
                linked = account.model_copy(
                    update={
                        "member_id": member_id,
                        "joined_at": linked_at,
                        "updated_at": linked_at,
                    }
                )
                self._accounts[i] = linked
                return linked
        return None

    async def unlink_identity(self, member_id: MemberId, unlinked_at: datetime) -> int:
        """Clear a member from its accounts."""
        self._check()
        count = 0
        for i, account in enumerate(self._accounts):
            if account.member_id == member_id:
                self._accounts[i] = account.model_copy(
                    update={"member_id": None, "updated_at": unlinked_at}
                )
                count += 1
        return count

    async def save(self, account: Account) -> Account:
        """Save an account (create or update)."""
        self._check()
        for i, existing in enumerate(self._accounts):
            if existing.id == account.id:
                self._accounts[i] = account
                return account
        self._accounts.append(account)
        return account

    def _check(self) -> None:
        if self.fail_with:
            raise StoreError(self.fail_with)
