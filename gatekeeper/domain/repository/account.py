"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from gatekeeper.domain.model.account import Account
from gatekeeper.domain.value import AccountId, InviteToken, MemberId


class AccountRepository(ABC):
    """Repository for subscriber accounts.

    The account store belongs to the web application; this service reads
    pending accounts and writes only the Discord linkage columns.
    Implementations raise ``StoreError`` when the store fails.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Account | None:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_invite_token(self, token: InviteToken) -> Account | None:
        """Find the account an invite code was issued to.

        Args:
            token: The invite token

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending(self, limit: int = 10) -> list[Account]:
        """Find accounts awaiting Discord linkage.

        Pending means: no linked member, an invite token issued, and an
        active subscription. Ordered by ``updated_at`` descending.

        Args:
            limit: Maximum number of results

        Returns:
            Pending accounts, most recently updated first
        """
        pass

    @abstractmethod
    async def link_identity(
        self, account_id: AccountId, member_id: MemberId, linked_at: datetime
    ) -> Account | None:
        """Attach a Discord member to an account.

        Idempotent: linking the same member again only refreshes timestamps.

        Args:
            account_id: Account to update
            member_id: Discord member id
            linked_at: Join/link timestamp

        Returns:
            The updated account, None if the account does not exist
        """
        pass

    @abstractmethod
    async def unlink_identity(self, member_id: MemberId, unlinked_at: datetime) -> int:
        """Clear the Discord member from whichever account holds it.

        Args:
            member_id: Discord member id
            unlinked_at: Timestamp written to ``updated_at``

        Returns:
            Number of accounts updated
        """
        pass

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: The account to save

        Returns:
            The saved account
        """
        pass
