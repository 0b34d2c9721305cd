"""Account domain service."""

from datetime import datetime

import logfire

from gatekeeper.domain.model.account import Account, PendingIdentity
from gatekeeper.domain.repository import AccountRepository
from gatekeeper.domain.value import AccountId, InviteToken, MemberId

from .base import Service


class AccountService(Service):
    """Domain service for account lookup and Discord linkage.

    Repository errors (``StoreError``) propagate; callers decide whether a
    failure is fatal for their step.
    """

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
        """
        self.account_repository = account_repository

    async def list_pending_identities(self, limit: int = 10) -> list[PendingIdentity]:
        """List accounts awaiting linkage as attribution candidates.

        Args:
            limit: Maximum number of candidates

        Returns:
            Candidates, most recently updated first
        """
        with logfire.span("account_service.list_pending_identities", limit=limit):
            accounts = await self.account_repository.find_pending(limit)
            candidates = [
                PendingIdentity.from_account(account)
                for account in accounts
                if account.is_pending
            ]
            logfire.info(
                "Pending identities listed",
                count=len(candidates),
                tokens=[str(c.invite_token) for c in candidates],
            )
            return candidates

    async def get_by_invite_token(self, token: InviteToken) -> Account | None:
        """Get the account an invite was issued to.

        Args:
            token: Invite token

        Returns:
            Account if found, None otherwise
        """
        with logfire.span("account_service.get_by_invite_token", token=str(token)):
            account = await self.account_repository.find_by_invite_token(token)
            if account:
                logfire.info(
                    "Account found for invite",
                    token=str(token),
                    account_id=str(account.id),
                    subscription_status=account.subscription_status.value,
                )
            else:
                logfire.warn("No account for invite", token=str(token))
            return account

    async def link_member(
        self, account_id: AccountId, member_id: MemberId, linked_at: datetime
    ) -> Account | None:
        """Link a Discord member to an account.

        Args:
            account_id: Account to link
            member_id: Discord member id
            linked_at: Link timestamp

        Returns:
            Updated account, None if the account vanished
        """
        with logfire.span(
            "account_service.link_member",
            account_id=str(account_id),
            member_id=member_id,
        ):
            account = await self.account_repository.link_identity(
                account_id, member_id, linked_at
            )
            if account:
                logfire.info(
                    "Member linked", account_id=str(account_id), member_id=member_id
                )
            else:
                logfire.warn(
                    "Account missing at link time",
                    account_id=str(account_id),
                    member_id=member_id,
                )
            return account

    async def unlink_member(self, member_id: MemberId, unlinked_at: datetime) -> int:
        """Clear a departed member from its account.

        Args:
            member_id: Discord member id
            unlinked_at: Timestamp written to the account

        Returns:
            Number of accounts updated
        """
        with logfire.span("account_service.unlink_member", member_id=member_id):
            count = await self.account_repository.unlink_identity(
                member_id, unlinked_at
            )
            logfire.info("Member unlinked", member_id=member_id, count=count)
            return count
