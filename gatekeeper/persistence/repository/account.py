"""PostgreSQL implementation of Account repository."""

import asyncio
from datetime import datetime
from typing import NoReturn, Optional

import logfire
from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.domain.error import StoreError
from gatekeeper.domain.model import Account
from gatekeeper.domain.repository import AccountRepository
from gatekeeper.domain.value import AccountId, InviteToken, MemberId, SubscriptionStatus
from gatekeeper.persistence.mappers import account_to_dict, row_to_account
from gatekeeper.persistence.tables import users_table

# Connection failures from asyncpg are raised as OSError, and
# command_timeout as asyncio.TimeoutError, without SQLAlchemy wrapping.
STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository.

    Database errors, unreachable hosts and statement timeouts roll back the
    session and surface as ``StoreError``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        stmt = select(users_table).where(users_table.c.id == account_id)
        row = await self._first(stmt)
        return row_to_account(row) if row else None

    async def find_by_invite_token(self, token: InviteToken) -> Optional[Account]:
        """Find an account by its issued invite code.

        Args:
            token: Invite token to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(users_table).where(
            users_table.c.discord_invite_code == token.root
        )
        row = await self._first(stmt)
        return row_to_account(row) if row else None

    async def find_pending(self, limit: int = 10) -> list[Account]:
        """Find accounts awaiting linkage, most recently updated first.

        Args:
            limit: Maximum number of results

        Returns:
            Pending accounts
        """
        stmt = (
            select(users_table)
            .where(
                and_(
                    users_table.c.discord_user_id.is_(None),
                    users_table.c.discord_invite_code.is_not(None),
                    users_table.c.subscription_status
                    == SubscriptionStatus.ACTIVE.value,
                )
            )
            .order_by(users_table.c.updated_at.desc())
            .limit(limit)
        )
        try:
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        except STORE_ERRORS as e:
            await self._fail("find_pending", e)
        return [row_to_account(dict(row)) for row in rows]

    async def link_identity(
        self, account_id: AccountId, member_id: MemberId, linked_at: datetime
    ) -> Optional[Account]:
        """Write the Discord member onto an account.

        Args:
            account_id: Account to update
            member_id: Discord member id
            linked_at: Join timestamp

        Returns:
            Updated account, None if no row matched
        """
        stmt = (
            update(users_table)
            .where(users_table.c.id == account_id)
            .values(
                discord_user_id=str(member_id),
                discord_joined_at=linked_at,
                updated_at=linked_at,
            )
            .returning(*users_table.c)
        )
        try:
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
        except STORE_ERRORS as e:
            await self._fail("link_identity", e)
        return row_to_account(dict(row)) if row else None

    async def unlink_identity(self, member_id: MemberId, unlinked_at: datetime) -> int:
        """Clear a Discord member from its account.

        Args:
            member_id: Discord member id
            unlinked_at: Timestamp written to ``updated_at``

        Returns:
            Number of rows updated
        """
        stmt = (
            update(users_table)
            .where(users_table.c.discord_user_id == str(member_id))
            .values(discord_user_id=None, updated_at=unlinked_at)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except STORE_ERRORS as e:
            await self._fail("unlink_identity", e)
        return result.rowcount or 0

    async def save(self, account: Account) -> Account:
        """Save an account (create or update).

        Args:
            account: Account to save

        Returns:
            Saved account
        """
        values = account_to_dict(account)
        try:
            existing = await self.find_by_id(account.id)
            if existing:
                stmt = (
                    update(users_table)
                    .where(users_table.c.id == account.id)
                    .values(**values)
                )
            else:
                stmt = insert(users_table).values(**values)
            await self.session.execute(stmt)
            await self.session.flush()
        except STORE_ERRORS as e:
            await self._fail("save", e)
        return account

    async def _first(self, stmt) -> Optional[dict]:
        try:
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        except STORE_ERRORS as e:
            await self._fail("select", e)
        return dict(row) if row else None

    async def _fail(self, operation: str, error: Exception) -> NoReturn:
        try:
            await self.session.rollback()
        except STORE_ERRORS as rollback_error:
            logfire.warn(
                "Account store rollback failed",
                operation=operation,
                error=str(rollback_error),
            )
        raise StoreError(f"Account store {operation} failed: {error}") from error
