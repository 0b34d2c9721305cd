"""Mappers between ``users`` rows and the Account domain model.

Discord snowflakes are stored as text by the web application.
"""

from datetime import datetime
from typing import Any, Dict
from uuid import UUID

from gatekeeper.domain.model import Account
from gatekeeper.domain.value import AccountId, InviteToken, MemberId, SubscriptionStatus


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    raw_id = row["id"]
    invite_code = row.get("discord_invite_code")
    member_id = row.get("discord_user_id")
    return Account(
        id=AccountId(UUID(raw_id) if isinstance(raw_id, str) else raw_id),
        email=row["email"],
        name=row.get("name"),
        invite_token=InviteToken(invite_code) if invite_code else None,
        member_id=MemberId(int(member_id)) if member_id else None,
        joined_at=row.get("discord_joined_at"),
        subscription_status=SubscriptionStatus.parse(row.get("subscription_status")),
        updated_at=row.get("updated_at") or datetime.now(),
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": account.id,
        "email": account.email,
        "name": account.name,
        "discord_invite_code": account.invite_token.root
        if account.invite_token
        else None,
        "discord_user_id": str(account.member_id)
        if account.member_id is not None
        else None,
        "discord_joined_at": account.joined_at,
        "subscription_status": account.subscription_status.value,
        "updated_at": account.updated_at,
    }
