"""SQLAlchemy table definitions.

The ``users`` table is owned by the web application's migrations. Only the
columns this service reads or writes are declared.
"""

from sqlalchemy import Column, MetaData, String, Table, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE (subscriber accounts)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(255), nullable=False),
    Column("name", Text, nullable=True),
    Column("discord_invite_code", String(255), nullable=True),  # Issued invite
    Column("discord_user_id", String(32), nullable=True),  # Snowflake as text
    Column("discord_joined_at", TIMESTAMP(timezone=True), nullable=True),
    Column("subscription_status", String(32), nullable=True),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
