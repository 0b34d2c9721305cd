"""Strongly typed identifiers.

Account ids come from the account store (UUID primary keys); member ids
are Discord snowflakes.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
MemberId = NewType("MemberId", int)
RoleId = NewType("RoleId", int)
