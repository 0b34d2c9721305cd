"""PostgreSQL repository implementations."""

from gatekeeper.persistence.repository.account import PostgresAccountRepository

__all__ = [
    "PostgresAccountRepository",
]
