"""Repository interfaces.

Defined in the domain layer (dependency inversion); implementations live in
the persistence layer.
"""

from gatekeeper.domain.repository.account import AccountRepository

__all__ = [
    "AccountRepository",
]
