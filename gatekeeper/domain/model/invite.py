"""Invite observations.

The guild's invitation system owns invites; this service only observes
their codes and use counters, and remembers recent deletions.
"""

from pydantic import Field

from gatekeeper.domain.model.common import DomainModel
from gatekeeper.domain.value import InviteToken


class InviteUsage(DomainModel):
    """Use counter of a live invite as reported by the guild."""

    token: InviteToken
    uses: int = Field(default=0, ge=0)


class DeletionRecord(DomainModel):
    """A deleted invite and the clock reading when the deletion was seen.

    Single-use invites are deleted by the guild the moment they are
    consumed, so a fresh record is evidence of a join in progress.
    """

    token: InviteToken
    deleted_at: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the deletion was recorded."""
        return now - self.deleted_at
