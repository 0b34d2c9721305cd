"""Invite tracking domain service."""

import logfire

from gatekeeper.domain.model.invite import DeletionRecord, InviteUsage
from gatekeeper.domain.value import InviteToken

from .base import Service
from .deleted_invite_ledger import DeletedInviteLedger
from .invite_usage_cache import InviteUsageCache


class InviteTrackingService(Service):
    """Applies guild invite notifications to the cache and ledger."""

    def __init__(self, cache: InviteUsageCache, ledger: DeletedInviteLedger) -> None:
        self.cache = cache
        self.ledger = ledger

    def sync(self, invites: list[InviteUsage]) -> int:
        """Replace cached counters with the live invite list."""
        with logfire.span("invite_tracking.sync", invite_count=len(invites)):
            return self.cache.resync(invites)

    def record_created(self, token: InviteToken, uses: int = 0) -> int:
        """Start tracking a newly created invite."""
        with logfire.span("invite_tracking.record_created", token=str(token)):
            return self.cache.observe_created(token, uses)

    def record_deleted(self, token: InviteToken) -> DeletionRecord:
        """Move a deleted invite from the cache to the ledger.

        The ledger entry is written before the cache entry is dropped, so
        the token is always visible in one of them.
        """
        with logfire.span("invite_tracking.record_deleted", token=str(token)):
            record = self.ledger.record_deletion(token)
            was_cached = self.cache.observe_deleted(token)
            logfire.info(
                "Invite deleted", token=str(token), was_cached=was_cached
            )
            return record
