"""Deleted-invite ledger."""

import threading

import logfire

from gatekeeper.domain.model.invite import DeletionRecord
from gatekeeper.domain.value import InviteToken
from gatekeeper.util.clock import Clock

from .base import Service


class DeletedInviteLedger(Service):
    """Short-lived record of invites the guild deleted.

    Single-use invites disappear when consumed, usually before the join
    event for the member who used them arrives. The ledger keeps each
    deletion for ``retention_seconds`` and lets a join claim it while it is
    younger than ``claim_window_seconds``.

    Expired entries are purged lazily on every access and are never
    returned, whether or not a purge has run yet.
    """

    def __init__(
        self,
        clock: Clock,
        retention_seconds: float = 30.0,
        claim_window_seconds: float = 10.0,
    ) -> None:
        """Initialize ledger.

        Args:
            clock: Time source for deletion timestamps
            retention_seconds: How long a deletion stays visible
            claim_window_seconds: Default maximum age for a successful claim
        """
        if claim_window_seconds > retention_seconds:
            raise ValueError("Claim window cannot exceed the retention window")
        self.clock = clock
        self.retention_seconds = retention_seconds
        self.claim_window_seconds = claim_window_seconds
        self._records: dict[InviteToken, DeletionRecord] = {}
        self._lock = threading.Lock()

    def record_deletion(
        self, token: InviteToken, now: float | None = None
    ) -> DeletionRecord:
        """Record that an invite was deleted.

        A later deletion of the same token replaces the earlier one.

        Args:
            token: Deleted invite token
            now: Clock reading, defaults to the injected clock

        Returns:
            The stored record
        """
        now = self.clock.now() if now is None else now
        record = DeletionRecord(token=token, deleted_at=now)
        with self._lock:
            self._records[token] = record
            purged = self._purge_locked(now)
        logfire.info("Invite deletion recorded", token=str(token), purged=purged)
        return record

    def try_claim(
        self,
        token: InviteToken,
        now: float | None = None,
        max_age: float | None = None,
    ) -> bool:
        """Consume a recent deletion of ``token``.

        The only way to get a positive match out of the ledger. Each
        recorded deletion can be claimed at most once.

        Args:
            token: Invite token to claim
            now: Clock reading, defaults to the injected clock
            max_age: Claim window in seconds, defaults to
                ``claim_window_seconds``

        Returns:
            True if a deletion younger than ``max_age`` was found and removed
        """
        now = self.clock.now() if now is None else now
        max_age = self.claim_window_seconds if max_age is None else max_age
        with self._lock:
            self._purge_locked(now)
            record = self._records.pop(token, None)
        if record is None:
            return False
        age = record.age(now)
        if age >= max_age:
            logfire.info(
                "Stale invite deletion discarded", token=str(token), age=age
            )
            return False
        logfire.info("Invite deletion claimed", token=str(token), age=age)
        return True

    def lookup(self, token: InviteToken, now: float | None = None) -> DeletionRecord | None:
        """Peek at a deletion without consuming it.

        Args:
            token: Invite token
            now: Clock reading, defaults to the injected clock

        Returns:
            The record if it is still within the retention window
        """
        now = self.clock.now() if now is None else now
        with self._lock:
            self._purge_locked(now)
            return self._records.get(token)

    def purge_expired(self, now: float | None = None) -> int:
        """Drop every deletion older than the retention window.

        Returns:
            Number of records removed
        """
        now = self.clock.now() if now is None else now
        with self._lock:
            return self._purge_locked(now)

    def live_count(self, now: float | None = None) -> int:
        """Number of deletions still within the retention window."""
        now = self.clock.now() if now is None else now
        with self._lock:
            self._purge_locked(now)
            return len(self._records)

    def _purge_locked(self, now: float) -> int:
        expired = [
            token
            for token, record in self._records.items()
            if record.age(now) >= self.retention_seconds
        ]
        for token in expired:
            del self._records[token]
        return len(expired)
