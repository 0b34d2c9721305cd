"""Invite usage cache."""

import threading
from collections.abc import Iterable, Sequence

import logfire

from gatekeeper.domain.model.invite import InviteUsage
from gatekeeper.domain.value import InviteToken
from gatekeeper.util.clock import Clock

from .base import Service


class InviteUsageCache(Service):
    """Last observed use counter per live invite.

    Counters only move up: every update except ``resync`` applies
    ``max(cached, incoming)`` so a stale read can never roll a counter back.
    Deleted tokens are remembered for ``tombstone_seconds`` or until the next
    resync, so a list fetched before the deletion cannot bring them back.

    All operations are synchronous and run under one lock.
    """

    def __init__(self, clock: Clock, tombstone_seconds: float = 30.0) -> None:
        """Initialize cache.

        Args:
            clock: Time source for deletion markers
            tombstone_seconds: How long a deleted token stays ignored
        """
        self.clock = clock
        self.tombstone_seconds = tombstone_seconds
        self._uses: dict[InviteToken, int] = {}
        self._deleted: dict[InviteToken, float] = {}
        self._lock = threading.Lock()

    def resync(self, invites: Iterable[InviteUsage]) -> int:
        """Replace the cache with a fresh invite list.

        Args:
            invites: Complete live invite list

        Returns:
            Number of cached invites
        """
        fresh = {}
        for invite in invites:
            fresh[invite.token] = max(fresh.get(invite.token, 0), invite.uses)
        with self._lock:
            self._uses = fresh
            self._deleted = {}
            size = len(self._uses)
        logfire.info("Invite cache resynced", invite_count=size)
        return size

    def observe_created(self, token: InviteToken, uses: int = 0) -> int:
        """Upsert an invite's counter.

        Args:
            token: Invite token
            uses: Reported use count

        Returns:
            The cached count after the update
        """
        with self._lock:
            self._deleted.pop(token, None)
            return self._observe_locked(token, uses)

    def observe_deleted(self, token: InviteToken) -> bool:
        """Drop a deleted invite.

        Callers record the deletion in the ledger first so the token is
        never missing from both.

        Returns:
            True if the token was cached
        """
        now = self.clock.now()
        with self._lock:
            self._deleted[token] = now
            self._purge_deleted_locked(now)
            return self._uses.pop(token, None) is not None

    def diff(self, invites: Sequence[InviteUsage]) -> InviteToken | None:
        """Find the invite whose counter went up, refreshing the cache.

        Scans ``invites`` in the given order. Every scanned invite is folded
        into the cache in the same locked pass, so two concurrent diffs over
        the same increase cannot both report it.

        Args:
            invites: Freshly fetched invite list

        Returns:
            The first token whose count exceeds the cached count, or None
        """
        used: InviteToken | None = None
        now = self.clock.now()
        with self._lock:
            self._purge_deleted_locked(now)
            for invite in invites:
                if invite.token in self._deleted:
                    continue
                cached = self._uses.get(invite.token, 0)
                if used is None and invite.uses > cached:
                    used = invite.token
                self._observe_locked(invite.token, invite.uses)
        if used is not None:
            logfire.info("Invite counter increased", token=str(used))
        return used

    def get(self, token: InviteToken) -> int | None:
        """Cached count for a token, None if not cached."""
        with self._lock:
            return self._uses.get(token)

    def snapshot(self) -> dict[str, int]:
        """Copy of the cache keyed by raw token string."""
        with self._lock:
            return {token.root: uses for token, uses in self._uses.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._uses)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._uses

    def _observe_locked(self, token: InviteToken, uses: int) -> int:
        current = max(self._uses.get(token, 0), uses)
        self._uses[token] = current
        return current

    def _purge_deleted_locked(self, now: float) -> None:
        expired = [
            token
            for token, deleted_at in self._deleted.items()
            if now - deleted_at >= self.tombstone_seconds
        ]
        for token in expired:
            del self._deleted[token]
