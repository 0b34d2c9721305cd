"""Claim registry for in-flight attributions."""

import threading

import logfire

from gatekeeper.domain.value import InviteToken
from gatekeeper.util.clock import Clock

from .base import Service


class AttributionClaimRegistry(Service):
    """Tokens recently attributed to a join.

    The account store only stops listing an account as pending once its
    linkage is written, which happens after attribution. Until then a
    concurrent join could see the same candidate. Every attribution is
    registered here and candidates with a live claim are skipped.

    Claims expire after ``ttl_seconds``.
    """

    def __init__(self, clock: Clock, ttl_seconds: float = 30.0) -> None:
        self.clock = clock
        self.ttl_seconds = ttl_seconds
        self._claims: dict[InviteToken, float] = {}
        self._lock = threading.Lock()

    def try_claim(self, token: InviteToken, now: float | None = None) -> bool:
        """Atomically claim ``token`` if nobody holds a live claim.

        Returns:
            True if this call took the claim
        """
        now = self.clock.now() if now is None else now
        with self._lock:
            self._expire_locked(now)
            if token in self._claims:
                return False
            self._claims[token] = now
        logfire.info("Attribution claimed", token=str(token))
        return True

    def register(self, token: InviteToken, now: float | None = None) -> None:
        """Record a claim unconditionally, refreshing an existing one."""
        now = self.clock.now() if now is None else now
        with self._lock:
            self._expire_locked(now)
            self._claims[token] = now

    def is_claimed(self, token: InviteToken, now: float | None = None) -> bool:
        """Whether ``token`` has a live claim."""
        now = self.clock.now() if now is None else now
        with self._lock:
            self._expire_locked(now)
            return token in self._claims

    def __len__(self) -> int:
        with self._lock:
            self._expire_locked(self.clock.now())
            return len(self._claims)

    def _expire_locked(self, now: float) -> None:
        expired = [
            token
            for token, claimed_at in self._claims.items()
            if now - claimed_at >= self.ttl_seconds
        ]
        for token in expired:
            del self._claims[token]
