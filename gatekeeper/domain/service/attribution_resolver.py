"""Invite attribution resolver.

A join event carries no invite code, so the resolver reconstructs it from
side evidence, strongest first:

1. Diff: a live invite's use counter went up since it was last cached.
   Works for multi-use invites.
2. Deletion match: a pending account's invite was deleted within the claim
   window. Single-use invites are deleted by the guild as they are
   consumed, typically just before the join event.
3. Existence fallback: a pending account's invite is missing from the live
   list, deleted at some point the ledger did not see (e.g. before a
   reconnect).
4. Sole candidate: exactly one pending account remains, so it is the best
   guess.

Collaborator failures never abort resolution. A failed invite fetch skips
steps 1 and 3; a failed pending-account query ends in ``UNKNOWN``.
"""

import logfire

from gatekeeper.domain.error import CollaboratorError
from gatekeeper.domain.model.account import PendingIdentity
from gatekeeper.domain.model.attribution import AttributionResult
from gatekeeper.domain.model.invite import InviteUsage
from gatekeeper.domain.value import AttributionConfidence, InviteToken
from gatekeeper.util.clock import Clock

from .account_service import AccountService
from .attribution_claims import AttributionClaimRegistry
from .base import Service
from .deleted_invite_ledger import DeletedInviteLedger
from .guild_client import GuildClient
from .invite_usage_cache import InviteUsageCache


class AttributionResolver(Service):
    """Decides which invite, if any, a joining member used.

    Each ``resolve`` call is independent. Shared state lives in the
    injected cache, ledger and claim registry, whose mutations are atomic;
    no lock is held while awaiting a collaborator.
    """

    def __init__(
        self,
        cache: InviteUsageCache,
        ledger: DeletedInviteLedger,
        claims: AttributionClaimRegistry,
        guild_client: GuildClient,
        account_service: AccountService,
        clock: Clock,
        pending_page_size: int = 10,
    ) -> None:
        """Initialize attribution resolver.

        Args:
            cache: Invite usage cache
            ledger: Deleted-invite ledger
            claims: Registry of tokens already attributed
            guild_client: Source of the live invite list
            account_service: Source of pending identities
            clock: Time source for claim windows
            pending_page_size: Maximum candidates considered
        """
        self.cache = cache
        self.ledger = ledger
        self.claims = claims
        self.guild_client = guild_client
        self.account_service = account_service
        self.clock = clock
        self.pending_page_size = pending_page_size

    async def resolve(self) -> AttributionResult:
        """Attribute the join currently being handled.

        Returns:
            The attributed token and confidence, or an ``UNKNOWN`` result
        """
        with logfire.span("attribution_resolver.resolve"):
            current = await self._fetch_current_invites()

            if current is not None:
                token = self.cache.diff(current)
                if token is not None:
                    self.claims.register(token)
                    return self._attributed(token, AttributionConfidence.DIFF)

            candidates = await self._fetch_candidates()
            if candidates is None:
                return self._unknown("pending identities unavailable")

            # Nothing below awaits, so filtering and claiming run as one step.
            now = self.clock.now()
            candidates = [
                candidate
                for candidate in candidates
                if candidate.subscription_active
                and not self.claims.is_claimed(candidate.invite_token, now)
            ]
            logfire.info("Attribution candidates", count=len(candidates))

            for candidate in candidates:
                if self.ledger.try_claim(candidate.invite_token, now):
                    self.claims.register(candidate.invite_token, now)
                    return self._attributed(
                        candidate.invite_token, AttributionConfidence.DELETION_MATCH
                    )

            if current is not None:
                live = {invite.token for invite in current}
                for candidate in candidates:
                    if candidate.invite_token in live:
                        continue
                    if self.claims.try_claim(candidate.invite_token, now):
                        logfire.info(
                            "Candidate invite no longer live",
                            token=str(candidate.invite_token),
                        )
                        return self._attributed(
                            candidate.invite_token,
                            AttributionConfidence.DELETION_MATCH,
                        )

            if len(candidates) == 1:
                token = candidates[0].invite_token
                if self.claims.try_claim(token, now):
                    return self._attributed(
                        token, AttributionConfidence.SOLE_CANDIDATE
                    )

            return self._unknown(
                "no evidence" if len(candidates) <= 1 else "ambiguous candidates"
            )

    async def _fetch_current_invites(self) -> list[InviteUsage] | None:
        try:
            return await self.guild_client.fetch_invites()
        except CollaboratorError as e:
            logfire.warn("Invite list unavailable, skipping diff", error=str(e))
            return None

    async def _fetch_candidates(self) -> list[PendingIdentity] | None:
        try:
            return await self.account_service.list_pending_identities(
                self.pending_page_size
            )
        except CollaboratorError as e:
            logfire.warn("Pending identities unavailable", error=str(e))
            return None

    @staticmethod
    def _attributed(
        token: InviteToken, confidence: AttributionConfidence
    ) -> AttributionResult:
        logfire.info(
            "Join attributed", token=str(token), confidence=confidence.value
        )
        return AttributionResult(token=token, confidence=confidence)

    @staticmethod
    def _unknown(reason: str) -> AttributionResult:
        logfire.info("Join not attributed", reason=reason)
        return AttributionResult.unknown()
