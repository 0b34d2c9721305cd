"""Sync invites use case."""

import logfire
from pydantic import BaseModel

from gatekeeper.application.usecase.base import BaseUseCase
from gatekeeper.domain.error import TransportError
from gatekeeper.domain.service import GuildClient, InviteTrackingService


class SyncInvitesRequest(BaseModel):
    """Sync invites request."""

    reason: str = "ready"


class SyncInvitesResponse(BaseModel):
    """Sync invites response."""

    synced: bool
    invite_count: int = 0


class SyncInvitesUseCase(
    BaseUseCase[SyncInvitesRequest, SyncInvitesResponse]
):
    """Rebuild the invite cache from the live invite list.

    Runs when the gateway session becomes ready and again whenever it
    resumes, since invite events may have been missed while disconnected.
    """

    def __init__(
        self, guild_client: GuildClient, invite_tracking: InviteTrackingService
    ) -> None:
        self.guild_client = guild_client
        self.invite_tracking = invite_tracking

    async def execute(self, request: SyncInvitesRequest) -> SyncInvitesResponse:
        """Fetch invites and replace the cache.

        A failed fetch leaves the current cache untouched.
        """
        with logfire.span("sync_invites.execute", reason=request.reason):
            try:
                invites = await self.guild_client.fetch_invites()
            except TransportError as e:
                logfire.error(
                    "Failed to cache invites", reason=request.reason, error=str(e)
                )
                return SyncInvitesResponse(synced=False)

            count = self.invite_tracking.sync(invites)
            logfire.info("Cached invites", reason=request.reason, invite_count=count)
            return SyncInvitesResponse(synced=True, invite_count=count)
