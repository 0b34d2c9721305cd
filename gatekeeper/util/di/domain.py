"""Domain layer DI providers."""

from dishka import Scope, provide

from gatekeeper.config import Settings
from gatekeeper.domain.repository import AccountRepository
from gatekeeper.domain.service import (
    AccountService,
    AttributionClaimRegistry,
    AttributionResolver,
    DeletedInviteLedger,
    GuildClient,
    InviteTrackingService,
    InviteUsageCache,
)
from gatekeeper.util.clock import Clock
from gatekeeper.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle. Each gateway event gets fresh service instances with their
    own transaction; the attribution state they wrap is APP-scoped.
    """

    scope = Scope.REQUEST

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_invite_tracking_service(
        self, cache: InviteUsageCache, ledger: DeletedInviteLedger
    ) -> InviteTrackingService:
        """Provide invite tracking domain service."""
        return InviteTrackingService(cache=cache, ledger=ledger)

    @provide
    def get_attribution_resolver(
        self,
        cache: InviteUsageCache,
        ledger: DeletedInviteLedger,
        claims: AttributionClaimRegistry,
        guild_client: GuildClient,
        account_service: AccountService,
        clock: Clock,
        settings: Settings,
    ) -> AttributionResolver:
        """Provide attribution resolver."""
        return AttributionResolver(
            cache=cache,
            ledger=ledger,
            claims=claims,
            guild_client=guild_client,
            account_service=account_service,
            clock=clock,
            pending_page_size=settings.attribution.pending_page_size,
        )
