"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from gatekeeper.config import Settings
from gatekeeper.domain.service import (
    AttributionClaimRegistry,
    DeletedInviteLedger,
    InviteUsageCache,
)
from gatekeeper.util.clock import Clock
from gatekeeper.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()


class ProdAttributionStateProvider(ProviderBase):
    """Process-wide attribution state.

    One cache, ledger and claim registry per running process, shared by
    every event handled. Rebuilt from the live invite list on restart.
    """

    scope = Scope.APP

    @provide
    def get_invite_usage_cache(
        self, clock: Clock, settings: Settings
    ) -> InviteUsageCache:
        """Provide the invite usage cache."""
        return InviteUsageCache(
            clock=clock, tombstone_seconds=settings.attribution.retention_seconds
        )

    @provide
    def get_deleted_invite_ledger(
        self, clock: Clock, settings: Settings
    ) -> DeletedInviteLedger:
        """Provide the deleted-invite ledger."""
        return DeletedInviteLedger(
            clock=clock,
            retention_seconds=settings.attribution.retention_seconds,
            claim_window_seconds=settings.attribution.claim_window_seconds,
        )

    @provide
    def get_claim_registry(
        self, clock: Clock, settings: Settings
    ) -> AttributionClaimRegistry:
        """Provide the attribution claim registry."""
        return AttributionClaimRegistry(
            clock=clock, ttl_seconds=settings.attribution.retention_seconds
        )
