"""Application layer DI providers."""

from dishka import Scope, provide

from gatekeeper.application.usecase.invite import (
    RecordInviteCreatedUseCase,
    RecordInviteDeletedUseCase,
    SyncInvitesUseCase,
)
from gatekeeper.application.usecase.member import (
    HandleMemberJoinUseCase,
    HandleMemberLeaveUseCase,
)
from gatekeeper.config import Settings
from gatekeeper.domain.service import (
    AccountService,
    AttributionResolver,
    GuildClient,
    InviteTrackingService,
)
from gatekeeper.util.clock import Clock
from gatekeeper.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invite tracking use cases
    @provide(scope=Scope.REQUEST)
    def get_sync_invites_use_case(
        self, guild_client: GuildClient, invite_tracking: InviteTrackingService
    ) -> SyncInvitesUseCase:
        """Provide sync invites use case."""
        return SyncInvitesUseCase(
            guild_client=guild_client, invite_tracking=invite_tracking
        )

    @provide(scope=Scope.REQUEST)
    def get_record_invite_created_use_case(
        self, invite_tracking: InviteTrackingService
    ) -> RecordInviteCreatedUseCase:
        """Provide record invite created use case."""
        return RecordInviteCreatedUseCase(invite_tracking=invite_tracking)

    @provide(scope=Scope.REQUEST)
    def get_record_invite_deleted_use_case(
        self, invite_tracking: InviteTrackingService
    ) -> RecordInviteDeletedUseCase:
        """Provide record invite deleted use case."""
        return RecordInviteDeletedUseCase(invite_tracking=invite_tracking)

    # Member use cases
    @provide(scope=Scope.REQUEST)
    def get_handle_member_join_use_case(
        self,
        attribution_resolver: AttributionResolver,
        account_service: AccountService,
        guild_client: GuildClient,
        clock: Clock,
        settings: Settings,
    ) -> HandleMemberJoinUseCase:
        """Provide handle member join use case."""
        return HandleMemberJoinUseCase(
            attribution_resolver=attribution_resolver,
            account_service=account_service,
            guild_client=guild_client,
            clock=clock,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_handle_member_leave_use_case(
        self, account_service: AccountService, clock: Clock, settings: Settings
    ) -> HandleMemberLeaveUseCase:
        """Provide handle member leave use case."""
        return HandleMemberLeaveUseCase(
            account_service=account_service, clock=clock, settings=settings
        )
