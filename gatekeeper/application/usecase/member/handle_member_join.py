"""Handle member join use case."""

import logfire
from pydantic import BaseModel

from gatekeeper.application.usecase.base import BaseUseCase
from gatekeeper.application.usecase.member.welcome import build_welcome_message
from gatekeeper.config import Settings
from gatekeeper.domain.error import SendSuppressedError, StoreError, TransportError
from gatekeeper.domain.model import Account, AttributionResult, OnboardingOutcome
from gatekeeper.domain.service import (
    AccountService,
    AttributionResolver,
    GuildClient,
    select_access_tier,
)
from gatekeeper.domain.value import AccessTier, MemberId, RoleId
from gatekeeper.util.clock import Clock


class HandleMemberJoinRequest(BaseModel):
    """Member joined notification."""

    member_id: int
    guild_id: int
    username: str
    is_bot: bool = False


class HandleMemberJoinResponse(BaseModel):
    """Member join handling result."""

    handled: bool
    outcome: OnboardingOutcome | None = None
    skipped_reason: str | None = None


class HandleMemberJoinUseCase(
    BaseUseCase[HandleMemberJoinRequest, HandleMemberJoinResponse]
):
    """Onboard a member who just joined the guild.

    Attributes the join to an invite, links the member to the invite's
    account, grants the member or visitor role and sends a welcome message.
    Every member who is not skipped ends up with a role, even when nothing
    could be attributed. Collaborator failures after attribution are
    logged and never undo earlier steps.
    """

    def __init__(
        self,
        attribution_resolver: AttributionResolver,
        account_service: AccountService,
        guild_client: GuildClient,
        clock: Clock,
        settings: Settings,
    ) -> None:
        """Initialize handle member join use case.

        Args:
            attribution_resolver: Invite attribution resolver
            account_service: Account domain service
            guild_client: Guild API client for roles and messages
            clock: Time source for link timestamps
            settings: Application settings
        """
        self.attribution_resolver = attribution_resolver
        self.account_service = account_service
        self.guild_client = guild_client
        self.clock = clock
        self.settings = settings

    async def execute(
        self, request: HandleMemberJoinRequest
    ) -> HandleMemberJoinResponse:
        """Handle a join.

        Args:
            request: Join details from the gateway

        Returns:
            Whether the join was handled and what was done
        """
        with logfire.span(
            "handle_member_join.execute",
            member_id=request.member_id,
            username=request.username,
        ):
            if request.is_bot:
                logfire.info("Ignoring bot user", member_id=request.member_id)
                return HandleMemberJoinResponse(handled=False, skipped_reason="bot")

            if request.guild_id != self.settings.discord.guild_id:
                logfire.info(
                    "Member joined different guild", guild_id=request.guild_id
                )
                return HandleMemberJoinResponse(
                    handled=False, skipped_reason="foreign guild"
                )

            member_id = MemberId(request.member_id)
            attribution = await self.attribution_resolver.resolve()
            account = await self._find_account(attribution)

            linked = False
            if account is not None:
                linked = await self._link(account, member_id)

            tier = select_access_tier(attribution, account)
            role_granted = await self._grant_role(member_id, tier)

            first_name = (account.first_name() if account else None) or request.username
            welcome_sent = await self._send_welcome(member_id, tier, first_name)

            outcome = OnboardingOutcome(
                member_id=member_id,
                attribution=attribution,
                tier=tier,
                account_id=account.id if account else None,
                linked=linked,
                role_granted=role_granted,
                welcome_sent=welcome_sent,
            )
            logfire.info(
                "Member onboarded",
                member_id=request.member_id,
                username=request.username,
                confidence=attribution.confidence.value,
                tier=tier.value,
                linked=linked,
            )
            return HandleMemberJoinResponse(handled=True, outcome=outcome)

    async def _find_account(self, attribution: AttributionResult) -> Account | None:
        if attribution.token is None:
            return None
        try:
            return await self.account_service.get_by_invite_token(attribution.token)
        except StoreError as e:
            logfire.error(
                "Account lookup failed", token=str(attribution.token), error=str(e)
            )
            return None

    async def _link(self, account: Account, member_id: MemberId) -> bool:
        try:
            linked = await self.account_service.link_member(
                account.id, member_id, self.clock.utcnow()
            )
        except StoreError as e:
            logfire.error(
                "Failed to link member to account",
                account_id=str(account.id),
                member_id=member_id,
                error=str(e),
            )
            return False
        return linked is not None

    async def _grant_role(self, member_id: MemberId, tier: AccessTier) -> bool:
        if tier == AccessTier.MEMBER:
            role_id = RoleId(self.settings.discord.member_role_id)
        else:
            role_id = RoleId(self.settings.discord.visitor_role_id)
        try:
            await self.guild_client.add_role(member_id, role_id)
        except TransportError as e:
            logfire.error(
                "Failed to assign role",
                member_id=member_id,
                role_id=role_id,
                tier=tier.value,
                error=str(e),
            )
            return False
        logfire.info("Role assigned", member_id=member_id, tier=tier.value)
        return True

    async def _send_welcome(
        self, member_id: MemberId, tier: AccessTier, first_name: str
    ) -> bool:
        message = build_welcome_message(
            self.settings.community.name,
            verified=tier == AccessTier.MEMBER,
            first_name=first_name,
        )
        try:
            await self.guild_client.send_direct_message(member_id, message)
        except SendSuppressedError as e:
            logfire.info("Could not send welcome DM", member_id=member_id, error=str(e))
            return False
        except TransportError as e:
            logfire.warn("Welcome DM failed", member_id=member_id, error=str(e))
            return False
        logfire.info("Sent welcome DM", member_id=member_id)
        return True
