"""Unit tests for HandleMemberJoinUseCase."""

import pytest

from gatekeeper.application.usecase.member import (
    HandleMemberJoinRequest,
    HandleMemberJoinUseCase,
)
from gatekeeper.config import Settings
from gatekeeper.domain.repository import AccountRepository
from gatekeeper.domain.service import GuildClient, InviteTrackingService
from gatekeeper.domain.value import (
    AccessTier,
    AttributionConfidence,
    InviteToken,
    SubscriptionStatus,
)
from tests.conftest import invites, make_account
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

GUILD_ID = 900000000000000001
MEMBER_ROLE = 900000000000000002
VISITOR_ROLE = 900000000000000003
MEMBER_ID = 700000000000000001


async def _setup(unit_env):
    settings = await unit_env.get(Settings)
    settings.discord.guild_id = GUILD_ID
    settings.discord.member_role_id = MEMBER_ROLE
    settings.discord.visitor_role_id = VISITOR_ROLE
    settings.community.name = "Drippy Finance"
    use_case = await unit_env.get(HandleMemberJoinUseCase)
    guild = await unit_env.get(GuildClient)
    repo = await unit_env.get(AccountRepository)
    tracking = await unit_env.get(InviteTrackingService)
    return use_case, guild, repo, tracking


def _join(member_id: int = MEMBER_ID, **overrides) -> HandleMemberJoinRequest:
    fields = dict(
        member_id=member_id, guild_id=GUILD_ID, username="satoshi", is_bot=False
    )
    fields.update(overrides)
    return HandleMemberJoinRequest(**fields)


class TestSkippedJoins:
    """Joins the bot does not act on."""

    @pytest.mark.asyncio
    async def test_bot_is_ignored(self, unit_env):
        """Other bots get no role and no message."""
        use_case, guild, _, _ = await _setup(unit_env)

        response = await use_case.execute(_join(is_bot=True))

        assert response.handled is False
        assert response.skipped_reason == "bot"
        assert guild.role_grants == []
        assert guild.messages == []
        assert guild.fetch_count == 0

    @pytest.mark.asyncio
    async def test_foreign_guild_is_ignored(self, unit_env):
        use_case, guild, _, _ = await _setup(unit_env)

        response = await use_case.execute(_join(guild_id=1))

        assert response.handled is False
        assert response.skipped_reason == "foreign guild"
        assert guild.role_grants == []


class TestSubscriberJoin:
    """Joins attributed to an active subscriber."""

    @pytest.mark.asyncio
    async def test_subscriber_gets_member_role(self, unit_env):
        """A consumed single-use invite links the account and grants access."""
        # Arrange
        use_case, guild, repo, tracking = await _setup(unit_env)
        account = await repo.save(make_account("single", name="Ada Lovelace"))
        await repo.save(make_account("someone-else"))
        guild.set_invites(("someone-else", 0))
        tracking.sync(invites(("single", 0), ("someone-else", 0)))
        tracking.record_deleted(InviteToken("single"))

        # Act
        response = await use_case.execute(_join())

        # Assert
        assert response.handled is True
        outcome = response.outcome
        assert outcome.attribution.token == InviteToken("single")
        assert outcome.attribution.confidence == AttributionConfidence.DELETION_MATCH
        assert outcome.tier == AccessTier.MEMBER
        assert outcome.account_id == account.id
        assert outcome.linked is True
        assert guild.role_grants == [(MEMBER_ID, MEMBER_ROLE)]

        linked = await repo.find_by_id(account.id)
        assert linked.member_id == MEMBER_ID
        assert linked.joined_at is not None

    @pytest.mark.asyncio
    async def test_subscriber_welcome_uses_first_name(self, unit_env):
        use_case, guild, repo, _ = await _setup(unit_env)
        await repo.save(make_account("only", name="Ada Lovelace"))
        guild.set_invites(("only", 1))

        response = await use_case.execute(_join())

        assert response.outcome.welcome_sent is True
        [(recipient, message)] = guild.messages
        assert recipient == MEMBER_ID
        assert message.startswith("Welcome to Drippy Finance, Ada!")
        assert "subscription is active" in message

    @pytest.mark.asyncio
    async def test_welcome_falls_back_to_username(self, unit_env):
        """Accounts without a display name are greeted by username."""
        use_case, guild, repo, _ = await _setup(unit_env)
        await repo.save(make_account("only", name=None))
        guild.set_invites(("only", 1))

        await use_case.execute(_join())

        [(_, message)] = guild.messages
        assert message.startswith("Welcome to Drippy Finance, satoshi!")


class TestVisitorJoin:
    """Joins that end in the restricted tier."""

    @pytest.mark.asyncio
    async def test_unattributed_join_gets_visitor_role(self, unit_env):
        """Every handled join ends up with a role."""
        # Arrange
        use_case, guild, repo, tracking = await _setup(unit_env)
        await repo.save(make_account("a"))
        await repo.save(make_account("b"))
        guild.set_invites(("a", 0), ("b", 0))
        tracking.sync(guild.invites)

        # Act
        response = await use_case.execute(_join())

        # Assert
        outcome = response.outcome
        assert outcome.attribution.confidence == AttributionConfidence.UNKNOWN
        assert outcome.tier == AccessTier.VISITOR
        assert outcome.account_id is None
        assert outcome.linked is False
        assert guild.role_grants == [(MEMBER_ID, VISITOR_ROLE)]
        [(_, message)] = guild.messages
        assert "couldn't automatically verify" in message

    @pytest.mark.asyncio
    async def test_lapsed_subscriber_is_linked_as_visitor(self, unit_env):
        """Attributed accounts are linked even without an active subscription."""
        # Arrange
        use_case, guild, repo, tracking = await _setup(unit_env)
        account = await repo.save(
            make_account("multi", status=SubscriptionStatus.CANCELED)
        )
        tracking.sync(invites(("multi", 3)))
        guild.set_invites(("multi", 4))

        # Act
        response = await use_case.execute(_join())

        # Assert
        outcome = response.outcome
        assert outcome.attribution.confidence == AttributionConfidence.DIFF
        assert outcome.tier == AccessTier.VISITOR
        assert outcome.linked is True
        assert guild.role_grants == [(MEMBER_ID, VISITOR_ROLE)]
        assert (await repo.find_by_id(account.id)).member_id == MEMBER_ID

    @pytest.mark.asyncio
    async def test_invite_without_account_gets_visitor(self, unit_env):
        """A public invite is attributed but has no account behind it."""
        use_case, guild, _, tracking = await _setup(unit_env)
        tracking.sync(invites(("public", 10)))
        guild.set_invites(("public", 11))

        response = await use_case.execute(_join())

        assert response.outcome.attribution.token == InviteToken("public")
        assert response.outcome.tier == AccessTier.VISITOR
        assert guild.role_grants == [(MEMBER_ID, VISITOR_ROLE)]


class TestCollaboratorFailures:
    """Failures after attribution never stop the remaining steps."""

    @pytest.mark.asyncio
    async def test_role_failure_still_sends_welcome(self, unit_env):
        use_case, guild, repo, _ = await _setup(unit_env)
        await repo.save(make_account("only"))
        guild.set_invites(("only", 1))
        guild.fail_role_grant = True

        response = await use_case.execute(_join())

        assert response.outcome.role_granted is False
        assert response.outcome.linked is True
        assert response.outcome.welcome_sent is True

    @pytest.mark.asyncio
    async def test_closed_inbox_is_not_an_error(self, unit_env):
        """Members who refuse DMs still get onboarded."""
        use_case, guild, repo, _ = await _setup(unit_env)
        await repo.save(make_account("only"))
        guild.set_invites(("only", 1))
        guild.closed_inboxes.add(MEMBER_ID)

        response = await use_case.execute(_join())

        assert response.handled is True
        assert response.outcome.role_granted is True
        assert response.outcome.welcome_sent is False
        assert guild.messages == []

    @pytest.mark.asyncio
    async def test_store_outage_falls_back_to_visitor(self, unit_env):
        """Without the account store a join is restricted, not dropped."""
        # Arrange
        use_case, guild, repo, tracking = await _setup(unit_env)
        tracking.sync(invites(("multi", 0)))
        guild.set_invites(("multi", 1))
        repo.fail_with = "connection refused"

        # Act
        response = await use_case.execute(_join())

        # Assert
        outcome = response.outcome
        assert outcome.attribution.confidence == AttributionConfidence.DIFF
        assert outcome.account_id is None
        assert outcome.tier == AccessTier.VISITOR
        assert guild.role_grants == [(MEMBER_ID, VISITOR_ROLE)]

    @pytest.mark.asyncio
    async def test_invite_list_outage_still_matches_deletion(self, unit_env):
        use_case, guild, repo, tracking = await _setup(unit_env)
        await repo.save(make_account("single"))
        await repo.save(make_account("other"))
        tracking.record_deleted(InviteToken("single"))
        guild.fail_invite_fetch = True

        response = await use_case.execute(_join())

        assert response.outcome.tier == AccessTier.MEMBER
        assert guild.role_grants == [(MEMBER_ID, MEMBER_ROLE)]
