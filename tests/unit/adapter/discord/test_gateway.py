"""Unit tests for GatekeeperBot event dispatch."""

from types import SimpleNamespace

import pytest
import pytest_asyncio

from gatekeeper.adapter.discord.gateway import GatekeeperBot, build_intents
from gatekeeper.config import Settings
from gatekeeper.domain.repository import AccountRepository
from gatekeeper.domain.service import GuildClient, InviteUsageCache
from gatekeeper.domain.value import InviteToken
from tests.di import build_test_container

GUILD_ID = 900000000000000001
VISITOR_ROLE = 900000000000000003


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    settings = await container.get(Settings)
    settings.discord.guild_id = GUILD_ID
    settings.discord.visitor_role_id = VISITOR_ROLE
    yield container
    await container.close()


@pytest_asyncio.fixture
async def bot(container):
    settings = await container.get(Settings)
    return GatekeeperBot(container=container, settings=settings)


def _invite(code: str, uses: int | None = 0, guild_id: int = GUILD_ID):
    return SimpleNamespace(code=code, uses=uses, guild=SimpleNamespace(id=guild_id))


def _member(member_id: int, bot: bool = False, guild_id: int = GUILD_ID):
    return SimpleNamespace(
        id=member_id, name="satoshi", bot=bot, guild=SimpleNamespace(id=guild_id)
    )


class TestIntents:
    def test_tracks_members_and_invites(self):
        intents = build_intents()

        assert intents.guilds
        assert intents.members
        assert intents.invites
        assert not intents.message_content


class TestInviteEvents:
    """Invite notifications reach the cache and ledger."""

    @pytest.mark.asyncio
    async def test_invite_create_and_delete(self, bot, container):
        # Arrange
        cache = await container.get(InviteUsageCache)

        # Act
        await bot.on_invite_create(_invite("fresh", uses=None))
        created = InviteToken("fresh") in cache
        await bot.on_invite_delete(_invite("fresh"))

        # Assert
        assert created is True
        assert InviteToken("fresh") not in cache

    @pytest.mark.asyncio
    async def test_other_guild_invites_ignored(self, bot, container):
        cache = await container.get(InviteUsageCache)

        await bot.on_invite_create(_invite("elsewhere", guild_id=1))

        assert len(cache) == 0


class TestMemberEvents:
    """Member notifications are handled in their own request scope."""

    @pytest.mark.asyncio
    async def test_member_join_grants_role(self, bot, container):
        """An unattributable join still gets the visitor role."""
        guild = await container.get(GuildClient)

        await bot.on_member_join(_member(42))

        assert guild.role_grants == [(42, VISITOR_ROLE)]
        assert len(guild.messages) == 1

    @pytest.mark.asyncio
    async def test_bot_join_ignored(self, bot, container):
        guild = await container.get(GuildClient)

        await bot.on_member_join(_member(43, bot=True))

        assert guild.role_grants == []

    @pytest.mark.asyncio
    async def test_member_leave(self, bot, container):
        """Leaving runs without touching the guild API."""
        guild = await container.get(GuildClient)

        await bot.on_member_remove(_member(42))

        assert guild.role_grants == []
        assert guild.fetch_count == 0

    @pytest.mark.asyncio
    async def test_each_event_gets_fresh_store(self, container):
        """Request-scoped repositories are not shared between events."""
        async with container() as first:
            repo_a = await first.get(AccountRepository)
        async with container() as second:
            repo_b = await second.get(AccountRepository)

        assert repo_a is not repo_b
