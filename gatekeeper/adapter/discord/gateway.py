"""Discord gateway client.

Receives guild events over the gateway and hands each one to its use case
inside a fresh request scope. Handlers for different events may overlap
while they await I/O; the use cases are written for that.
"""

import sys
from typing import Any, TypeVar

import discord
import logfire
from dishka import AsyncContainer
from pydantic import BaseModel

from gatekeeper.application.usecase.base import BaseUseCase
from gatekeeper.application.usecase.invite import (
    RecordInviteCreatedRequest,
    RecordInviteCreatedUseCase,
    RecordInviteDeletedRequest,
    RecordInviteDeletedUseCase,
    SyncInvitesRequest,
    SyncInvitesUseCase,
)
from gatekeeper.application.usecase.member import (
    HandleMemberJoinRequest,
    HandleMemberJoinUseCase,
    HandleMemberLeaveRequest,
    HandleMemberLeaveUseCase,
)
from gatekeeper.config import Settings

UseCaseT = TypeVar("UseCaseT", bound=BaseUseCase)


def build_intents() -> discord.Intents:
    """Intents needed to track invites and members."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.members = True  # Privileged, enable in the developer portal
    intents.invites = True
    return intents


class GatekeeperBot(discord.Client):
    """Gateway client forwarding guild events to use cases."""

    def __init__(self, container: AsyncContainer, settings: Settings) -> None:
        """Initialize bot.

        Args:
            container: DI container, one request scope per event
            settings: Application settings
        """
        super().__init__(intents=build_intents())
        self.container = container
        self.settings = settings

    async def on_ready(self) -> None:
        logfire.info("Discord bot ready", user=str(self.user))
        if self.get_guild(self.settings.discord.guild_id) is None:
            logfire.error(
                "Bot is not in guild", guild_id=self.settings.discord.guild_id
            )
            return
        await self._run(SyncInvitesUseCase, SyncInvitesRequest(reason="ready"))

    async def on_resumed(self) -> None:
        await self._run(SyncInvitesUseCase, SyncInvitesRequest(reason="resumed"))

    async def on_invite_create(self, invite: discord.Invite) -> None:
        if not self._is_our_guild(invite.guild):
            return
        await self._run(
            RecordInviteCreatedUseCase,
            RecordInviteCreatedRequest(code=invite.code, uses=invite.uses or 0),
        )

    async def on_invite_delete(self, invite: discord.Invite) -> None:
        if not self._is_our_guild(invite.guild):
            return
        await self._run(
            RecordInviteDeletedUseCase, RecordInviteDeletedRequest(code=invite.code)
        )

    async def on_member_join(self, member: discord.Member) -> None:
        logfire.info("New member joined", username=member.name, member_id=member.id)
        await self._run(
            HandleMemberJoinUseCase,
            HandleMemberJoinRequest(
                member_id=member.id,
                guild_id=member.guild.id,
                username=member.name,
                is_bot=member.bot,
            ),
        )

    async def on_member_remove(self, member: discord.Member) -> None:
        logfire.info("Member left", username=member.name, member_id=member.id)
        await self._run(
            HandleMemberLeaveUseCase,
            HandleMemberLeaveRequest(member_id=member.id, guild_id=member.guild.id),
        )

    async def on_error(self, event_method: str, /, *args: Any, **kwargs: Any) -> None:
        logfire.error(
            "Discord event handler failed",
            event=event_method,
            _exc_info=sys.exc_info(),
        )

    def _is_our_guild(self, guild: Any) -> bool:
        return guild is not None and guild.id == self.settings.discord.guild_id

    async def _run(self, use_case_type: type[UseCaseT], request: BaseModel) -> Any:
        async with self.container() as request_container:
            use_case = await request_container.get(use_case_type)
            return await use_case.execute(request)
