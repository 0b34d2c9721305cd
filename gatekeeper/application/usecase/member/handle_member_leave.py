"""Handle member leave use case."""

import logfire
from pydantic import BaseModel

from gatekeeper.application.usecase.base import BaseUseCase
from gatekeeper.config import Settings
from gatekeeper.domain.error import StoreError
from gatekeeper.domain.service import AccountService
from gatekeeper.domain.value import MemberId
from gatekeeper.util.clock import Clock


class HandleMemberLeaveRequest(BaseModel):
    """Member left notification."""

    member_id: int
    guild_id: int


class HandleMemberLeaveResponse(BaseModel):
    """Member leave handling result."""

    unlinked: int = 0


class HandleMemberLeaveUseCase(
    BaseUseCase[HandleMemberLeaveRequest, HandleMemberLeaveResponse]
):
    """Unlink a departed member so a future rejoin can be matched again."""

    def __init__(
        self, account_service: AccountService, clock: Clock, settings: Settings
    ) -> None:
        self.account_service = account_service
        self.clock = clock
        self.settings = settings

    async def execute(
        self, request: HandleMemberLeaveRequest
    ) -> HandleMemberLeaveResponse:
        with logfire.span("handle_member_leave.execute", member_id=request.member_id):
            if request.guild_id != self.settings.discord.guild_id:
                return HandleMemberLeaveResponse()

            try:
                count = await self.account_service.unlink_member(
                    MemberId(request.member_id), self.clock.utcnow()
                )
            except StoreError as e:
                logfire.error(
                    "Error clearing Discord ID",
                    member_id=request.member_id,
                    error=str(e),
                )
                return HandleMemberLeaveResponse()

            if count:
                logfire.info(
                    "Cleared Discord ID for departed member",
                    member_id=request.member_id,
                )
            return HandleMemberLeaveResponse(unlinked=count)
