"""Record invite created use case."""

import logfire
from pydantic import BaseModel, Field

from gatekeeper.application.usecase.base import BaseUseCase
from gatekeeper.domain.service import InviteTrackingService
from gatekeeper.domain.value import InviteToken


class RecordInviteCreatedRequest(BaseModel):
    """Invite created notification."""

    code: str
    uses: int = Field(default=0, ge=0)


class RecordInviteCreatedResponse(BaseModel):
    """Counter cached for the new invite."""

    uses: int


class RecordInviteCreatedUseCase(
    BaseUseCase[RecordInviteCreatedRequest, RecordInviteCreatedResponse]
):
    """Start tracking an invite created while connected."""

    def __init__(self, invite_tracking: InviteTrackingService) -> None:
        self.invite_tracking = invite_tracking

    async def execute(
        self, request: RecordInviteCreatedRequest
    ) -> RecordInviteCreatedResponse:
        logfire.info("New invite created", code=request.code)
        uses = self.invite_tracking.record_created(
            InviteToken(request.code), request.uses
        )
        return RecordInviteCreatedResponse(uses=uses)
