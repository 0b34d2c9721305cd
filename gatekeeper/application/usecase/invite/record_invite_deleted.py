"""Record invite deleted use case."""

import logfire
from pydantic import BaseModel

from gatekeeper.application.usecase.base import BaseUseCase
from gatekeeper.domain.service import InviteTrackingService
from gatekeeper.domain.value import InviteToken


class RecordInviteDeletedRequest(BaseModel):
    """Invite deleted notification."""

    code: str


class RecordInviteDeletedResponse(BaseModel):
    """Clock reading stored for the deletion."""

    deleted_at: float


class RecordInviteDeletedUseCase(
    BaseUseCase[RecordInviteDeletedRequest, RecordInviteDeletedResponse]
):
    """Remember a deleted invite so the next join can claim it.

    Single-use invites are deleted as they are consumed, so this usually
    fires just before the join of the member who used it.
    """

    def __init__(self, invite_tracking: InviteTrackingService) -> None:
        self.invite_tracking = invite_tracking

    async def execute(
        self, request: RecordInviteDeletedRequest
    ) -> RecordInviteDeletedResponse:
        logfire.info("Invite deleted", code=request.code)
        record = self.invite_tracking.record_deleted(InviteToken(request.code))
        return RecordInviteDeletedResponse(deleted_at=record.deleted_at)
