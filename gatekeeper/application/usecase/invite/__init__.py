"""Invite tracking use cases."""

from gatekeeper.application.usecase.invite.record_invite_created import (
    RecordInviteCreatedRequest,
    RecordInviteCreatedResponse,
    RecordInviteCreatedUseCase,
)
from gatekeeper.application.usecase.invite.record_invite_deleted import (
    RecordInviteDeletedRequest,
    RecordInviteDeletedResponse,
    RecordInviteDeletedUseCase,
)
from gatekeeper.application.usecase.invite.sync_invites import (
    SyncInvitesRequest,
    SyncInvitesResponse,
    SyncInvitesUseCase,
)

__all__ = [
    "RecordInviteCreatedRequest",
    "RecordInviteCreatedResponse",
    "RecordInviteCreatedUseCase",
    "RecordInviteDeletedRequest",
    "RecordInviteDeletedResponse",
    "RecordInviteDeletedUseCase",
    "SyncInvitesRequest",
    "SyncInvitesResponse",
    "SyncInvitesUseCase",
]
