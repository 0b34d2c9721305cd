"""Member onboarding use cases."""

from gatekeeper.application.usecase.member.handle_member_join import (
    HandleMemberJoinRequest,
    HandleMemberJoinResponse,
    HandleMemberJoinUseCase,
)
from gatekeeper.application.usecase.member.handle_member_leave import (
    HandleMemberLeaveRequest,
    HandleMemberLeaveResponse,
    HandleMemberLeaveUseCase,
)

__all__ = [
    "HandleMemberJoinRequest",
    "HandleMemberJoinResponse",
    "HandleMemberJoinUseCase",
    "HandleMemberLeaveRequest",
    "HandleMemberLeaveResponse",
    "HandleMemberLeaveUseCase",
]
