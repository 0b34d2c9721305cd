"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from gatekeeper.config import Settings
from gatekeeper.domain.service import (
    AttributionClaimRegistry,
    DeletedInviteLedger,
    InviteUsageCache,
)

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str


class AttributionStateResponse(BaseModel):
    """Sizes of the in-process attribution state."""

    cached_invites: int
    recent_deletions: int
    active_claims: int


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version="0.1.0",
        git_sha=settings.git_sha,
    )


@router.get("/health/attribution", response_model=AttributionStateResponse)
async def attribution_state(
    cache: FromDishka[InviteUsageCache],
    ledger: FromDishka[DeletedInviteLedger],
    claims: FromDishka[AttributionClaimRegistry],
) -> AttributionStateResponse:
    """Report how much attribution state the process holds.

    An empty cache after startup means the invite sync failed.
    """
    return AttributionStateResponse(
        cached_invites=len(cache),
        recent_deletions=ledger.live_count(),
        active_claims=len(claims),
    )
