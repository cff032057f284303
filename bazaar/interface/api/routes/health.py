"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from bazaar.config import Settings
from bazaar.interface.api.errors import Envelope, envelope

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    environment: str
    realtime_enabled: bool


@router.get("/health", response_model=Envelope[HealthResponse])
async def health_check(settings: FromDishka[Settings]) -> Envelope[HealthResponse]:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return envelope(
        HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            version="0.1.0",
            git_sha=settings.git_sha,
            environment=settings.environment,
            realtime_enabled=settings.realtime_enabled,
        )
    )
