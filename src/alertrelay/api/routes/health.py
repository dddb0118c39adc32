"""
Alert Relay - Health Check Routes
"""

from datetime import datetime, timezone
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from alertrelay import __version__
from alertrelay.api.deps import get_dispatcher
from alertrelay.core.config import settings
from alertrelay.core.schemas import ChannelHealth
from alertrelay.notification.dispatcher import NotificationDispatcher

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str
    environment: str
    channels: List[ChannelHealth]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> HealthResponse:
    """
    Health check endpoint.
    
    Reports ``degraded`` when any enabled channel has no chat session.
    """
    channels = dispatcher.health()
    overall = "healthy" if all(c.healthy for c in channels) else "degraded"
    
    return HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        environment=settings.APP_ENV,
        channels=channels,
    )


@router.get("/ready")
async def readiness_check(
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> Dict[str, str]:
    """
    Readiness check for Kubernetes.
    
    Ready once the dispatcher exists. A degraded channel does not make the
    service unready, it still accepts and reports failed dispatches.
    """
    if not dispatcher.services:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No notification channels configured",
        )
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """Liveness check for Kubernetes."""
    return {"status": "alive"}
