"""
Alert Relay - Core Schemas

Pydantic models shared by the notification channels, the dispatcher and the API.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from alertrelay.domain.models import SubscriptionType


class ChannelStatus(str, Enum):
    """Connection status of a notification channel."""
    CONNECTED = "connected"
    DEGRADED = "degraded"
    DISABLED = "disabled"


class DeliveryStatus(str, Enum):
    """Outcome of dispatching one subscription."""
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"
    UNHANDLED = "unhandled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChannelHealth(BaseModel):
    """Health of a notification channel after start-up or the last reconnect."""
    channel: str = Field(..., description="Channel name")
    status: ChannelStatus = Field(..., description="Connection status")
    error: Optional[str] = Field(None, description="Last connection error, if any")
    checked_at: datetime = Field(default_factory=_utcnow, description="When the status was recorded")

    @computed_field
    @property
    def healthy(self) -> bool:
        """A disabled channel is not unhealthy, it is simply not in use."""
        return self.status != ChannelStatus.DEGRADED


class DispatchResult(BaseModel):
    """Result of dispatching a check notification to one subscription."""
    subscription_id: Optional[str] = Field(None, description="Subscription identifier")
    subscription_type: SubscriptionType = Field(..., description="Subscription channel type")
    channel: Optional[str] = Field(None, description="Channel that handled the subscription")
    status: DeliveryStatus = Field(..., description="Delivery outcome")
    error: Optional[str] = Field(None, description="Failure message, if any")
