"""
Alert Relay - Notification Schemas
"""

from typing import List

from pydantic import BaseModel, Field

from alertrelay.core.schemas import DeliveryStatus, DispatchResult
from alertrelay.domain.models import Alert, Check, Subscription


class NotificationRequest(BaseModel):
    """Schema for dispatching a check notification."""
    check: Check
    subscriptions: List[Subscription] = Field(..., min_length=1)
    alerts: List[Alert] = Field(default_factory=list)


class NotificationResponse(BaseModel):
    """Schema for dispatch results."""
    results: List[DispatchResult]
    sent: int = Field(default=0, description="Number of subscriptions delivered")
    failed: int = Field(default=0, description="Number of subscriptions that failed")

    @classmethod
    def from_results(cls, results: List[DispatchResult]) -> "NotificationResponse":
        return cls(
            results=results,
            sent=sum(1 for r in results if r.status == DeliveryStatus.SENT),
            failed=sum(1 for r in results if r.status == DeliveryStatus.FAILED),
        )
