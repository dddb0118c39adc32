"""API Schemas - Pydantic models for request/response validation."""

from alertrelay.api.schemas.notification import (
    NotificationRequest,
    NotificationResponse,
)

__all__ = [
    "NotificationRequest",
    "NotificationResponse",
]
