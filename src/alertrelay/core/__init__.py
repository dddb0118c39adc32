"""Core module - Configuration, exceptions, logging and schemas."""

from alertrelay.core.config import settings
from alertrelay.core.exceptions import (
    AlertRelayError,
    ChatConnectionError,
    ConfigurationError,
    NotConnectedError,
    NotificationFailedError,
)
from alertrelay.core.schemas import (
    ChannelHealth,
    ChannelStatus,
    DeliveryStatus,
    DispatchResult,
)

__all__ = [
    # Config
    "settings",
    # Exceptions
    "AlertRelayError",
    "ChatConnectionError",
    "ConfigurationError",
    "NotConnectedError",
    "NotificationFailedError",
    # Schemas
    "ChannelHealth",
    "ChannelStatus",
    "DeliveryStatus",
    "DispatchResult",
]
