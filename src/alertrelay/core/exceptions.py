"""
Alert Relay - Custom Exceptions
"""

from typing import Any, Dict, Optional


class AlertRelayError(Exception):
    """Base exception for Alert Relay."""
    
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(AlertRelayError):
    """Raised when the configuration is invalid."""
    
    def __init__(self, message: str, setting: str = "unknown"):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting},
        )


class ChatConnectionError(AlertRelayError):
    """Raised when the chat connection cannot be established or used."""
    
    def __init__(self, message: str, connection_type: str = "xmpp"):
        super().__init__(
            message=message,
            code="CONNECTION_ERROR",
            details={"connection_type": connection_type},
        )


class NotConnectedError(ChatConnectionError):
    """Raised when a chat operation is attempted without a live session."""
    
    def __init__(self, message: str = "Not connected", connection_type: str = "xmpp"):
        super().__init__(message, connection_type=connection_type)
        self.code = "NOT_CONNECTED"


class NotificationFailedError(AlertRelayError):
    """Raised when a notification channel fails to deliver a message."""
    
    def __init__(
        self,
        message: str,
        channel: str = "unknown",
        recipient: Optional[str] = None,
    ):
        super().__init__(
            message=message,
            code="NOTIFICATION_FAILED",
            details={"channel": channel, "recipient": recipient},
        )
