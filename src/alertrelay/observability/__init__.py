"""Observability module - Prometheus metrics."""

from alertrelay.observability.metrics import (
    CHAT_CONNECTION_UP,
    CHAT_MESSAGES_SENT_TOTAL,
    CHAT_RECONNECTS_TOTAL,
    NOTIFICATION_DURATION,
    NOTIFICATIONS_SUPPRESSED_TOTAL,
    NOTIFICATIONS_TOTAL,
    record_connection_state,
    record_notification,
)

__all__ = [
    "CHAT_CONNECTION_UP",
    "CHAT_MESSAGES_SENT_TOTAL",
    "CHAT_RECONNECTS_TOTAL",
    "NOTIFICATION_DURATION",
    "NOTIFICATIONS_SUPPRESSED_TOTAL",
    "NOTIFICATIONS_TOTAL",
    "record_connection_state",
    "record_notification",
]
