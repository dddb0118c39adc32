"""
Alert Relay - Prometheus Metrics
"""

from prometheus_client import Counter, Gauge, Histogram, Info

# Application info
APP_INFO = Info(
    "alertrelay_app",
    "Alert Relay application information",
)
APP_INFO.info({
    "version": "0.1.0",
    "name": "alertrelay",
})

# Chat transport metrics
CHAT_MESSAGES_SENT_TOTAL = Counter(
    "alertrelay_chat_messages_sent_total",
    "Total number of chat messages handed to the chat connection",
    ["channel", "message_type"],
)

CHAT_CONNECTION_UP = Gauge(
    "alertrelay_chat_connection_up",
    "Whether the chat session of a channel is established (1) or not (0)",
    ["channel"],
)

CHAT_RECONNECTS_TOTAL = Counter(
    "alertrelay_chat_reconnects_total",
    "Total number of reconnect attempts triggered by a send",
    ["channel", "status"],
)

# Dispatch metrics
NOTIFICATIONS_TOTAL = Counter(
    "alertrelay_notifications_total",
    "Total number of subscription dispatches",
    ["channel", "status"],
)

NOTIFICATIONS_SUPPRESSED_TOTAL = Counter(
    "alertrelay_notifications_suppressed_total",
    "Total number of notifications dropped because the check state has no message",
    ["channel", "state"],
)

NOTIFICATION_DURATION = Histogram(
    "alertrelay_notification_duration_seconds",
    "Duration of a single subscription dispatch",
    ["channel"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
)


def record_notification(
    channel: str,
    status: str,
    duration_seconds: float,
) -> None:
    """Record metrics for a subscription dispatch."""
    NOTIFICATIONS_TOTAL.labels(
        channel=channel,
        status=status,
    ).inc()
    
    NOTIFICATION_DURATION.labels(
        channel=channel,
    ).observe(duration_seconds)


def record_connection_state(channel: str, connected: bool) -> None:
    """Record the current chat session state of a channel."""
    CHAT_CONNECTION_UP.labels(channel=channel).set(1 if connected else 0)
