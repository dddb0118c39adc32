"""Notification module - Channel adapters and dispatch."""

from alertrelay.notification.base import NotificationService
from alertrelay.notification.connection import (
    ChatConnection,
    MessageType,
    XMPPChatConnection,
)
from alertrelay.notification.dispatcher import NotificationDispatcher
from alertrelay.notification.factory import get_notification_dispatcher
from alertrelay.notification.jabber import JabberNotificationService

__all__ = [
    "ChatConnection",
    "JabberNotificationService",
    "MessageType",
    "NotificationDispatcher",
    "NotificationService",
    "XMPPChatConnection",
    "get_notification_dispatcher",
]
