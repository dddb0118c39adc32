"""
Alert Relay - Notification Factory

Builds the dispatcher and its channels from configuration.
"""

from typing import Optional

import structlog

from alertrelay.core.config import Settings, settings as default_settings
from alertrelay.notification.dispatcher import NotificationDispatcher

logger = structlog.get_logger()


def get_notification_dispatcher(
    settings: Optional[Settings] = None,
) -> NotificationDispatcher:
    """
    Create a dispatcher with every configured channel.
    
    Args:
        settings: Override the application settings
        
    Returns:
        NotificationDispatcher instance (not yet started)
    """
    from alertrelay.notification.jabber import JabberNotificationService
    
    settings = settings or default_settings
    
    logger.info(
        "Creating notification dispatcher",
        jabber_enabled=settings.JABBER_ENABLED,
        jabber_host=settings.JABBER_HOST,
    )
    
    return NotificationDispatcher(services=[JabberNotificationService(settings=settings)])
