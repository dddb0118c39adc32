"""
Alert Relay - Notification Service Base Class

Abstract base class shared by every notification channel.
"""

from abc import ABC, abstractmethod
from typing import List

from alertrelay.core.schemas import ChannelHealth, ChannelStatus
from alertrelay.domain.models import Alert, Check, Subscription, SubscriptionType


class NotificationService(ABC):
    """Abstract base class for notification channels."""

    channel: str = "unknown"

    async def start(self) -> ChannelHealth:
        """
        Prepare the channel for sending.

        Channels without a session report connected. Implementations must not
        raise: start-up failures are reported through the returned health.
        """
        return self.health

    async def close(self) -> None:
        """Release any resources held by the channel."""

    @property
    def health(self) -> ChannelHealth:
        """Current health of the channel."""
        return ChannelHealth(channel=self.channel, status=ChannelStatus.CONNECTED)

    @abstractmethod
    def can_handle(self, subscription_type: SubscriptionType) -> bool:
        """
        Check whether this channel delivers a subscription type.

        Args:
            subscription_type: The subscription channel tag

        Returns:
            True if this channel handles the type
        """
        pass

    @abstractmethod
    async def send_notification(
        self,
        check: Check,
        subscription: Subscription,
        alerts: List[Alert],
    ) -> None:
        """
        Deliver a notification for a check to a subscription.

        Args:
            check: The check whose state changed
            subscription: The subscription to deliver to
            alerts: The alerts that triggered the notification

        Raises:
            NotificationFailedError: If the message could not be delivered
        """
        pass
