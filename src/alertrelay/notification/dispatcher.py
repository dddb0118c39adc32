"""
Alert Relay - Notification Dispatcher

Routes a check notification to every subscription through the channel that
handles the subscription type.
"""

import time
from typing import List, Optional, Sequence

import structlog

from alertrelay.core.exceptions import NotificationFailedError
from alertrelay.core.schemas import ChannelHealth, DeliveryStatus, DispatchResult
from alertrelay.domain.models import Alert, Check, Subscription, SubscriptionType
from alertrelay.notification.base import NotificationService
from alertrelay.observability.metrics import record_notification

logger = structlog.get_logger()


class NotificationDispatcher:
    """Registry of notification channels."""
    
    def __init__(self, services: Sequence[NotificationService]):
        self.services = list(services)
    
    async def start(self) -> List[ChannelHealth]:
        """Start every channel and return their health."""
        results = []
        for service in self.services:
            health = await service.start()
            logger.info(
                "Notification channel started",
                channel=health.channel,
                status=health.status.value,
                error=health.error,
            )
            results.append(health)
        return results
    
    async def close(self) -> None:
        """Close every channel."""
        for service in self.services:
            await service.close()
    
    def health(self) -> List[ChannelHealth]:
        """Current health of every channel."""
        return [service.health for service in self.services]
    
    def service_for(self, subscription_type: SubscriptionType) -> Optional[NotificationService]:
        """Return the first channel that handles a subscription type."""
        for service in self.services:
            if service.can_handle(subscription_type):
                return service
        return None
    
    async def dispatch(
        self,
        check: Check,
        subscriptions: Sequence[Subscription],
        alerts: Optional[List[Alert]] = None,
    ) -> List[DispatchResult]:
        """
        Send a check notification to each subscription.
        
        Delivery failures are logged and reported in the results rather than
        raised, so one broken channel does not stop the others.
        
        Args:
            check: The check whose state changed
            subscriptions: Subscriptions of the check
            alerts: Alerts that triggered the notification
            
        Returns:
            One DispatchResult per subscription, in order
        """
        alerts = alerts or []
        results = []
        
        for subscription in subscriptions:
            if not subscription.should_notify(check.state):
                logger.debug(
                    "Subscription skipped",
                    subscription_id=subscription.id,
                    state=check.state.value,
                )
                results.append(self._result(subscription, DeliveryStatus.SKIPPED))
                continue
            
            service = self.service_for(subscription.type)
            if service is None:
                logger.warning(
                    "No notification channel for subscription type",
                    subscription_id=subscription.id,
                    subscription_type=subscription.type.value,
                )
                results.append(self._result(subscription, DeliveryStatus.UNHANDLED))
                continue
            
            started = time.perf_counter()
            try:
                await service.send_notification(check, subscription, alerts)
            except NotificationFailedError as e:
                logger.error(
                    "Notification failed",
                    channel=service.channel,
                    check_id=check.id,
                    subscription_id=subscription.id,
                    error=e.message,
                    cause=str(e.__cause__) if e.__cause__ else None,
                )
                record_notification(service.channel, DeliveryStatus.FAILED.value, time.perf_counter() - started)
                results.append(
                    self._result(subscription, DeliveryStatus.FAILED, channel=service.channel, error=e.message)
                )
                continue
            
            record_notification(service.channel, DeliveryStatus.SENT.value, time.perf_counter() - started)
            logger.info(
                "Notification sent",
                channel=service.channel,
                check_id=check.id,
                subscription_id=subscription.id,
            )
            results.append(self._result(subscription, DeliveryStatus.SENT, channel=service.channel))
        
        return results
    
    @staticmethod
    def _result(
        subscription: Subscription,
        status: DeliveryStatus,
        channel: Optional[str] = None,
        error: Optional[str] = None,
    ) -> DispatchResult:
        return DispatchResult(
            subscription_id=subscription.id,
            subscription_type=subscription.type,
            channel=channel,
            status=status,
            error=error,
        )
