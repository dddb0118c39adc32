"""
Alert Relay - Jabber Notification Channel
"""

import asyncio
from typing import List, Optional

import structlog

from alertrelay.core.config import Settings, settings as default_settings
from alertrelay.core.exceptions import (
    ChatConnectionError,
    ConfigurationError,
    NotificationFailedError,
)
from alertrelay.core.schemas import ChannelHealth, ChannelStatus
from alertrelay.domain.models import Alert, AlertType, Check, Subscription, SubscriptionType
from alertrelay.notification.base import NotificationService
from alertrelay.notification.connection import (
    ChatConnection,
    MessageType,
    XMPPChatConnection,
    connect_with_retry,
)
from alertrelay.observability.metrics import (
    CHAT_MESSAGES_SENT_TOTAL,
    CHAT_RECONNECTS_TOTAL,
    NOTIFICATIONS_SUPPRESSED_TOTAL,
    record_connection_state,
)

logger = structlog.get_logger()


class JabberNotificationService(NotificationService):
    """
    Jabber/XMPP notification channel.

    Posts check state changes to the configured multi-user room and, when the
    subscription target lists addresses on the configured chat service, to
    each of those users directly.
    """

    channel = "jabber"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        connection: Optional[ChatConnection] = None,
    ):
        self.settings = settings or default_settings
        self.connection = connection or XMPPChatConnection.from_settings(self.settings)
        self._health = ChannelHealth(
            channel=self.channel,
            status=ChannelStatus.DEGRADED if self.settings.JABBER_ENABLED else ChannelStatus.DISABLED,
            error="Not started" if self.settings.JABBER_ENABLED else None,
        )
        self._reconnect_lock = asyncio.Lock()

    @property
    def health(self) -> ChannelHealth:
        return self._health

    async def start(self) -> ChannelHealth:
        """
        Connect, authenticate and join the configured room.

        Never raises: a misconfigured or unreachable server leaves the channel
        degraded and is reported through the returned health.
        """
        if not self.settings.JABBER_ENABLED:
            logger.info("Jabber channel disabled")
            return self._health

        try:
            await self._establish_session()
        except Exception as e:
            logger.error(
                "Could not connect to Jabber",
                host=self.settings.JABBER_HOST,
                port=self.settings.JABBER_PORT,
                room=self.settings.JABBER_ROOM,
                error=str(e),
            )
            self._set_health(ChannelStatus.DEGRADED, error=str(e))
            return self._health

        self._set_health(ChannelStatus.CONNECTED)
        return self._health

    async def close(self) -> None:
        await self.connection.disconnect()
        if self.settings.JABBER_ENABLED:
            self._set_health(ChannelStatus.DEGRADED, error="Closed")

    def can_handle(self, subscription_type: SubscriptionType) -> bool:
        return subscription_type == SubscriptionType.JABBER

    async def send_notification(
        self,
        check: Check,
        subscription: Subscription,
        alerts: List[Alert],
    ) -> None:
        """
        Send the check state to the room and to any direct recipients.

        Raises:
            NotificationFailedError: If any message could not be handed to the
                chat connection
        """
        if not self.settings.JABBER_ENABLED:
            raise NotificationFailedError("Jabber channel disabled", channel=self.channel)

        message = self.create_message(check)
        if not message:
            NOTIFICATIONS_SUPPRESSED_TOTAL.labels(
                channel=self.channel,
                state=check.state.value,
            ).inc()
            logger.info("Nothing to deliver", check_id=check.id, state=check.state.value)
            return

        if not self.connection.is_connected and self.settings.JABBER_RECONNECT_ON_SEND:
            await self._reconnect()

        room = self.settings.JABBER_ROOM
        if room:
            await self._deliver(room, message, MessageType.GROUP)

        for recipient in self._direct_recipients(subscription.target):
            await self._deliver(recipient, message, MessageType.DIRECT)

    def create_message(self, check: Check) -> str:
        """
        Format the chat message for a check.

        Returns:
            The message text, or an empty string for states that have no message
        """
        check_url = f"{self.settings.BASE_URL}/#/checks/{check.id}"

        if check.state == AlertType.ERROR:
            return f"CRITICAL: {check.name} | Please check {check_url}."
        if check.state == AlertType.WARN:
            return f"WARNING: {check.name} | Please check {check_url}."
        if check.state == AlertType.OK:
            return f"OK: {check.name} | {check_url}"

        logger.info("Unmanaged check state", state=check.state.value, check=check.name)
        return ""

    def _direct_recipients(self, target: str) -> List[str]:
        # Targets naming the chat service domain are treated as chat handles
        service_name = self.settings.JABBER_SERVICE_NAME
        if not service_name or service_name not in target:
            return []
        entries = [user.strip() for user in target.split(",")]
        recipients = [user for user in entries if user]
        if len(recipients) < len(entries):
            logger.debug(
                "Skipped empty recipients in subscription target",
                target=target,
                skipped=len(entries) - len(recipients),
            )
        return recipients

    async def _deliver(self, to: str, message: str, message_type: MessageType) -> None:
        try:
            await self.connection.send_message(to, message, message_type)
        except ChatConnectionError as e:
            logger.error(
                "Could not send Jabber message",
                to=to,
                message_type=message_type.value,
                error=str(e),
            )
            raise NotificationFailedError(
                "Could not send message",
                channel=self.channel,
                recipient=to,
            ) from e

        CHAT_MESSAGES_SENT_TOTAL.labels(
            channel=self.channel,
            message_type=message_type.value,
        ).inc()
        logger.debug("Jabber message sent", to=to, message_type=message_type.value)

    def _validate_settings(self) -> None:
        if not self.settings.JABBER_HOST:
            raise ConfigurationError("JABBER_HOST is required", setting="JABBER_HOST")
        if not self.settings.JABBER_USER:
            raise ConfigurationError("JABBER_USER is required", setting="JABBER_USER")

    async def _establish_session(self) -> None:
        self._validate_settings()
        await connect_with_retry(
            self.connection,
            attempts=self.settings.JABBER_RECONNECT_ATTEMPTS,
            min_wait=self.settings.JABBER_RECONNECT_MIN_WAIT,
            max_wait=self.settings.JABBER_RECONNECT_MAX_WAIT,
        )
        if self.settings.JABBER_ROOM:
            await self.connection.join_room(self.settings.JABBER_ROOM, self.settings.JABBER_HANDLE)

    async def _reconnect(self) -> None:
        async with self._reconnect_lock:
            # Another sender may have reconnected while we waited
            if self.connection.is_connected:
                return

            logger.warning("Jabber session down, reconnecting", host=self.settings.JABBER_HOST)
            try:
                await self._establish_session()
            except (ChatConnectionError, ConfigurationError) as e:
                CHAT_RECONNECTS_TOTAL.labels(channel=self.channel, status="failed").inc()
                logger.error("Jabber reconnect failed", error=str(e))
                self._set_health(ChannelStatus.DEGRADED, error=str(e))
                return

            CHAT_RECONNECTS_TOTAL.labels(channel=self.channel, status="success").inc()
            self._set_health(ChannelStatus.CONNECTED)

    def _set_health(self, status: ChannelStatus, error: Optional[str] = None) -> None:
        if not self.settings.JABBER_ENABLED:
            return
        self._health = ChannelHealth(channel=self.channel, status=status, error=error)
        record_connection_state(self.channel, status == ChannelStatus.CONNECTED)
