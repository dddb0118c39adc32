"""
Alert Relay - Chat Connection

Owns the XMPP session used by the Jabber channel. The connection is an
injectable object so the channel can be exercised against a fake in tests.
"""

import asyncio
from enum import Enum
from typing import Any, Callable, Optional, Protocol

import slixmpp
import structlog
from slixmpp.exceptions import IqError, IqTimeout, PresenceError
from slixmpp.jid import InvalidJID
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from alertrelay.core.config import Settings
from alertrelay.core.exceptions import ChatConnectionError, NotConnectedError

logger = structlog.get_logger()


class MessageType(str, Enum):
    """XMPP message types used by the channel."""
    GROUP = "groupchat"
    DIRECT = "chat"


class ChatConnection(Protocol):
    """Protocol for chat connections."""

    @property
    def is_connected(self) -> bool:
        """Whether an authenticated session exists."""
        ...

    async def connect(self) -> None:
        """Open the stream and authenticate."""
        ...

    async def join_room(self, room: str, handle: str) -> None:
        """Join a multi-user room with the given nickname."""
        ...

    async def send_message(self, to: str, body: str, message_type: MessageType) -> None:
        """Send a message to a room or a single user."""
        ...

    async def disconnect(self) -> None:
        """Close the session."""
        ...


def build_jid(username: str, service_name: str) -> str:
    """Return the bare JID for a login name on a chat service."""
    if "@" in username or not service_name:
        return username
    return f"{username}@{service_name}"


async def connect_with_retry(
    connection: ChatConnection,
    attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 30.0,
) -> None:
    """
    Connect with exponential backoff.

    Args:
        connection: The chat connection to open
        attempts: Maximum number of connect attempts
        min_wait: Minimum wait between attempts (seconds)
        max_wait: Maximum wait between attempts (seconds)

    Raises:
        ChatConnectionError: If every attempt fails
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max(attempts, 1)),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(ChatConnectionError),
        reraise=True,
    ):
        with attempt:
            if attempt.retry_state.attempt_number > 1:
                logger.info(
                    "Retrying chat connection",
                    attempt=attempt.retry_state.attempt_number,
                )
            await connection.connect()


class XMPPChatConnection:
    """
    XMPP chat connection backed by slixmpp.

    Connect, join and send are serialized through a single lock so only one
    coroutine writes to the stream at a time.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        service_name: str,
        ping_interval: int = 60,
        connect_timeout: float = 30.0,
        use_tls: bool = True,
        client_factory: Optional[Callable[[str, str], Any]] = None,
    ):
        self.host = host
        self.port = port
        self.jid = build_jid(username, service_name)
        self.connect_timeout = connect_timeout
        self.use_tls = use_tls

        factory = client_factory or slixmpp.ClientXMPP
        self.client = factory(self.jid, password)
        self.client.register_plugin("xep_0030")
        self.client.register_plugin("xep_0045")
        self.client.register_plugin(
            "xep_0199",
            {"keepalive": True, "interval": ping_interval},
        )
        self.client.add_event_handler("session_start", self._on_session_start)
        self.client.add_event_handler("failed_auth", self._on_failed_auth)
        self.client.add_event_handler("connection_failed", self._on_connection_failed)
        self.client.add_event_handler("disconnected", self._on_disconnected)

        self._session_ready = False
        self._login_waiter: Optional[asyncio.Future] = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "XMPPChatConnection":
        """Create a connection from application settings."""
        return cls(
            host=settings.JABBER_HOST,
            port=settings.JABBER_PORT,
            username=settings.JABBER_USER,
            password=settings.JABBER_PASSWORD,
            service_name=settings.JABBER_SERVICE_NAME,
            ping_interval=settings.JABBER_PING_INTERVAL,
            connect_timeout=settings.JABBER_CONNECT_TIMEOUT,
            use_tls=settings.JABBER_USE_TLS,
        )

    @property
    def is_connected(self) -> bool:
        return self._session_ready

    async def connect(self) -> None:
        """
        Open the stream and wait for the authenticated session.

        Raises:
            ChatConnectionError: If authentication fails, the stream drops or
                the session does not start within the connect timeout
        """
        async with self._lock:
            if self._session_ready:
                return

            loop = asyncio.get_running_loop()
            self._login_waiter = loop.create_future()

            logger.info("Connecting to XMPP server", host=self.host, port=self.port, jid=self.jid)
            try:
                self.client.connect(
                    host=self.host,
                    port=self.port,
                    force_starttls=self.use_tls,
                    disable_starttls=not self.use_tls,
                )
                await asyncio.wait_for(self._login_waiter, timeout=self.connect_timeout)
            except asyncio.TimeoutError as e:
                self.client.disconnect()
                raise ChatConnectionError(
                    f"Timed out after {self.connect_timeout}s waiting for XMPP session"
                ) from e
            except ChatConnectionError:
                self.client.disconnect()
                raise
            finally:
                self._login_waiter = None

    async def join_room(self, room: str, handle: str) -> None:
        """
        Join a multi-user chat room.

        Raises:
            NotConnectedError: If no session exists
            ChatConnectionError: If the server rejects or times out the join
        """
        async with self._lock:
            if not self._session_ready:
                raise NotConnectedError(f"Cannot join {room}: not connected")

            try:
                await self.client.plugin["xep_0045"].join_muc_wait(
                    slixmpp.JID(room),
                    handle,
                    maxstanzas=0,
                    timeout=self.connect_timeout,
                )
            except InvalidJID as e:
                raise ChatConnectionError(f"Invalid room address {room}: {e}") from e
            except (PresenceError, IqError, IqTimeout, asyncio.TimeoutError) as e:
                raise ChatConnectionError(f"Could not join room {room}: {e}") from e

            logger.info("Joined chat room", room=room, handle=handle)

    async def send_message(self, to: str, body: str, message_type: MessageType) -> None:
        """
        Send a message.

        Raises:
            NotConnectedError: If no session exists
        """
        async with self._lock:
            if not self._session_ready:
                raise NotConnectedError(f"Cannot send to {to}: not connected")

            try:
                self.client.send_message(
                    mto=slixmpp.JID(to),
                    mbody=body,
                    mtype=message_type.value,
                )
            except InvalidJID as e:
                raise ChatConnectionError(f"Invalid recipient address {to}: {e}") from e
            except OSError as e:
                raise ChatConnectionError(f"Could not send to {to}: {e}") from e

    async def disconnect(self) -> None:
        """Close the session if one is open."""
        if not self._session_ready:
            return

        self._session_ready = False
        self.client.disconnect()
        logger.info("Disconnected from XMPP server", jid=self.jid)

    # -------------------------------------------------------------------------
    # slixmpp event handlers
    # -------------------------------------------------------------------------

    def _on_session_start(self, event: Any) -> None:
        self.client.send_presence()
        self._session_ready = True
        if self._login_waiter is not None and not self._login_waiter.done():
            self._login_waiter.set_result(True)
        logger.info("XMPP session started", jid=self.jid)

    def _on_failed_auth(self, event: Any) -> None:
        self._session_ready = False
        if self._login_waiter is not None and not self._login_waiter.done():
            self._login_waiter.set_exception(
                ChatConnectionError(f"Authentication failed for {self.jid}")
            )

    def _on_connection_failed(self, event: Any) -> None:
        # Fail the attempt now; backoff belongs to connect_with_retry
        self._session_ready = False
        if self._login_waiter is not None and not self._login_waiter.done():
            self._login_waiter.set_exception(
                ChatConnectionError(f"Could not reach XMPP server {self.host}:{self.port}: {event}")
            )

    def _on_disconnected(self, event: Any) -> None:
        was_ready = self._session_ready
        self._session_ready = False
        if self._login_waiter is not None and not self._login_waiter.done():
            self._login_waiter.set_exception(
                ChatConnectionError("Stream closed before the session started")
            )
        if was_ready:
            logger.warning("XMPP session lost", jid=self.jid)
