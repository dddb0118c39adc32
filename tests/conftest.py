"""
Alert Relay - Test Fixtures
"""

import os
from typing import AsyncGenerator, List, Optional, Set, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["APP_ENV"] = "test"
os.environ["JABBER_HOST"] = "localhost"
os.environ["JABBER_SERVICE_NAME"] = "chat.example.com"

from alertrelay.api.deps import get_dispatcher
from alertrelay.core.config import Settings
from alertrelay.core.exceptions import ChatConnectionError, NotConnectedError
from alertrelay.domain.models import Alert, AlertType, Check, Subscription, SubscriptionType
from alertrelay.main import app
from alertrelay.notification.base import NotificationService
from alertrelay.notification.connection import MessageType
from alertrelay.notification.dispatcher import NotificationDispatcher
from alertrelay.notification.jabber import JabberNotificationService


BASE_URL = "https://seyren.example.com"
SERVICE_NAME = "chat.example.com"
ROOM = "alerts@conference.chat.example.com"


# =============================================================================
# Fakes
# =============================================================================

class FakeChatConnection:
    """In-memory chat connection recording every message."""
    
    def __init__(self, connected: bool = True, fail_connect: bool = False):
        self.connected = connected
        self.fail_connect = fail_connect
        self.fail_send_to: Set[str] = set()
        self.connect_calls = 0
        self.joined: List[Tuple[str, str]] = []
        self.sent: List[Tuple[str, str, MessageType]] = []
        self.disconnected = False
    
    @property
    def is_connected(self) -> bool:
        return self.connected
    
    async def connect(self) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise ChatConnectionError("Connection refused")
        self.connected = True
    
    async def join_room(self, room: str, handle: str) -> None:
        if not self.connected:
            raise NotConnectedError()
        self.joined.append((room, handle))
    
    async def send_message(self, to: str, body: str, message_type: MessageType) -> None:
        if not self.connected:
            raise NotConnectedError(f"Cannot send to {to}: not connected")
        if to in self.fail_send_to:
            raise ChatConnectionError(f"Stream error while sending to {to}")
        self.sent.append((to, body, message_type))
    
    async def disconnect(self) -> None:
        self.connected = False
        self.disconnected = True


class RecordingNotificationService(NotificationService):
    """Notification channel that records calls for one subscription type."""
    
    def __init__(self, subscription_type: SubscriptionType, channel: str = "recording"):
        self.subscription_type = subscription_type
        self.channel = channel
        self.calls: List[Tuple[Check, Subscription, List[Alert]]] = []
    
    def can_handle(self, subscription_type: SubscriptionType) -> bool:
        return subscription_type == self.subscription_type
    
    async def send_notification(self, check, subscription, alerts) -> None:
        self.calls.append((check, subscription, alerts))


# =============================================================================
# Settings & Channel Fixtures
# =============================================================================

def make_settings(**overrides) -> Settings:
    """Build test settings without reading a .env file."""
    values = {
        "BASE_URL": BASE_URL,
        "JABBER_ENABLED": True,
        "JABBER_USER": "seyren",
        "JABBER_PASSWORD": "secret",
        "JABBER_SERVICE_NAME": SERVICE_NAME,
        "JABBER_ROOM": ROOM,
        "JABBER_HANDLE": "seyren-bot",
        "JABBER_RECONNECT_ATTEMPTS": 2,
        "JABBER_RECONNECT_MIN_WAIT": 0,
        "JABBER_RECONNECT_MAX_WAIT": 0,
        "JABBER_RECONNECT_ON_SEND": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def jabber_settings() -> Settings:
    """Jabber settings with a room and a service domain."""
    return make_settings()


@pytest.fixture
def fake_connection() -> FakeChatConnection:
    """A connected fake chat connection."""
    return FakeChatConnection()


@pytest.fixture
def jabber_service(
    jabber_settings: Settings, fake_connection: FakeChatConnection
) -> JabberNotificationService:
    """Jabber channel over the fake connection."""
    return JabberNotificationService(settings=jabber_settings, connection=fake_connection)


# =============================================================================
# Sample Data Fixtures
# =============================================================================

def make_check(state: AlertType = AlertType.ERROR, name: str = "CPU High", check_id: str = "abc123") -> Check:
    """Create a check in the given state."""
    return Check(id=check_id, name=name, state=state)


@pytest.fixture
def error_check() -> Check:
    """A check in ERROR state."""
    return make_check(AlertType.ERROR)


@pytest.fixture
def room_subscription() -> Subscription:
    """A Jabber subscription whose target is not a chat handle."""
    return Subscription(id="sub-room", target="ops-team", type=SubscriptionType.JABBER)


@pytest.fixture
def direct_subscription() -> Subscription:
    """A Jabber subscription targeting two users on the chat service."""
    return Subscription(
        id="sub-direct",
        target=f"alice@{SERVICE_NAME},bob@{SERVICE_NAME}",
        type=SubscriptionType.JABBER,
    )


@pytest.fixture
def sample_alert() -> Alert:
    """An alert that moved a check from OK to ERROR."""
    return Alert(
        id="alert-1",
        check_id="abc123",
        target="servers.web1.cpu",
        value=97.5,
        warn=80,
        error=95,
        from_type=AlertType.OK,
        to_type=AlertType.ERROR,
    )


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def dispatcher(jabber_service: JabberNotificationService) -> NotificationDispatcher:
    """Dispatcher with the fake-backed Jabber channel."""
    return NotificationDispatcher(services=[jabber_service])


@pytest_asyncio.fixture
async def client(dispatcher: NotificationDispatcher) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with the dispatcher override."""
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()


# =============================================================================
# Factory Fixtures
# =============================================================================

@pytest.fixture
def settings_factory():
    """Build settings with overrides."""
    return make_settings


@pytest.fixture
def check_factory():
    """Build checks in a given state."""
    return make_check


@pytest.fixture
def connection_factory():
    """Build fake chat connections."""
    return FakeChatConnection


@pytest.fixture
def recording_service_factory():
    """Build recording channels for a subscription type."""
    return RecordingNotificationService
