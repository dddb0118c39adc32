"""
Alert Relay - Domain Models

Checks, subscriptions and alerts as received from the monitoring system.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AlertType(str, Enum):
    """State of a check."""
    UNKNOWN = "UNKNOWN"
    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"
    EXCEPTION = "EXCEPTION"


class SubscriptionType(str, Enum):
    """Delivery channel of a subscription."""
    EMAIL = "EMAIL"
    PAGERDUTY = "PAGERDUTY"
    HIPCHAT = "HIPCHAT"
    HUBOT = "HUBOT"
    FLOWDOCK = "FLOWDOCK"
    HTTP = "HTTP"
    IRCCAT = "IRCCAT"
    PUSHOVER = "PUSHOVER"
    SLACK = "SLACK"
    SNMP = "SNMP"
    TWILIO = "TWILIO"
    VICTOROPS = "VICTOROPS"
    JABBER = "JABBER"


class Check(BaseModel):
    """A monitored condition."""
    id: str = Field(..., description="Check identifier")
    name: str = Field(..., description="Human-readable check name")
    state: AlertType = Field(default=AlertType.UNKNOWN, description="Current state")
    description: Optional[str] = Field(None, description="Check description")
    target: Optional[str] = Field(None, description="Metric target expression")
    warn: Optional[float] = Field(None, description="Warning threshold")
    error: Optional[float] = Field(None, description="Error threshold")
    enabled: bool = Field(default=True, description="Whether the check is evaluated")


class Subscription(BaseModel):
    """Binds the alerts of a check to a delivery target."""
    id: Optional[str] = Field(None, description="Subscription identifier")
    target: str = Field(..., description="Comma-separated recipient addresses")
    type: SubscriptionType = Field(..., description="Delivery channel")
    enabled: bool = Field(default=True)
    ignore_warn: bool = Field(default=False)
    ignore_error: bool = Field(default=False)
    ignore_ok: bool = Field(default=False)

    def should_notify(self, state: AlertType) -> bool:
        """Return True if a check in ``state`` should be sent to this subscription."""
        if not self.enabled:
            return False
        if state == AlertType.WARN and self.ignore_warn:
            return False
        if state == AlertType.ERROR and self.ignore_error:
            return False
        if state == AlertType.OK and self.ignore_ok:
            return False
        return True


class Alert(BaseModel):
    """A point-in-time state transition of a check."""
    id: Optional[str] = None
    check_id: str
    target: Optional[str] = None
    value: Optional[float] = None
    warn: Optional[float] = None
    error: Optional[float] = None
    from_type: AlertType = AlertType.UNKNOWN
    to_type: AlertType = AlertType.UNKNOWN
    timestamp: Optional[datetime] = None
