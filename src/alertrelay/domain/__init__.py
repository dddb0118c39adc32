"""Domain module - Checks, subscriptions and alerts."""

from alertrelay.domain.models import (
    Alert,
    AlertType,
    Check,
    Subscription,
    SubscriptionType,
)

__all__ = [
    "Alert",
    "AlertType",
    "Check",
    "Subscription",
    "SubscriptionType",
]
