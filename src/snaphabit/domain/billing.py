"""Subscription domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SubscriptionRecord:
    """Subscription row synced from the billing provider."""

    user_id: str
    status: str | None
    current_period_end: datetime | None
    is_lifetime: bool = False
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None


@dataclass(frozen=True)
class SubscriptionStatus:
    """Access summary for a user's subscription."""

    has_subscription: bool
    is_active: bool
    status: str | None
