"""Subscription status lookups."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from snaphabit.domain.billing import SubscriptionRecord, SubscriptionStatus


class SubscriptionRepository(Protocol):
    """Persistence interface for synced subscription rows."""

    def get_subscription(self, user_id: str) -> SubscriptionRecord | None:
        """Return the user's subscription row, if any."""


@dataclass
class SubscriptionService:
    """Service that reports whether a user currently has access."""

    repository: SubscriptionRepository

    def get_status(
        self, user_id: str, now: datetime | None = None
    ) -> SubscriptionStatus:
        """Return the subscription summary for a user."""
        record = self.repository.get_subscription(user_id)
        return SubscriptionStatus(
            has_subscription=record is not None,
            is_active=is_subscription_active(record, now or datetime.now(tz=UTC)),
            status=record.status if record else None,
        )


def is_subscription_active(record: SubscriptionRecord | None, now: datetime) -> bool:
    """Return True for an active lifetime purchase or an unexpired period."""
    if record is None or record.status != "active":
        return False
    if record.is_lifetime:
        return True
    if record.current_period_end is None:
        return False
    return record.current_period_end > now
