"""Tests for subscription service."""

from datetime import UTC, datetime, timedelta

from snaphabit.domain.billing import SubscriptionRecord
from snaphabit.services.subscriptions import (
    SubscriptionService,
    is_subscription_active,
)
from tests.conftest import InMemorySubscriptionRepository

NOW = datetime(2024, 3, 6, 12, tzinfo=UTC)


def _record(**overrides: object) -> SubscriptionRecord:
    values: dict[str, object] = {
        "user_id": "user-1",
        "status": "active",
        "current_period_end": NOW + timedelta(days=10),
    }
    values.update(overrides)
    return SubscriptionRecord(**values)  # type: ignore[arg-type]


def test_active_subscription_with_future_period() -> None:
    assert is_subscription_active(_record(), NOW)


def test_expired_period_is_inactive() -> None:
    assert not is_subscription_active(_record(current_period_end=NOW), NOW)


def test_non_active_status_is_inactive() -> None:
    assert not is_subscription_active(_record(status="canceled"), NOW)
    assert not is_subscription_active(None, NOW)


def test_lifetime_purchase_never_expires() -> None:
    record = _record(is_lifetime=True, current_period_end=None)

    assert is_subscription_active(record, NOW)


def test_get_status_summarises_record() -> None:
    repo = InMemorySubscriptionRepository()
    repo.records["user-1"] = _record(status="past_due")
    service = SubscriptionService(repo)

    status = service.get_status("user-1", now=NOW)
    missing = service.get_status("user-2", now=NOW)

    assert status.has_subscription
    assert not status.is_active
    assert status.status == "past_due"
    assert not missing.has_subscription
    assert missing.status is None
