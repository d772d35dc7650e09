"""Tests for tracking service."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from snaphabit.services.errors import ProfileNotFoundError
from snaphabit.services.meals import MealService
from snaphabit.services.profiles import ProfileService
from snaphabit.services.tracking import TrackingService
from tests.conftest import (
    InMemoryMealRepository,
    InMemoryProfileRepository,
    make_meal,
    make_profile,
)


def _service(meals: list | None = None) -> TrackingService:
    profiles = InMemoryProfileRepository()
    profiles.profiles["user-1"] = make_profile()
    meal_repo = InMemoryMealRepository()
    meal_repo.meals = list(meals or [])
    return TrackingService(
        profile_service=ProfileService(profiles),
        meal_service=MealService(meal_repo),
    )


def test_get_daily_reports_totals_and_remaining() -> None:
    service = _service(
        [
            make_meal(datetime(2024, 3, 6, 8, tzinfo=UTC)),
            make_meal(datetime(2024, 3, 6, 13, tzinfo=UTC), 700, 130, 60, 20),
            make_meal(datetime(2024, 3, 5, 13, tzinfo=UTC)),
        ]
    )

    summary = service.get_daily("user-1", date(2024, 3, 6))

    assert summary.totals.calories == 1200
    assert summary.remaining.calories == 800
    assert summary.remaining.protein == 0
    assert summary.remaining.carbs == 90
    assert summary.macros_hit.protein
    assert summary.status.level == "partial"
    assert len(summary.meals) == 2


def test_get_daily_groups_in_user_timezone() -> None:
    service = _service([make_meal(datetime(2024, 3, 6, 23, 30, tzinfo=UTC))])

    tokyo = service.get_daily("user-1", date(2024, 3, 7), ZoneInfo("Asia/Tokyo"))
    utc = service.get_daily("user-1", date(2024, 3, 7))

    assert len(tokyo.meals) == 1
    assert utc.meals == []
    assert utc.status.level == "none"


def test_get_week_returns_days_and_stats() -> None:
    service = _service(
        [make_meal(datetime(2024, 3, 5, 12, tzinfo=UTC), 2000, 150, 200, 60)]
    )

    week, stats = service.get_week("user-1", date(2024, 3, 9))

    assert week.start_date == date(2024, 3, 4)
    assert stats.total_days == 1
    assert stats.best_day is not None
    assert stats.best_day.day == date(2024, 3, 5)


def test_get_month_returns_grade_and_breakdown() -> None:
    meals = [
        make_meal(datetime(2024, 3, day, 12, tzinfo=UTC), 2000, 150, 200, 60)
        for day in (1, 2, 3)
    ]
    service = _service(meals)

    report = service.get_month("user-1", 2024, 3)

    assert report.stats.days_tracked == 3
    assert report.stats.best_streak == 3
    assert report.grade == "A+"
    assert len(report.weeks) == 6
    assert report.month.days[:5] == [None] * 5


def test_tracking_requires_profile() -> None:
    service = _service()

    with pytest.raises(ProfileNotFoundError):
        service.get_daily("missing", date(2024, 3, 6))
