"""Daily login tracking and login streaks."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

STREAK_LOOKBACK_DAYS = 100


class LoginRepository(Protocol):
    """Persistence interface for daily logins."""

    def record_login(self, user_id: str, day: date) -> None:
        """Upsert a login row for the day."""

    def list_login_days(self, user_id: str, limit: int) -> list[date]:
        """Return recent login days, newest first."""

    def count_login_days(self, user_id: str) -> int:
        """Return how many distinct days the user has logged in."""


@dataclass
class LoginService:
    """Service for recording logins and computing login streaks."""

    repository: LoginRepository

    def record_login(self, user_id: str, today: date) -> None:
        self.repository.record_login(user_id, today)

    def get_streak(self, user_id: str, today: date) -> int:
        """Return consecutive login days ending today or yesterday."""
        days = self.repository.list_login_days(user_id, STREAK_LOOKBACK_DAYS)
        return login_streak(days, today)

    def get_total_days(self, user_id: str) -> int:
        return self.repository.count_login_days(user_id)

    def get_last_login(self, user_id: str) -> date | None:
        days = self.repository.list_login_days(user_id, 1)
        return days[0] if days else None


def login_streak(days: Iterable[date], today: date) -> int:
    """Count calendar-consecutive login days.

    Counting starts at today, or at yesterday when today has no login
    yet, and stops at the first missing day.
    """
    logged = set(days)
    check = today if today in logged else today - timedelta(days=1)
    streak = 0
    while check in logged:
        streak += 1
        check -= timedelta(days=1)
    return streak
