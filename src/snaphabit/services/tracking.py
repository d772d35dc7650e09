"""Dashboard views built from the current meal snapshot."""

from dataclasses import dataclass
from datetime import date, tzinfo

from snaphabit.domain.meals import DayTotals
from snaphabit.domain.periods import (
    DailySummary,
    MonthData,
    MonthlyStats,
    WeekAverages,
    WeekData,
    WeeklyStats,
)
from snaphabit.services.aggregation import (
    DEFAULT_TOLERANCE,
    calculate_day_totals,
    check_macros_hit,
    group_meals_by_day,
    macro_status,
    process_month_data,
    process_week_data,
    sanitize_meals,
)
from snaphabit.services.dates import day_key
from snaphabit.services.meals import MealService
from snaphabit.services.profiles import ProfileService
from snaphabit.services.stats import (
    calculate_monthly_stats,
    calculate_weekly_stats,
    grade_for_accuracy,
    overall_accuracy,
    weekly_breakdown,
)


@dataclass(frozen=True)
class MonthlyReport:
    """Month grid with its statistics and grade."""

    month: MonthData
    stats: MonthlyStats
    grade: str
    weeks: list[WeekAverages]


@dataclass
class TrackingService:
    """Service that recomputes day, week and month progress on demand."""

    profile_service: ProfileService
    meal_service: MealService
    tolerance: float = DEFAULT_TOLERANCE

    def get_daily(
        self, user_id: str, day: date, tz: tzinfo | None = None
    ) -> DailySummary:
        """Return totals and remaining budget for a single day."""
        profile = self.profile_service.require_profile(user_id)
        meals = sanitize_meals(self.meal_service.list_meals(user_id))
        day_meals = group_meals_by_day(meals, tz).get(day_key(day), [])
        totals = calculate_day_totals(day_meals)
        targets = profile.macro_targets
        hits = check_macros_hit(totals, targets, self.tolerance)
        return DailySummary(
            day=day,
            totals=totals,
            remaining=DayTotals(
                calories=max(0, targets.calories - totals.calories),
                protein=max(0, targets.protein - totals.protein),
                carbs=max(0, targets.carbs - totals.carbs),
                fat=max(0, targets.fat - totals.fat),
            ),
            macros_hit=hits,
            status=macro_status(hits),
            meals=day_meals,
        )

    def get_week(
        self, user_id: str, anchor: date, tz: tzinfo | None = None
    ) -> tuple[WeekData, WeeklyStats]:
        """Return the week containing ``anchor`` with its statistics."""
        profile = self.profile_service.require_profile(user_id)
        week = process_week_data(
            self.meal_service.list_meals(user_id),
            anchor,
            profile,
            tz=tz,
            tolerance=self.tolerance,
        )
        return week, calculate_weekly_stats(week, profile.macro_targets)

    def get_month(
        self, user_id: str, year: int, month: int, tz: tzinfo | None = None
    ) -> MonthlyReport:
        """Return the month grid, statistics and letter grade."""
        profile = self.profile_service.require_profile(user_id)
        month_data = process_month_data(
            self.meal_service.list_meals(user_id),
            year,
            month,
            profile,
            tz=tz,
            tolerance=self.tolerance,
        )
        stats = calculate_monthly_stats(month_data, profile.macro_targets)
        return MonthlyReport(
            month=month_data,
            stats=stats,
            grade=grade_for_accuracy(overall_accuracy(stats)),
            weeks=weekly_breakdown(month_data, profile.macro_targets),
        )
