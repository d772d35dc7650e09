"""Weekly and monthly statistics over aggregated day data."""

from collections.abc import Iterable

from snaphabit.domain.periods import (
    DayData,
    MonthData,
    MonthlyStats,
    WeekAverages,
    WeekData,
    WeeklyStats,
)
from snaphabit.domain.profile import MacroTargets
from snaphabit.services.aggregation import count_macros_hit
from snaphabit.services.dates import DAYS_PER_WEEK

GRADE_THRESHOLDS: list[tuple[float, str]] = [
    (90, "A+"),
    (85, "A"),
    (80, "B+"),
    (75, "B"),
    (70, "C+"),
    (65, "C"),
    (60, "D"),
    (50, "D-"),
]


def calculate_weekly_stats(week: WeekData, targets: MacroTargets) -> WeeklyStats:
    """Summarise the tracked days of a week.

    Days without meals are left out of every average and rate. Ties for
    best and worst day go to the earliest day.
    """
    tracked = [day for day in week.days if day.has_data]
    total_days = len(tracked)
    if total_days == 0:
        return WeeklyStats(
            avg_calories=0,
            protein_hit_rate=0,
            carbs_hit_rate=0,
            fat_hit_rate=0,
            protein_hit_days=0,
            carbs_hit_days=0,
            fat_hit_days=0,
            total_days=0,
            best_day=None,
            worst_day=None,
        )

    protein_days, carbs_days, fat_days = _hit_days(tracked)
    best_day = worst_day = tracked[0]
    for day in tracked[1:]:
        score = count_macros_hit(day.macros_hit)
        if score > count_macros_hit(best_day.macros_hit):
            best_day = day
        if score < count_macros_hit(worst_day.macros_hit):
            worst_day = day

    return WeeklyStats(
        avg_calories=_average(day.calories for day in tracked),
        protein_hit_rate=protein_days / total_days * 100,
        carbs_hit_rate=carbs_days / total_days * 100,
        fat_hit_rate=fat_days / total_days * 100,
        protein_hit_days=protein_days,
        carbs_hit_days=carbs_days,
        fat_hit_days=fat_days,
        total_days=total_days,
        best_day=best_day,
        worst_day=worst_day,
    )


def calculate_monthly_stats(month: MonthData, targets: MacroTargets) -> MonthlyStats:
    """Summarise the tracked days of a month, including hit streaks.

    A streak counts consecutive tracked days with every macro hit. Days
    without meals are skipped, so only a tracked miss resets it.
    """
    calendar_days = [day for day in month.days if day is not None]
    tracked = [day for day in calendar_days if day.has_data]
    days_tracked = len(tracked)
    if days_tracked == 0:
        return MonthlyStats(
            days_tracked=0,
            days_in_month=len(calendar_days),
            avg_calories=0,
            protein_hit_rate=0,
            carbs_hit_rate=0,
            fat_hit_rate=0,
            protein_hit_days=0,
            carbs_hit_days=0,
            fat_hit_days=0,
            best_streak=0,
            current_streak=0,
        )

    protein_days, carbs_days, fat_days = _hit_days(tracked)
    best_streak, current_streak = hit_streaks(tracked)
    return MonthlyStats(
        days_tracked=days_tracked,
        days_in_month=len(calendar_days),
        avg_calories=_average(day.calories for day in tracked),
        protein_hit_rate=protein_days / days_tracked * 100,
        carbs_hit_rate=carbs_days / days_tracked * 100,
        fat_hit_rate=fat_days / days_tracked * 100,
        protein_hit_days=protein_days,
        carbs_hit_days=carbs_days,
        fat_hit_days=fat_days,
        best_streak=best_streak,
        current_streak=current_streak,
    )


def hit_streaks(days: list[DayData]) -> tuple[int, int]:
    """Return ``(best, current)`` all-macros-hit streaks over tracked days."""
    best = running = 0
    for day in sorted(days, key=lambda entry: entry.day):
        if day.macros_hit.all:
            running += 1
            best = max(best, running)
        else:
            running = 0
    return best, running


def overall_accuracy(stats: WeeklyStats | MonthlyStats) -> float:
    """Return the mean of the three macro hit rates."""
    return (stats.protein_hit_rate + stats.carbs_hit_rate + stats.fat_hit_rate) / 3


def grade_for_accuracy(accuracy: float) -> str:
    """Map an accuracy percentage to a letter grade."""
    for threshold, grade in GRADE_THRESHOLDS:
        if accuracy >= threshold:
            return grade
    return "F"


def weekly_breakdown(month: MonthData, targets: MacroTargets) -> list[WeekAverages]:
    """Average each seven-cell row of the month grid over days with data."""
    rows = [
        month.days[index : index + DAYS_PER_WEEK]
        for index in range(0, len(month.days), DAYS_PER_WEEK)
    ]
    breakdown = []
    for number, row in enumerate(rows, start=1):
        tracked = [day for day in row if day is not None and day.has_data]
        breakdown.append(
            WeekAverages(
                label=f"Week {number}",
                avg_calories=_average(day.calories for day in tracked),
                target_calories=targets.calories,
                protein=_average(day.protein for day in tracked),
                carbs=_average(day.carbs for day in tracked),
                fat=_average(day.fat for day in tracked),
            )
        )
    return breakdown


def _hit_days(days: list[DayData]) -> tuple[int, int, int]:
    protein = sum(1 for day in days if day.macros_hit.protein)
    carbs = sum(1 for day in days if day.macros_hit.carbs)
    fat = sum(1 for day in days if day.macros_hit.fat)
    return protein, carbs, fat


def _average(values: Iterable[float]) -> float:
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)
