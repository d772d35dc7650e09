"""Domain models for day, week and month rollups."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from snaphabit.domain.meals import DayTotals, Meal


@dataclass(frozen=True)
class MacroHits:
    """Per-macro target hit flags for a day."""

    protein: bool
    carbs: bool
    fat: bool

    @property
    def all(self) -> bool:
        return self.protein and self.carbs and self.fat


@dataclass(frozen=True)
class MacroStatus:
    """Traffic-light summary of a day's hit flags."""

    level: Literal["all", "partial", "none"]
    hit_count: int
    label: str


@dataclass(frozen=True)
class DayData:
    """Aggregated meals and hit flags for one calendar day."""

    day: date
    calories: float
    protein: float
    carbs: float
    fat: float
    meals: list[Meal]
    macros_hit: MacroHits

    @property
    def has_data(self) -> bool:
        return len(self.meals) > 0


@dataclass(frozen=True)
class WeekData:
    """Monday-aligned week of day slots."""

    start_date: date
    end_date: date
    week_number: int
    year: int
    days: list[DayData]


@dataclass(frozen=True)
class MonthData:
    """Calendar grid for a month; ``None`` marks leading blank cells."""

    month: int
    year: int
    days: list[DayData | None]


@dataclass(frozen=True)
class WeeklyStats:
    """Statistics over the tracked days of a week."""

    avg_calories: float
    protein_hit_rate: float
    carbs_hit_rate: float
    fat_hit_rate: float
    protein_hit_days: int
    carbs_hit_days: int
    fat_hit_days: int
    total_days: int
    best_day: DayData | None
    worst_day: DayData | None


@dataclass(frozen=True)
class MonthlyStats:
    """Statistics over the tracked days of a month."""

    days_tracked: int
    days_in_month: int
    avg_calories: float
    protein_hit_rate: float
    carbs_hit_rate: float
    fat_hit_rate: float
    protein_hit_days: int
    carbs_hit_days: int
    fat_hit_days: int
    best_streak: int
    current_streak: int


@dataclass(frozen=True)
class WeekAverages:
    """Averages for one row of the month grid."""

    label: str
    avg_calories: float
    target_calories: int
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DailySummary:
    """Today's progress against the profile targets."""

    day: date
    totals: DayTotals
    remaining: DayTotals
    macros_hit: MacroHits
    status: MacroStatus
    meals: list[Meal]
