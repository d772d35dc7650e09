"""Meal aggregation into day, week and month structures."""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, tzinfo

from snaphabit.domain.meals import DayTotals, Macros, Meal
from snaphabit.domain.periods import (
    DayData,
    MacroHits,
    MacroStatus,
    MonthData,
    WeekData,
)
from snaphabit.domain.profile import MacroTargets, UserProfile
from snaphabit.services.dates import (
    day_key,
    days_in_month,
    days_in_week,
    week_number,
)

DEFAULT_TOLERANCE = 0.05

_logger = logging.getLogger(__name__)

MealRecord = Meal | Mapping[str, object]


def coerce_number(value: object) -> float:
    """Return ``value`` as a finite float, or 0.0 when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def sanitize_meal(record: MealRecord) -> Meal:
    """Normalise a meal record from the store into a clean ``Meal``.

    Accepts either a ``Meal`` or a raw row (snake_case or camelCase keys,
    macros nested under ``macros`` or flattened). Non-numeric calorie
    and macro values become zero.
    """
    if isinstance(record, Meal):
        return Meal(
            id=record.id,
            user_id=record.user_id,
            food_name=record.food_name,
            calories=coerce_number(record.calories),
            macros=_sanitize_macros(record.macros),
            created_at=record.created_at,
            image_url=record.image_url,
            ai_advice=record.ai_advice,
            day=record.day,
        )

    macros_raw = _pick(record, "macros")
    macros_source: object = macros_raw if isinstance(macros_raw, Mapping) else record
    return Meal(
        id=str(_pick(record, "id") or ""),
        user_id=str(_pick(record, "user_id", "userId") or ""),
        food_name=str(_pick(record, "food_name", "foodName") or ""),
        calories=coerce_number(_pick(record, "calories")),
        macros=_sanitize_macros(macros_source),
        created_at=_parse_timestamp(_pick(record, "created_at", "createdAt")),
        image_url=str(_pick(record, "image_url", "imageUrl") or ""),
        ai_advice=str(_pick(record, "ai_advice", "aiAdvice") or ""),
        day=_parse_day(_pick(record, "date", "day")),
    )


def sanitize_meals(records: Iterable[MealRecord]) -> list[Meal]:
    return [sanitize_meal(record) for record in records]


def meal_day(meal: Meal, tz: tzinfo | None = None) -> date:
    """Return the calendar day a meal counts towards.

    The explicit ``day`` wins. Otherwise the day of ``created_at`` is
    used, converted to ``tz`` first when the timestamp is aware.
    """
    if meal.day is not None:
        return meal.day
    created_at = meal.created_at
    if tz is not None and created_at.tzinfo is not None:
        created_at = created_at.astimezone(tz)
    return created_at.date()


def group_meals_by_day(
    meals: Iterable[Meal], tz: tzinfo | None = None
) -> dict[str, list[Meal]]:
    """Partition meals by canonical day key, keeping input order."""
    grouped: dict[str, list[Meal]] = {}
    for meal in meals:
        grouped.setdefault(day_key(meal_day(meal, tz)), []).append(meal)
    return grouped


def calculate_day_totals(meals: Iterable[Meal]) -> DayTotals:
    """Sum calories and macros across meals."""
    calories = protein = carbs = fat = 0.0
    for meal in meals:
        macros = _sanitize_macros(getattr(meal, "macros", None))
        calories += coerce_number(getattr(meal, "calories", None))
        protein += macros.protein
        carbs += macros.carbs
        fat += macros.fat
    return DayTotals(calories=calories, protein=protein, carbs=carbs, fat=fat)


def check_macros_hit(
    totals: DayTotals,
    targets: MacroTargets,
    tolerance: float = DEFAULT_TOLERANCE,
) -> MacroHits:
    """Evaluate macro targets for a day.

    Protein only needs to reach the lower bound. Carbs and fat must land
    inside the inclusive band around the target.
    """
    protein_hit = totals.protein >= targets.protein * (1 - tolerance)
    carbs_hit = _within_band(totals.carbs, targets.carbs, tolerance)
    fat_hit = _within_band(totals.fat, targets.fat, tolerance)
    return MacroHits(protein=protein_hit, carbs=carbs_hit, fat=fat_hit)


def count_macros_hit(hits: MacroHits) -> int:
    return sum(1 for flag in (hits.protein, hits.carbs, hits.fat) if flag)


def macro_status(hits: MacroHits) -> MacroStatus:
    """Summarise hit flags as all, partial or none."""
    hit_count = count_macros_hit(hits)
    if hit_count == 3:  # noqa: PLR2004
        return MacroStatus(level="all", hit_count=3, label="All macros hit")
    if hit_count == 0:
        return MacroStatus(level="none", hit_count=0, label="No macros hit")
    return MacroStatus(
        level="partial", hit_count=hit_count, label=f"{hit_count}/3 macros hit"
    )


def build_day_data(
    day: date,
    meals: list[Meal],
    targets: MacroTargets,
    tolerance: float = DEFAULT_TOLERANCE,
) -> DayData:
    """Build the day structure from that day's meals."""
    totals = calculate_day_totals(meals)
    return DayData(
        day=day,
        calories=totals.calories,
        protein=totals.protein,
        carbs=totals.carbs,
        fat=totals.fat,
        meals=list(meals),
        macros_hit=check_macros_hit(totals, targets, tolerance),
    )


def process_week_data(
    meals: Iterable[MealRecord],
    start_date: date,
    profile: UserProfile,
    tz: tzinfo | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> WeekData:
    """Aggregate meals into the Monday-aligned week containing ``start_date``.

    Hit flags always use the profile's current targets. ``year`` is the
    ISO week-based year of the Monday, so it pairs with ``week_number``
    and can differ from the calendar year around New Year
    (2024-12-30 is week 1 of 2025).
    """
    grouped = group_meals_by_day(sanitize_meals(meals), tz)
    days = days_in_week(start_date)
    week_days = [
        build_day_data(
            day, grouped.get(day_key(day), []), profile.macro_targets, tolerance
        )
        for day in days
    ]
    return WeekData(
        start_date=days[0],
        end_date=days[-1],
        week_number=week_number(start_date),
        year=days[0].isocalendar().year,
        days=week_days,
    )


def process_month_data(  # noqa: PLR0913
    meals: Iterable[MealRecord],
    year: int,
    month: int,
    profile: UserProfile,
    tz: tzinfo | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> MonthData:
    """Aggregate meals into a padded calendar grid for the month."""
    grouped = group_meals_by_day(sanitize_meals(meals), tz)
    month_days: list[DayData | None] = []
    for day in days_in_month(year, month):
        if day is None:
            month_days.append(None)
            continue
        month_days.append(
            build_day_data(
                day, grouped.get(day_key(day), []), profile.macro_targets, tolerance
            )
        )
    return MonthData(month=month, year=year, days=month_days)


def _within_band(value: float, target: float, tolerance: float) -> bool:
    return target * (1 - tolerance) <= value <= target * (1 + tolerance)


def _sanitize_macros(source: object) -> Macros:
    if isinstance(source, Macros):
        return Macros(
            protein=coerce_number(source.protein),
            carbs=coerce_number(source.carbs),
            fat=coerce_number(source.fat),
        )
    if isinstance(source, Mapping):
        return Macros(
            protein=coerce_number(source.get("protein")),
            carbs=coerce_number(source.get("carbs")),
            fat=coerce_number(source.get("fat")),
        )
    return Macros()


def _pick(record: Mapping[str, object], *keys: str) -> object:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            _logger.warning("Unparseable meal timestamp: %r", value)
    return datetime.min


def _parse_day(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            _logger.warning("Dropping unparseable meal date: %r", value)
    return None
