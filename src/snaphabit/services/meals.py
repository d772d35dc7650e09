"""Meal persistence service."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Protocol

from snaphabit.domain.meals import Macros, Meal, NewMeal
from snaphabit.domain.vision import AnalysisMacros, MealAnalysis

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def list_meals(self, user_id: str) -> list[Meal]:
        """Return every meal for a user, newest first."""

    def create_meal(self, user_id: str, meal: NewMeal) -> Meal:
        """Persist a meal and return the stored record."""


@dataclass
class MealService:
    """Service for reading and saving analysed meals."""

    repository: MealRepository

    def list_meals(self, user_id: str) -> list[Meal]:
        """Return the full meal snapshot for a user."""
        return self.repository.list_meals(user_id)

    def save_analysis(  # noqa: PLR0913
        self,
        user_id: str,
        image_url: str,
        analysis: MealAnalysis,
        portion: float = 1.0,
        logged_at: datetime | None = None,
        tz: tzinfo | None = None,
    ) -> Meal:
        """Persist an analysed meal, scaled to the chosen portion.

        The explicit calendar day is stamped from the logging time in the
        user's timezone so later rollups do not depend on server time.
        """
        scaled = scale_analysis(analysis, portion) if portion != 1 else analysis
        created_at = logged_at or datetime.now(tz=UTC)
        local = created_at.astimezone(tz) if tz and created_at.tzinfo else created_at
        meal = self.repository.create_meal(
            user_id,
            NewMeal(
                food_name=scaled.food_name,
                calories=scaled.calories,
                macros=Macros(
                    protein=scaled.macros.protein,
                    carbs=scaled.macros.carbs,
                    fat=scaled.macros.fat,
                ),
                ai_advice=scaled.ai_advice,
                image_url=image_url,
                created_at=created_at,
                day=local.date(),
            ),
        )
        _logger.info(
            "Meal saved: user_id=%s meal_id=%s calories=%s",
            user_id,
            meal.id,
            meal.calories,
        )
        return meal


def scale_analysis(analysis: MealAnalysis, multiplier: float) -> MealAnalysis:
    """Scale an analysis to a portion size.

    Calories round to whole numbers and macros to one decimal place.
    """
    return analysis.model_copy(
        update={
            "calories": _round_to(analysis.calories * multiplier, 0),
            "macros": AnalysisMacros(
                protein=_round_to(analysis.macros.protein * multiplier, 1),
                carbs=_round_to(analysis.macros.carbs * multiplier, 1),
                fat=_round_to(analysis.macros.fat * multiplier, 1),
            ),
        }
    )


def _round_to(value: float, digits: int) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor
