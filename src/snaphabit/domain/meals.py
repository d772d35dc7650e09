"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Macros:
    """Macronutrient grams for a meal."""

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class Meal:
    """A meal record as stored for a user.

    ``day`` mirrors the store's explicit ``date`` column and, when set,
    decides which calendar day the meal belongs to.
    """

    id: str
    user_id: str
    food_name: str
    calories: float
    macros: Macros
    created_at: datetime
    image_url: str = ""
    ai_advice: str = ""
    day: date | None = None


@dataclass(frozen=True)
class DayTotals:
    """Summed calories and macros for a set of meals."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class NewMeal:
    """Payload for persisting a freshly analysed meal."""

    food_name: str
    calories: float
    macros: Macros
    ai_advice: str
    image_url: str
    created_at: datetime
    day: date
