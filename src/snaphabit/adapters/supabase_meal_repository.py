"""Supabase repository for meals."""

from dataclasses import dataclass

from supabase import Client

from snaphabit.domain.meals import Meal, NewMeal
from snaphabit.services.aggregation import sanitize_meal
from snaphabit.services.meals import MealRepository

_COLUMNS = (
    "id, user_id, image_url, food_name, calories, macros, ai_advice, "
    "created_at, date"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal persistence."""

    client: Client

    def list_meals(self, user_id: str) -> list[Meal]:
        """Return all meals for a user, newest first."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [sanitize_meal(row) for row in response.data or []]

    def create_meal(self, user_id: str, meal: NewMeal) -> Meal:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": user_id,
                    "image_url": meal.image_url,
                    "food_name": meal.food_name,
                    "calories": meal.calories,
                    "macros": {
                        "protein": meal.macros.protein,
                        "carbs": meal.macros.carbs,
                        "fat": meal.macros.fat,
                    },
                    "ai_advice": meal.ai_advice,
                    "created_at": meal.created_at.isoformat(),
                    "date": meal.day.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return sanitize_meal(response.data[0])
