"""Models for meal photo analysis results."""

from pydantic import BaseModel, Field

DEFAULT_ADVICE = (
    "This meal looks delicious! Consider adding more vegetables "
    "for additional fiber and vitamins."
)


class AnalysisMacros(BaseModel):
    """Estimated macronutrient grams."""

    protein: float = Field(default=0.0, ge=0.0)
    carbs: float = Field(default=0.0, ge=0.0)
    fat: float = Field(default=0.0, ge=0.0)


class MealAnalysis(BaseModel):
    """Structured output of the vision model for one meal photo."""

    food_name: str
    calories: float = Field(default=0.0, ge=0.0)
    macros: AnalysisMacros = Field(default_factory=AnalysisMacros)
    ai_advice: str = DEFAULT_ADVICE
