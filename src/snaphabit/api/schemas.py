"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, Field, model_validator

from snaphabit.domain.profile import (
    ActivityLevel,
    Gender,
    Goal,
    HeightUnit,
    MacroTargets,
    OnboardingData,
    WeightUnit,
)
from snaphabit.domain.vision import MealAnalysis


class MacroTargetsBody(BaseModel):
    """User-supplied macro targets."""

    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)

    def to_domain(self) -> MacroTargets:
        return MacroTargets(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )


class OnboardingRequest(BaseModel):
    """Onboarding answers as submitted by the client."""

    goal: Goal
    age: int = Field(gt=0)
    gender: Gender
    weight: float = Field(gt=0)
    activity_level: ActivityLevel
    height: float | None = Field(default=None, gt=0)
    weight_unit: WeightUnit = "kg"
    height_unit: HeightUnit = "cm"
    height_feet: float | None = Field(default=None, ge=0)
    height_inches: float | None = Field(default=None, ge=0)
    custom_macros: MacroTargetsBody | None = None

    @model_validator(mode="after")
    def check_height(self) -> "OnboardingRequest":
        """Require the height fields that match the chosen unit."""
        if self.height_unit == "cm" and self.height is None:
            raise ValueError("height is required when height_unit is cm")
        if self.height_unit == "ft_in" and not self.height_feet:
            raise ValueError("height_feet is required when height_unit is ft_in")
        return self

    def to_domain(self) -> OnboardingData:
        return OnboardingData(
            goal=self.goal,
            age=self.age,
            gender=self.gender,
            weight=self.weight,
            activity_level=self.activity_level,
            height=self.height,
            weight_unit=self.weight_unit,
            height_unit=self.height_unit,
            height_feet=self.height_feet,
            height_inches=self.height_inches,
            custom_macros=(
                self.custom_macros.to_domain() if self.custom_macros else None
            ),
        )


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; weight and height are metric."""

    goal: Goal | None = None
    age: int | None = Field(default=None, gt=0)
    gender: Gender | None = None
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    activity_level: ActivityLevel | None = None
    custom_macros: MacroTargetsBody | None = None


class AnalyzeMealRequest(BaseModel):
    """Base64 encoded meal photo with an optional description."""

    image_base64: str
    hint: str | None = None


class SaveMealRequest(BaseModel):
    """Confirmed analysis to persist as a meal."""

    image_url: str
    analysis: MealAnalysis
    portion: float = Field(default=1.0, gt=0)
    timezone: str | None = None
