"""Domain models for user profiles and macro targets."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Goal = Literal["lose", "maintain", "build_muscle", "custom"]
Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
WeightUnit = Literal["kg", "lbs"]
HeightUnit = Literal["cm", "ft_in"]


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macronutrient targets."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class UserProfile:
    """Biometric profile captured during onboarding."""

    user_id: str
    goal: Goal
    age: int
    gender: Gender
    weight: float
    height: float
    activity_level: ActivityLevel
    macro_targets: MacroTargets
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OnboardingData:
    """Raw onboarding answers before unit conversion."""

    goal: Goal
    age: int
    gender: Gender
    weight: float
    activity_level: ActivityLevel
    height: float | None = None
    weight_unit: WeightUnit = "kg"
    height_unit: HeightUnit = "cm"
    height_feet: float | None = None
    height_inches: float | None = None
    custom_macros: MacroTargets | None = None


@dataclass(frozen=True)
class TargetPreview:
    """Calculated targets with the energy figures behind them."""

    macro_targets: MacroTargets
    bmr: float
    tdee: float
