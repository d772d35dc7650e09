"""Calorie and macro target calculation from a biometric profile."""

import math

from snaphabit.domain.profile import ActivityLevel, Gender, Goal, MacroTargets

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

POUNDS_TO_KG = 0.453592
CM_PER_FOOT = 30.48
CM_PER_INCH = 2.54


def _calculate_bmr(
    weight_kg: float, height_cm: float, age: int, gender: Gender
) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation.

    Any gender other than ``male`` uses the female constant.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return base + 5
    return base - 161


def _calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def get_bmr(weight_kg: float, height_cm: float, age: int, gender: Gender) -> float:
    """Return BMR for display."""
    return _calculate_bmr(weight_kg, height_cm, age, gender)


def get_tdee(
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: Gender,
    activity_level: ActivityLevel,
) -> float:
    """Return TDEE for display."""
    return _calculate_tdee(
        _calculate_bmr(weight_kg, height_cm, age, gender), activity_level
    )


def calculate_macro_targets(  # noqa: PLR0913
    goal: Goal,
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: Gender,
    activity_level: ActivityLevel,
    custom_macros: MacroTargets | None = None,
) -> MacroTargets:
    """Return daily calorie and macro targets for a goal.

    Custom goals with user-supplied macros are returned untouched. Inputs
    are assumed to be validated by the caller.
    """
    if goal == "custom" and custom_macros is not None:
        return custom_macros

    tdee = _calculate_tdee(
        _calculate_bmr(weight_kg, height_cm, age, gender), activity_level
    )

    if goal == "lose":
        calories = _round(tdee * 0.8)
    elif goal == "build_muscle":
        calories = _round(tdee * 1.15)
    else:
        calories = _round(tdee)

    if goal == "build_muscle":
        protein = _round(weight_kg * 2.2)
        carbs = _round(calories * 0.4 / 4)
        fat = _round(calories * 0.25 / 9)
    elif goal == "lose":
        protein = _round(weight_kg * 2.0)
        carbs = _round(calories * 0.3 / 4)
        fat = _round(calories * 0.3 / 9)
    else:
        # Carbs take whatever protein and fat leave of the calorie budget.
        protein = _round(weight_kg * 1.8)
        fat = _round(calories * 0.3 / 9)
        carbs = _round((calories - protein * 4 - fat * 9) / 4)

    return MacroTargets(calories=calories, protein=protein, carbs=carbs, fat=fat)


def pounds_to_kg(pounds: float) -> float:
    """Convert pounds to kilograms."""
    return pounds * POUNDS_TO_KG


def feet_inches_to_cm(feet: float, inches: float) -> float:
    """Convert a feet/inches height to centimetres."""
    return feet * CM_PER_FOOT + inches * CM_PER_INCH


def _round(value: float) -> int:
    """Round half up, unlike the builtin banker's rounding."""
    return math.floor(value + 0.5)
