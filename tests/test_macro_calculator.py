"""Tests for macro target calculation."""

import pytest

from snaphabit.domain.profile import MacroTargets
from snaphabit.services import macros
from snaphabit.services.macros import (
    calculate_macro_targets,
    feet_inches_to_cm,
    get_bmr,
    get_tdee,
    pounds_to_kg,
)

ACTIVITY_ORDER = ["sedentary", "light", "moderate", "active", "very_active"]


def test_bmr_uses_male_and_female_constants() -> None:
    assert get_bmr(70, 175, 30, "male") == pytest.approx(1648.75)
    assert get_bmr(70, 175, 30, "female") == pytest.approx(1482.75)


def test_bmr_other_gender_uses_female_constant() -> None:
    assert get_bmr(60, 160, 40, "other") == get_bmr(60, 160, 40, "female")


def test_tdee_applies_activity_multiplier() -> None:
    bmr = get_bmr(70, 175, 30, "male")

    assert get_tdee(70, 175, 30, "male", "sedentary") == pytest.approx(bmr * 1.2)
    assert get_tdee(70, 175, 30, "male", "very_active") == pytest.approx(bmr * 1.9)


def test_tdee_for_moderate_activity() -> None:
    assert get_tdee(70, 175, 30, "male", "moderate") == pytest.approx(2555.5625)


def test_lose_goal_end_to_end() -> None:
    targets = calculate_macro_targets("lose", 70, 175, 30, "male", "moderate")

    assert targets == MacroTargets(calories=2044, protein=140, carbs=153, fat=68)


def test_build_muscle_goal_split() -> None:
    targets = calculate_macro_targets("build_muscle", 80, 180, 25, "male", "active")

    tdee = get_tdee(80, 180, 25, "male", "active")
    assert targets.calories == int(tdee * 1.15 + 0.5)
    assert targets.protein == 176
    assert targets.carbs == int(targets.calories * 0.4 / 4 + 0.5)
    assert targets.fat == int(targets.calories * 0.25 / 9 + 0.5)


@pytest.mark.parametrize("gender", ["male", "female", "other"])
@pytest.mark.parametrize("activity", ACTIVITY_ORDER)
@pytest.mark.parametrize(
    ("weight", "height", "age"),
    [(50, 155, 18), (70, 175, 30), (95.5, 190, 52), (120, 168, 71)],
)
def test_maintain_macros_add_up_to_calories(
    gender: str, activity: str, weight: float, height: float, age: int
) -> None:
    targets = calculate_macro_targets(
        "maintain", weight, height, age, gender, activity
    )

    macro_calories = targets.protein * 4 + targets.carbs * 4 + targets.fat * 9
    assert abs(macro_calories - targets.calories) <= 3


def test_custom_goal_returns_custom_macros_unchanged() -> None:
    custom = MacroTargets(calories=1800, protein=160, carbs=120, fat=70)

    targets = calculate_macro_targets(
        "custom", 90, 150, 60, "female", "very_active", custom_macros=custom
    )

    assert targets is custom


def test_custom_goal_without_macros_falls_back_to_maintenance() -> None:
    custom = calculate_macro_targets("custom", 70, 175, 30, "male", "moderate")
    maintain = calculate_macro_targets("maintain", 70, 175, 30, "male", "moderate")

    assert custom == maintain


@pytest.mark.parametrize("goal", ["lose", "maintain", "build_muscle"])
def test_calories_increase_with_activity(goal: str) -> None:
    calories = [
        calculate_macro_targets(goal, 70, 175, 30, "male", level).calories
        for level in ACTIVITY_ORDER
    ]

    assert calories == sorted(calories)
    assert len(set(calories)) == len(calories)


def test_rounds_half_up() -> None:
    # 62.5 kg * 1.8 is 112.5 g, which the builtin round sends to 112.
    targets = calculate_macro_targets("maintain", 62.5, 160, 30, "male", "sedentary")

    assert targets.protein == 113


def test_unit_conversions() -> None:
    assert pounds_to_kg(100) == pytest.approx(45.3592)
    assert feet_inches_to_cm(5, 10) == pytest.approx(177.8)


def test_energy_formulas_are_exposed_only_as_display_queries() -> None:
    assert not hasattr(macros, "calculate_bmr")
    assert not hasattr(macros, "calculate_tdee")
