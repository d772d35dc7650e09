"""Profile onboarding and target maintenance."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from snaphabit.domain.profile import (
    MacroTargets,
    OnboardingData,
    TargetPreview,
    UserProfile,
)
from snaphabit.services.errors import ProfileNotFoundError
from snaphabit.services.macros import (
    calculate_macro_targets,
    feet_inches_to_cm,
    get_bmr,
    get_tdee,
    pounds_to_kg,
)

_logger = logging.getLogger(__name__)

_BIOMETRIC_FIELDS = {"goal", "age", "gender", "weight", "height", "activity_level"}


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for a user, if onboarding is complete."""

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or replace a user's profile."""


@dataclass
class ProfileService:
    """Application service for profile lifecycle actions."""

    repository: ProfileRepository

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile or None for a new user."""
        return self.repository.get_profile(user_id)

    def require_profile(self, user_id: str) -> UserProfile:
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    def preview_targets(self, data: OnboardingData) -> TargetPreview:
        """Calculate targets for onboarding answers without saving."""
        weight_kg, height_cm = to_metric(data)
        return TargetPreview(
            macro_targets=_targets_for(data, weight_kg, height_cm),
            bmr=get_bmr(weight_kg, height_cm, data.age, data.gender),
            tdee=get_tdee(
                weight_kg, height_cm, data.age, data.gender, data.activity_level
            ),
        )

    def complete_onboarding(
        self, user_id: str, data: OnboardingData, now: datetime | None = None
    ) -> UserProfile:
        """Create and persist a profile from onboarding answers."""
        timestamp = now or datetime.now(tz=UTC)
        weight_kg, height_cm = to_metric(data)
        profile = UserProfile(
            user_id=user_id,
            goal=data.goal,
            age=data.age,
            gender=data.gender,
            weight=weight_kg,
            height=height_cm,
            activity_level=data.activity_level,
            macro_targets=_targets_for(data, weight_kg, height_cm),
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.repository.save_profile(profile)
        _logger.info("Profile created: user_id=%s goal=%s", user_id, data.goal)
        return profile

    def update_profile(
        self,
        user_id: str,
        changes: dict[str, object],
        custom_macros: MacroTargets | None = None,
        now: datetime | None = None,
    ) -> UserProfile:
        """Apply profile changes and keep targets in sync.

        Non-custom goals always get freshly calculated targets. The custom
        goal keeps the stored targets unless new ones are supplied.
        """
        current = self.require_profile(user_id)
        updates = {
            key: value for key, value in changes.items() if key in _BIOMETRIC_FIELDS
        }
        updated = replace(current, **updates)
        if updated.goal == "custom":
            targets = custom_macros or current.macro_targets
        else:
            targets = calculate_macro_targets(
                updated.goal,
                updated.weight,
                updated.height,
                updated.age,
                updated.gender,
                updated.activity_level,
            )
        updated = replace(
            updated,
            macro_targets=targets,
            updated_at=now or datetime.now(tz=UTC),
        )
        self.repository.save_profile(updated)
        _logger.info("Profile updated: user_id=%s goal=%s", user_id, updated.goal)
        return updated


def to_metric(data: OnboardingData) -> tuple[float, float]:
    """Return ``(weight_kg, height_cm)`` from onboarding units."""
    weight_kg = pounds_to_kg(data.weight) if data.weight_unit == "lbs" else data.weight
    if data.height_unit == "ft_in":
        height_cm = feet_inches_to_cm(data.height_feet or 0, data.height_inches or 0)
    else:
        height_cm = data.height or 0
    return weight_kg, height_cm


def _targets_for(
    data: OnboardingData, weight_kg: float, height_cm: float
) -> MacroTargets:
    if data.goal == "custom":
        if data.custom_macros is not None:
            return data.custom_macros
        # Seed custom goals with maintenance values until the user edits them.
        return calculate_macro_targets(
            "maintain",
            weight_kg,
            height_cm,
            data.age,
            data.gender,
            data.activity_level,
        )
    return calculate_macro_targets(
        data.goal,
        weight_kg,
        height_cm,
        data.age,
        data.gender,
        data.activity_level,
    )
