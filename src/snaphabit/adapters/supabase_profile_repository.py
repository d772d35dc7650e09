"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from snaphabit.domain.profile import MacroTargets, UserProfile
from snaphabit.services.profiles import ProfileRepository

_COLUMNS = (
    "user_id, goal, age, gender, weight, height, activity_level, macro_targets, "
    "created_at, updated_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> None:
        """Upsert the profile row keyed by user id."""
        targets = profile.macro_targets
        self.client.table("profiles").upsert(
            {
                "user_id": profile.user_id,
                "goal": profile.goal,
                "age": profile.age,
                "gender": profile.gender,
                "weight": profile.weight,
                "height": profile.height,
                "activity_level": profile.activity_level,
                "macro_targets": {
                    "calories": targets.calories,
                    "protein": targets.protein,
                    "carbs": targets.carbs,
                    "fat": targets.fat,
                },
                "created_at": profile.created_at.isoformat(),
                "updated_at": profile.updated_at.isoformat(),
            },
            on_conflict="user_id",
        ).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    targets = row.get("macro_targets") or {}
    return UserProfile(
        user_id=str(row["user_id"]),
        goal=row["goal"],
        age=int(row["age"]),
        gender=row["gender"],
        weight=float(row["weight"]),
        height=float(row["height"]),
        activity_level=row["activity_level"],
        macro_targets=MacroTargets(
            calories=int(targets.get("calories", 0)),
            protein=int(targets.get("protein", 0)),
            carbs=int(targets.get("carbs", 0)),
            fat=int(targets.get("fat", 0)),
        ),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.now(tz=UTC)
