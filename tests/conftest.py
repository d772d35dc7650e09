"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import uuid4

import pytest

from snaphabit.config import Settings
from snaphabit.containers import AppContainer
from snaphabit.domain.billing import SubscriptionRecord
from snaphabit.domain.meals import Macros, Meal, NewMeal
from snaphabit.domain.profile import MacroTargets, UserProfile
from snaphabit.services.logins import LoginRepository, LoginService
from snaphabit.services.meals import MealRepository, MealService
from snaphabit.services.profiles import ProfileRepository, ProfileService
from snaphabit.services.subscriptions import (
    SubscriptionRepository,
    SubscriptionService,
)
from snaphabit.services.tracking import TrackingService
from snaphabit.services.vision import VisionClient, VisionService

TARGETS = MacroTargets(calories=2000, protein=150, carbs=200, fat=60)


def make_profile(
    user_id: str = "user-1", targets: MacroTargets = TARGETS, **overrides: object
) -> UserProfile:
    profile = UserProfile(
        user_id=user_id,
        goal="maintain",
        age=30,
        gender="male",
        weight=70.0,
        height=175.0,
        activity_level="moderate",
        macro_targets=targets,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, tzinfo=UTC),
    )
    return replace(profile, **overrides)


def make_meal(  # noqa: PLR0913
    created_at: datetime,
    calories: float = 500,
    protein: float = 30,
    carbs: float = 50,
    fat: float = 15,
    day: date | None = None,
    user_id: str = "user-1",
) -> Meal:
    return Meal(
        id=str(uuid4()),
        user_id=user_id,
        food_name="Chicken and rice",
        calories=calories,
        macros=Macros(protein=protein, carbs=carbs, fat=fat),
        created_at=created_at,
        day=day,
    )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    saved: list[UserProfile] = field(default_factory=list)

    def get_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, profile: UserProfile) -> None:
        self.profiles[profile.user_id] = profile
        self.saved.append(profile)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: list[Meal] = field(default_factory=list)

    def list_meals(self, user_id: str) -> list[Meal]:
        owned = [meal for meal in self.meals if meal.user_id == user_id]
        return sorted(owned, key=lambda meal: meal.created_at, reverse=True)

    def create_meal(self, user_id: str, meal: NewMeal) -> Meal:
        stored = Meal(
            id=str(uuid4()),
            user_id=user_id,
            food_name=meal.food_name,
            calories=meal.calories,
            macros=meal.macros,
            created_at=meal.created_at,
            image_url=meal.image_url,
            ai_advice=meal.ai_advice,
            day=meal.day,
        )
        self.meals.append(stored)
        return stored


@dataclass
class InMemoryLoginRepository(LoginRepository):
    """In-memory login repository for tests."""

    logins: dict[str, set[date]] = field(default_factory=dict)

    def record_login(self, user_id: str, day: date) -> None:
        self.logins.setdefault(user_id, set()).add(day)

    def list_login_days(self, user_id: str, limit: int) -> list[date]:
        return sorted(self.logins.get(user_id, set()), reverse=True)[:limit]

    def count_login_days(self, user_id: str) -> int:
        return len(self.logins.get(user_id, set()))


@dataclass
class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory subscription repository for tests."""

    records: dict[str, SubscriptionRecord] = field(default_factory=dict)

    def get_subscription(self, user_id: str) -> SubscriptionRecord | None:
        return self.records.get(user_id)


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "food_name": "Grilled chicken breast with rice",
            "calories": 520,
            "macros": {"protein": 42, "carbs": 55, "fat": 12},
            "ai_advice": "Add some greens for fiber.",
        }
    )
    prompts: list[str] = field(default_factory=list)
    image_urls: list[str] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        self.image_urls.append(image_data_url)
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"
        ),
        api_token="api-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    meal_repository: InMemoryMealRepository,
    vision_client: FakeVisionClient,
) -> AppContainer:
    profile_service = ProfileService(profile_repository)
    meal_service = MealService(meal_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        meal_service=meal_service,
        tracking_service=TrackingService(
            profile_service=profile_service, meal_service=meal_service
        ),
        vision_service=VisionService(
            client=vision_client,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        login_service=LoginService(InMemoryLoginRepository()),
        subscription_service=SubscriptionService(InMemorySubscriptionRepository()),
        close_resources=close_resources,
    )
