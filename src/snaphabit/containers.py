"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from snaphabit.adapters.openai_vision_client import OpenAIVisionClient
from snaphabit.adapters.supabase_login_repository import SupabaseLoginRepository
from snaphabit.adapters.supabase_meal_repository import SupabaseMealRepository
from snaphabit.adapters.supabase_profile_repository import SupabaseProfileRepository
from snaphabit.adapters.supabase_subscription_repository import (
    SupabaseSubscriptionRepository,
)
from snaphabit.config import Settings
from snaphabit.services.logins import LoginService
from snaphabit.services.meals import MealService
from snaphabit.services.profiles import ProfileService
from snaphabit.services.subscriptions import SubscriptionService
from snaphabit.services.tracking import TrackingService
from snaphabit.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    meal_service: MealService
    tracking_service: TrackingService
    vision_service: VisionService
    login_service: LoginService
    subscription_service: SubscriptionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    meal_service = MealService(SupabaseMealRepository(supabase_client))
    tracking_service = TrackingService(
        profile_service=profile_service,
        meal_service=meal_service,
        tolerance=resolved_settings.hit_tolerance,
    )
    openai_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    vision_service = VisionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    login_service = LoginService(SupabaseLoginRepository(supabase_client))
    subscription_service = SubscriptionService(
        SupabaseSubscriptionRepository(supabase_client)
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        meal_service=meal_service,
        tracking_service=tracking_service,
        vision_service=vision_service,
        login_service=login_service,
        subscription_service=subscription_service,
        close_resources=close_resources,
    )
