"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from snaphabit.api.schemas import (
    AnalyzeMealRequest,
    OnboardingRequest,
    ProfileUpdateRequest,
    SaveMealRequest,
)
from snaphabit.app_logging import configure_logging
from snaphabit.config import parse_timezone
from snaphabit.containers import AppContainer
from snaphabit.domain.meals import Meal
from snaphabit.domain.periods import DayData, MacroHits
from snaphabit.domain.profile import UserProfile
from snaphabit.services.errors import ProfileNotFoundError, VisionAnalysisError


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    async def require_token(x_api_token: str | None = Header(default=None)) -> None:
        """Ensure requests include the shared API token."""
        if not x_api_token or x_api_token != container.settings.api_token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    guarded = [Depends(require_token)]

    @app.exception_handler(ProfileNotFoundError)
    async def profile_not_found(
        request: Request, exc: ProfileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Profile not found"},
        )

    @app.exception_handler(VisionAnalysisError)
    async def vision_failed(request: Request, exc: VisionAnalysisError) -> JSONResponse:
        logger.warning("Meal analysis failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Meal analysis failed"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users/{user_id}/profile", dependencies=guarded)
    async def get_profile(user_id: str, request: Request) -> dict[str, object]:
        """Return the user's profile and targets."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return _profile_payload(profile)

    @app.put("/users/{user_id}/profile", dependencies=guarded)
    async def complete_onboarding(
        user_id: str, body: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Create the profile from onboarding answers."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.complete_onboarding(
            user_id, body.to_domain()
        )
        return _profile_payload(profile)

    @app.patch("/users/{user_id}/profile", dependencies=guarded)
    async def update_profile(
        user_id: str, body: ProfileUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Apply profile changes and recompute targets."""
        state_container: AppContainer = request.app.state.container
        changes = body.model_dump(exclude_none=True, exclude={"custom_macros"})
        profile = state_container.profile_service.update_profile(
            user_id,
            changes,
            custom_macros=(
                body.custom_macros.to_domain() if body.custom_macros else None
            ),
        )
        return _profile_payload(profile)

    @app.post("/users/{user_id}/profile/preview", dependencies=guarded)
    async def preview_targets(
        user_id: str, body: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Return calculated targets without saving them."""
        state_container: AppContainer = request.app.state.container
        preview = state_container.profile_service.preview_targets(body.to_domain())
        return {
            "macro_targets": asdict(preview.macro_targets),
            "bmr": preview.bmr,
            "tdee": preview.tdee,
        }

    @app.get("/users/{user_id}/meals", dependencies=guarded)
    async def list_meals(user_id: str, request: Request) -> dict[str, object]:
        """Return every meal logged by the user."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.meal_service.list_meals(user_id)
        return {"meals": [_meal_payload(meal) for meal in meals]}

    @app.post("/users/{user_id}/meals/analyze", dependencies=guarded)
    async def analyze_meal(
        user_id: str, body: AnalyzeMealRequest, request: Request
    ) -> dict[str, object]:
        """Estimate nutrition for a meal photo."""
        state_container: AppContainer = request.app.state.container
        try:
            image_bytes = base64.b64decode(body.image_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid image data"
            ) from exc
        analysis = await state_container.vision_service.analyze(
            image_bytes, hint=body.hint
        )
        return analysis.model_dump()

    @app.post(
        "/users/{user_id}/meals",
        dependencies=guarded,
        status_code=status.HTTP_201_CREATED,
    )
    async def save_meal(
        user_id: str, body: SaveMealRequest, request: Request
    ) -> dict[str, object]:
        """Persist a confirmed meal analysis."""
        state_container: AppContainer = request.app.state.container
        tz = _resolve_timezone(state_container, body.timezone)
        meal = state_container.meal_service.save_analysis(
            user_id,
            image_url=body.image_url,
            analysis=body.analysis,
            portion=body.portion,
            tz=tz,
        )
        return _meal_payload(meal)

    @app.get("/users/{user_id}/daily", dependencies=guarded)
    async def daily(
        user_id: str,
        request: Request,
        day: date | None = None,
        timezone: str | None = None,
    ) -> dict[str, object]:
        """Return a day's totals, hit flags and remaining budget."""
        state_container: AppContainer = request.app.state.container
        tz = _resolve_timezone(state_container, timezone)
        summary = state_container.tracking_service.get_daily(
            user_id, day or datetime.now(tz=tz).date(), tz
        )
        return {
            "day": summary.day.isoformat(),
            "totals": asdict(summary.totals),
            "remaining": asdict(summary.remaining),
            "macros_hit": _hits_payload(summary.macros_hit),
            "status": asdict(summary.status),
            "meals": [_meal_payload(meal) for meal in summary.meals],
        }

    @app.get("/users/{user_id}/weekly", dependencies=guarded)
    async def weekly(
        user_id: str,
        request: Request,
        anchor: date | None = None,
        timezone: str | None = None,
    ) -> dict[str, object]:
        """Return the week's day slots and statistics."""
        state_container: AppContainer = request.app.state.container
        tz = _resolve_timezone(state_container, timezone)
        week, stats = state_container.tracking_service.get_week(
            user_id, anchor or datetime.now(tz=tz).date(), tz
        )
        return {
            "start_date": week.start_date.isoformat(),
            "end_date": week.end_date.isoformat(),
            "week_number": week.week_number,
            "year": week.year,
            "days": [_day_payload(day) for day in week.days],
            "stats": {
                **asdict(stats),
                "best_day": _day_ref(stats.best_day),
                "worst_day": _day_ref(stats.worst_day),
            },
        }

    @app.get("/users/{user_id}/monthly", dependencies=guarded)
    async def monthly(
        user_id: str,
        request: Request,
        year: int | None = None,
        month: int | None = Query(default=None, ge=1, le=12),
        timezone: str | None = None,
    ) -> dict[str, object]:
        """Return the month calendar grid, statistics and grade."""
        state_container: AppContainer = request.app.state.container
        tz = _resolve_timezone(state_container, timezone)
        today = datetime.now(tz=tz).date()
        report = state_container.tracking_service.get_month(
            user_id, year or today.year, month or today.month, tz
        )
        return {
            "year": report.month.year,
            "month": report.month.month,
            "days": [
                _day_payload(day) if day is not None else None
                for day in report.month.days
            ],
            "stats": asdict(report.stats),
            "grade": report.grade,
            "weeks": [asdict(week) for week in report.weeks],
        }

    @app.post("/users/{user_id}/logins", dependencies=guarded)
    async def record_login(
        user_id: str, request: Request, timezone: str | None = None
    ) -> dict[str, object]:
        """Record today's login and return the updated streak."""
        state_container: AppContainer = request.app.state.container
        today = datetime.now(tz=_resolve_timezone(state_container, timezone)).date()
        state_container.login_service.record_login(user_id, today)
        return {"streak": state_container.login_service.get_streak(user_id, today)}

    @app.get("/users/{user_id}/logins", dependencies=guarded)
    async def login_summary(
        user_id: str, request: Request, timezone: str | None = None
    ) -> dict[str, object]:
        """Return the login streak, total days and last login day."""
        state_container: AppContainer = request.app.state.container
        today = datetime.now(tz=_resolve_timezone(state_container, timezone)).date()
        service = state_container.login_service
        last_login = service.get_last_login(user_id)
        return {
            "streak": service.get_streak(user_id, today),
            "total_days": service.get_total_days(user_id),
            "last_login": last_login.isoformat() if last_login else None,
        }

    @app.get("/users/{user_id}/subscription", dependencies=guarded)
    async def subscription_status(user_id: str, request: Request) -> dict[str, object]:
        """Return whether the user currently has paid access."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.subscription_service.get_status(user_id))

    return app


def _resolve_timezone(container: AppContainer, name: str | None) -> ZoneInfo:
    try:
        return parse_timezone(name, default=container.settings.default_timezone)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    payload = asdict(profile)
    payload["created_at"] = profile.created_at.isoformat()
    payload["updated_at"] = profile.updated_at.isoformat()
    return payload


def _meal_payload(meal: Meal) -> dict[str, object]:
    return {
        "id": meal.id,
        "food_name": meal.food_name,
        "calories": meal.calories,
        "macros": asdict(meal.macros),
        "ai_advice": meal.ai_advice,
        "image_url": meal.image_url,
        "created_at": meal.created_at.isoformat(),
        "date": meal.day.isoformat() if meal.day else None,
    }


def _hits_payload(hits: MacroHits) -> dict[str, bool]:
    return {
        "protein": hits.protein,
        "carbs": hits.carbs,
        "fat": hits.fat,
        "all": hits.all,
    }


def _day_payload(day: DayData) -> dict[str, object]:
    return {
        "date": day.day.isoformat(),
        "calories": day.calories,
        "protein": day.protein,
        "carbs": day.carbs,
        "fat": day.fat,
        "meal_count": len(day.meals),
        "macros_hit": _hits_payload(day.macros_hit),
    }


def _day_ref(day: DayData | None) -> str | None:
    return day.day.isoformat() if day else None
