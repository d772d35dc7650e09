"""Meal photo analysis using a vision LLM."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from snaphabit.domain.vision import MealAnalysis
from snaphabit.services.errors import VisionAnalysisError

_logger = logging.getLogger(__name__)

_MACROS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
    },
    "required": ["protein", "carbs", "fat"],
    "additionalProperties": False,
}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "food_name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "macros": _MACROS_SCHEMA,
        "ai_advice": {"type": "string"},
    },
    "required": ["food_name", "calories", "macros", "ai_advice"],
    "additionalProperties": False,
}

ANALYSIS_PROMPT = (
    "You are a nutrition expert. Analyze the food photo and provide: "
    "a specific food name, a realistic calorie estimate, protein, carbs "
    "and fat in grams, and 2-3 sentences of personalized nutrition advice "
    "about what nutrients might be missing or what would complement the meal."
)


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

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
        """Return structured vision extraction data."""


@dataclass
class VisionService:
    """Service that prepares vision prompts and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(
        self, image_bytes: bytes, hint: str | None = None
    ) -> MealAnalysis:
        """Estimate nutrition for a meal photo via the configured client."""
        prompt = ANALYSIS_PROMPT
        if hint:
            prompt = f"{prompt} The user describes the meal as: {hint}."
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image_bytes),
            schema=ANALYSIS_SCHEMA,
            prompt=prompt,
        )
        if not raw.get("food_name") and hint:
            raw = {**raw, "food_name": hint}
        try:
            return MealAnalysis.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Vision output rejected: %s", exc)
            raise VisionAnalysisError(
                "Vision model returned an unusable analysis"
            ) from exc


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
