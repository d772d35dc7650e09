"""Tests for the OpenAI vision adapter."""

import asyncio
from dataclasses import dataclass, field

import pytest

from snaphabit.adapters.openai_vision_client import OpenAIVisionClient
from snaphabit.services.errors import VisionAnalysisError
from snaphabit.services.vision import ANALYSIS_SCHEMA


@dataclass
class FakeResponse:
    output_text: str


@dataclass
class FakeResponses:
    output_text: str
    calls: list[dict[str, object]] = field(default_factory=list)

    async def create(self, **kwargs: object) -> FakeResponse:
        self.calls.append(kwargs)
        return FakeResponse(output_text=self.output_text)


@dataclass
class FakeOpenAI:
    responses: FakeResponses


def _extract(client: OpenAIVisionClient, **overrides: object) -> dict[str, object]:
    params: dict[str, object] = {
        "model": "gpt-4o-mini",
        "reasoning_effort": None,
        "store": False,
        "image_data_url": "data:image/jpeg;base64,AAAA",
        "schema": ANALYSIS_SCHEMA,
        "prompt": "Analyze this meal",
    }
    params.update(overrides)
    return asyncio.run(client.extract(**params))  # type: ignore[arg-type]


def test_extract_sends_schema_and_parses_output() -> None:
    responses = FakeResponses(output_text='{"food_name": "Ramen", "calories": 650}')
    client = OpenAIVisionClient(client=FakeOpenAI(responses))  # type: ignore[arg-type]

    result = _extract(client, reasoning_effort="low")

    assert result == {"food_name": "Ramen", "calories": 650}
    request = responses.calls[0]
    assert request["text"]["format"]["name"] == "meal_analysis"  # type: ignore[index]
    assert request["text"]["format"]["strict"] is True  # type: ignore[index]
    assert request["reasoning"] == {"effort": "low"}
    assert request["store"] is False


def test_extract_omits_reasoning_when_unset() -> None:
    responses = FakeResponses(output_text="{}")
    client = OpenAIVisionClient(client=FakeOpenAI(responses))  # type: ignore[arg-type]

    _extract(client)

    assert "reasoning" not in responses.calls[0]


@pytest.mark.parametrize("output_text", ["", "not json", "[1, 2]"])
def test_extract_rejects_unusable_output(output_text: str) -> None:
    responses = FakeResponses(output_text=output_text)
    client = OpenAIVisionClient(client=FakeOpenAI(responses))  # type: ignore[arg-type]

    with pytest.raises(VisionAnalysisError):
        _extract(client)
