import json
import re

import pytest
from google.genai import types

from config.optimization_config import OptimizationConfig
from services.optimization_request_builder import (
    PREDICTION_REQUIRED_FIELDS,
    SUGGESTION_REQUIRED_FIELDS,
    build_optimization_request,
    build_response_schema,
)


def _embedded_channels(prompt: str) -> list:
    match = re.search(r"(\[.*\])", prompt, flags=re.DOTALL)
    assert match, "prompt should embed the channel list as JSON"
    return json.loads(match.group(1))


def test_prompt_embeds_channels_and_budget(channels):
    request = build_optimization_request(channels, 50000)

    embedded = _embedded_channels(request.prompt)
    assert [c["name"] for c in embedded] == [c.name for c in channels]
    assert embedded[0]["spend"] == 15000
    assert "cpa" in embedded[0] and "roas" in embedded[0]
    assert "Target Total Budget for Next Period: $50000" in request.prompt


def test_request_carries_fixed_low_temperature_and_model(channels):
    request = build_optimization_request(channels, 42000)

    assert request.temperature == pytest.approx(0.2)
    assert request.model == OptimizationConfig.GEMINI_MODEL
    assert "Media Mix Modeling" in request.system_instruction


@pytest.mark.parametrize("budget", [0, 1_000_000, 12.5])
def test_budget_is_not_validated(channels, budget):
    request = build_optimization_request(channels, budget)

    assert request.target_budget == budget


def test_request_snapshot_is_independent_of_caller_list(channels):
    request = build_optimization_request(channels, 42000)
    channels.pop()

    assert len(request.channels) == 5


def test_schema_requires_all_top_level_fields():
    schema = build_response_schema()

    assert schema.type == types.Type.OBJECT
    assert set(schema.required) == set(PREDICTION_REQUIRED_FIELDS)
    assert set(schema.properties) == set(PREDICTION_REQUIRED_FIELDS)
    assert schema.properties["summaryAnalysis"].type == types.Type.STRING
    assert schema.properties["totalBudget"].type == types.Type.NUMBER


def test_schema_requires_all_suggestion_fields():
    suggestions = build_response_schema().properties["suggestions"]

    assert suggestions.type == types.Type.ARRAY
    item = suggestions.items
    assert set(item.required) == set(SUGGESTION_REQUIRED_FIELDS)
    assert len(item.required) == 7
    assert item.properties["action"].enum == ["increase", "decrease", "maintain"]
    assert item.properties["reasoning"].type == types.Type.STRING
    assert item.properties["recommendedSpend"].type == types.Type.NUMBER
