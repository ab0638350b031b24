import json

import pytest

from exceptions.custom_exceptions import MalformedResponseError, MissingResponseError
from models.prediction_model import PredictionResult
from services.prediction_response_parser import parse_prediction_response


def test_valid_response_is_returned_verbatim(prediction_payload, prediction_text):
    result = parse_prediction_response(prediction_text)

    assert isinstance(result, PredictionResult)
    assert result.model_dump() == prediction_payload


def test_numbers_are_not_reconciled_against_budget(prediction_payload):
    # recommended spend sums to 20000, far from the 42000 budget
    result = parse_prediction_response(json.dumps(prediction_payload))

    assert sum(s.recommendedSpend for s in result.suggestions) == 20000
    assert result.totalBudget == 42000


def test_code_fenced_json_is_accepted(prediction_text):
    result = parse_prediction_response(f"```json\n{prediction_text}\n```")

    assert len(result.suggestions) == 2


@pytest.mark.parametrize("raw", [None, "", "   \n"])
def test_missing_text_raises_missing_response(raw):
    with pytest.raises(MissingResponseError):
        parse_prediction_response(raw)


def test_empty_object_raises_malformed():
    with pytest.raises(MalformedResponseError) as exc_info:
        parse_prediction_response("{}")

    assert not isinstance(exc_info.value, MissingResponseError)
    missing = {err["loc"][0] for err in exc_info.value.details}
    assert {"totalBudget", "suggestions", "summaryAnalysis"} <= missing


def test_invalid_json_raises_malformed():
    with pytest.raises(MalformedResponseError, match="not valid JSON"):
        parse_prediction_response("Sure! Here is your plan: {totalBudget: 5}")


def test_top_level_array_raises_malformed(prediction_payload):
    with pytest.raises(MalformedResponseError):
        parse_prediction_response(json.dumps([prediction_payload]))


@pytest.mark.parametrize(
    "field",
    [
        "channelName",
        "currentSpend",
        "recommendedSpend",
        "predictedConversions",
        "predictedRevenue",
        "reasoning",
        "action",
    ],
)
def test_suggestion_missing_any_field_raises_malformed(prediction_payload, field):
    del prediction_payload["suggestions"][1][field]

    with pytest.raises(MalformedResponseError, match="expected structure"):
        parse_prediction_response(json.dumps(prediction_payload))


@pytest.mark.parametrize(
    "field, value",
    [
        ("recommendedSpend", "16500"),
        ("predictedConversions", True),
        ("channelName", 42),
        ("reasoning", None),
        ("action", "pause"),
        ("currentSpend", -10),
    ],
)
def test_suggestion_wrong_type_raises_malformed(prediction_payload, field, value):
    prediction_payload["suggestions"][0][field] = value

    with pytest.raises(MalformedResponseError):
        parse_prediction_response(json.dumps(prediction_payload))


def test_top_level_wrong_type_raises_malformed(prediction_payload):
    prediction_payload["projectedTotalRevenue"] = "112k"

    with pytest.raises(MalformedResponseError):
        parse_prediction_response(json.dumps(prediction_payload))


def test_integer_numbers_are_accepted(prediction_payload):
    result = parse_prediction_response(json.dumps(prediction_payload))

    assert result.suggestions[0].predictedConversions == 480.0
