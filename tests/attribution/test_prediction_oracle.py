from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai import types

from exceptions.custom_exceptions import OracleInvocationError
from services import genai_client
from services.genai_client import generate_structured_content
from services.optimization_request_builder import build_response_schema
from services.prediction_oracle import GeminiPredictionOracle


@pytest.fixture(autouse=True)
def clear_client_cache():
    genai_client.get_client.cache_clear()
    yield
    genai_client.get_client.cache_clear()


def _mock_client(text):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text=text))
    return client


@pytest.mark.asyncio
async def test_missing_api_key_fails_at_invocation(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    oracle = GeminiPredictionOracle()

    with pytest.raises(OracleInvocationError, match="GEMINI_API_KEY"):
        await oracle.invoke("prompt", build_response_schema(), "system", 0.2)


@pytest.mark.asyncio
async def test_structured_call_uses_json_mode_and_schema():
    schema = build_response_schema()
    client = _mock_client('{"ok": true}')

    with patch("services.genai_client.get_client", return_value=client):
        text = await generate_structured_content(
            prompt="prompt body",
            response_schema=schema,
            system_instruction="be an analyst",
            temperature=0.2,
            model="gemini-2.5-flash",
        )

    assert text == '{"ok": true}'
    kwargs = client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["contents"] == "prompt body"
    config = kwargs["config"]
    assert isinstance(config, types.GenerateContentConfig)
    assert config.response_mime_type == "application/json"
    assert config.response_schema == schema
    assert config.temperature == pytest.approx(0.2)
    assert config.system_instruction == "be an analyst"


@pytest.mark.asyncio
async def test_empty_body_is_passed_through():
    client = _mock_client(None)

    with patch("services.genai_client.get_client", return_value=client):
        text = await GeminiPredictionOracle().invoke(
            "prompt", build_response_schema(), "system", 0.2
        )

    assert text is None


@pytest.mark.asyncio
async def test_service_errors_are_wrapped():
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=TimeoutError("deadline"))

    with patch("services.genai_client.get_client", return_value=client):
        with pytest.raises(OracleInvocationError) as exc_info:
            await GeminiPredictionOracle(model="gemini-test").invoke(
                "prompt", build_response_schema(), "system", 0.2
            )

    assert isinstance(exc_info.value.__cause__, TimeoutError)
    assert "TimeoutError" in exc_info.value.message
