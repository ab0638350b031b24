from typing import Optional, Protocol

from google.genai import types
from structlog import get_logger

from config.optimization_config import OptimizationConfig
from exceptions.custom_exceptions import OracleInvocationError
from services.genai_client import generate_structured_content

logger = get_logger(__name__)


class PredictionOracle(Protocol):
    async def invoke(
        self,
        prompt: str,
        schema: types.Schema,
        system_instruction: str,
        temperature: float,
    ) -> Optional[str]: ...


class GeminiPredictionOracle:
    """Budget allocation model backed by Gemini's JSON response mode."""

    def __init__(self, model: str = OptimizationConfig.GEMINI_MODEL):
        self.model = model

    async def invoke(
        self,
        prompt: str,
        schema: types.Schema,
        system_instruction: str,
        temperature: float,
    ) -> Optional[str]:
        logger.info("oracle_invocation_started", model=self.model, temperature=temperature)
        try:
            text = await generate_structured_content(
                prompt=prompt,
                response_schema=schema,
                system_instruction=system_instruction,
                temperature=temperature,
                model=self.model,
            )
        except OracleInvocationError:
            raise
        except Exception as e:
            raise OracleInvocationError(
                f"Prediction service call failed: {type(e).__name__}: {e}"
            ) from e

        logger.info(
            "oracle_invocation_completed",
            model=self.model,
            response_chars=len(text) if text else 0,
        )
        return text
