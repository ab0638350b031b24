from typing import Optional

from pydantic import ValidationError
from structlog import get_logger

from exceptions.custom_exceptions import MalformedResponseError, MissingResponseError
from models.prediction_model import PredictionResult
from services.json_utils import strip_code_fences

logger = get_logger(__name__)


def parse_prediction_response(raw_text: Optional[str]) -> PredictionResult:
    """
    Parse and strictly validate the model's JSON.

    Every required field must be present with the expected primitive type.
    Values are returned as given: no clamping and no check that recommended
    spend adds up to the budget.
    """
    if raw_text is None or not raw_text.strip():
        raise MissingResponseError()

    content = strip_code_fences(raw_text)
    try:
        return PredictionResult.model_validate_json(content)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_input=False)
        invalid_json = any(err["type"] == "json_invalid" for err in errors)
        logger.warning(
            "prediction_response_invalid",
            reason="invalid_json" if invalid_json else "schema_mismatch",
            error_count=len(errors),
            first_error=errors[0]["msg"] if errors else None,
        )
        message = (
            "Prediction response is not valid JSON"
            if invalid_json
            else "Prediction response does not match the expected structure"
        )
        raise MalformedResponseError(message, details=errors) from e
