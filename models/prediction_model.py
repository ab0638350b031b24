from enum import Enum
from typing import List, Literal, Optional, Tuple, get_args

from google.genai import types
from pydantic import BaseModel, ConfigDict, Field

from models.channel_model import ChannelRecord

SuggestionAction = Literal["increase", "decrease", "maintain"]
SUGGESTION_ACTION_VALUES: Tuple[str, ...] = get_args(SuggestionAction)


class OptimizationSuggestion(BaseModel):
    # strict: the oracle is untrusted, "1500" is not a number
    model_config = ConfigDict(strict=True)

    channelName: str
    currentSpend: float = Field(..., ge=0, allow_inf_nan=False)
    recommendedSpend: float = Field(..., ge=0, allow_inf_nan=False)
    predictedConversions: float = Field(..., ge=0, allow_inf_nan=False)
    predictedRevenue: float = Field(..., ge=0, allow_inf_nan=False)
    reasoning: str
    action: SuggestionAction


class PredictionResult(BaseModel):
    model_config = ConfigDict(strict=True)

    totalBudget: float = Field(..., ge=0, allow_inf_nan=False)
    suggestions: List[OptimizationSuggestion]
    projectedTotalConversions: float = Field(..., ge=0, allow_inf_nan=False)
    projectedTotalRevenue: float = Field(..., ge=0, allow_inf_nan=False)
    summaryAnalysis: str


class OptimizationRequest(BaseModel):
    """Everything needed for a single oracle call. Built fresh per call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    target_budget: float
    channels: List[ChannelRecord]
    prompt: str
    system_instruction: str
    response_schema: types.Schema
    temperature: float
    model: str


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class OptimizationSnapshot(BaseModel):
    status: SessionStatus
    is_loading: bool
    can_trigger: bool
    has_result: bool
    prediction: Optional[PredictionResult] = None
    error_message: Optional[str] = None


class OptimizeRequestBody(BaseModel):
    target_budget: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        description="What-if total budget; defaults to current total spend",
    )


class OptimizeResponse(BaseModel):
    started: bool
    target_budget: float
    optimization: OptimizationSnapshot


class SpendComparison(BaseModel):
    name: str
    current: float
    recommended: float
    delta: float
    action: SuggestionAction
