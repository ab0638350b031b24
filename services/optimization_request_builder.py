import json
from typing import List

from google.genai import types

from config.optimization_config import OptimizationConfig
from models.channel_model import ChannelRecord
from models.prediction_model import OptimizationRequest, SUGGESTION_ACTION_VALUES
from utils.prompt_loader import load_prompt, render_prompt

SUGGESTION_REQUIRED_FIELDS = [
    "channelName",
    "currentSpend",
    "recommendedSpend",
    "predictedConversions",
    "predictedRevenue",
    "reasoning",
    "action",
]

PREDICTION_REQUIRED_FIELDS = [
    "totalBudget",
    "suggestions",
    "projectedTotalConversions",
    "projectedTotalRevenue",
    "summaryAnalysis",
]


def build_response_schema() -> types.Schema:
    """Output contract the model is asked to follow."""
    suggestion = types.Schema(
        type=types.Type.OBJECT,
        properties={
            "channelName": types.Schema(type=types.Type.STRING),
            "currentSpend": types.Schema(type=types.Type.NUMBER),
            "recommendedSpend": types.Schema(type=types.Type.NUMBER),
            "predictedConversions": types.Schema(type=types.Type.NUMBER),
            "predictedRevenue": types.Schema(type=types.Type.NUMBER),
            "reasoning": types.Schema(
                type=types.Type.STRING,
                description="Why this change was made (e.g., 'High ROAS headroom', 'Hit diminishing returns')",
            ),
            "action": types.Schema(
                type=types.Type.STRING,
                enum=list(SUGGESTION_ACTION_VALUES),
            ),
        },
        required=SUGGESTION_REQUIRED_FIELDS,
    )

    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "totalBudget": types.Schema(
                type=types.Type.NUMBER,
                description="The total budget used in calculation",
            ),
            "projectedTotalConversions": types.Schema(
                type=types.Type.NUMBER,
                description="Sum of predicted conversions",
            ),
            "projectedTotalRevenue": types.Schema(
                type=types.Type.NUMBER,
                description="Sum of predicted revenue",
            ),
            "summaryAnalysis": types.Schema(
                type=types.Type.STRING,
                description="A brief strategic summary of the changes (max 2 sentences).",
            ),
            "suggestions": types.Schema(type=types.Type.ARRAY, items=suggestion),
        },
        required=PREDICTION_REQUIRED_FIELDS,
    )


def build_optimization_request(
    channels: List[ChannelRecord], target_budget: float
) -> OptimizationRequest:
    """
    Package the current channels and a what-if budget for the prediction model.

    The budget is not validated; zero or a value far from current spend is a
    legitimate scenario.
    """
    snapshot = [c.model_copy() for c in channels]
    channel_data = json.dumps(
        [c.model_dump(exclude_none=True) for c in snapshot], indent=2
    )

    return OptimizationRequest(
        target_budget=target_budget,
        channels=snapshot,
        prompt=render_prompt(
            OptimizationConfig.USER_PROMPT,
            channel_data=channel_data,
            target_budget=target_budget,
        ),
        system_instruction=load_prompt(OptimizationConfig.SYSTEM_PROMPT),
        response_schema=build_response_schema(),
        temperature=OptimizationConfig.TEMPERATURE,
        model=OptimizationConfig.GEMINI_MODEL,
    )
