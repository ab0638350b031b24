"""
Shared fixtures for the attribution tests.
The prediction oracle is always an AsyncMock; nothing here touches the network.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.dashboard_state import DashboardState
from core.seed_data import initial_channels


def build_prediction_payload(total_budget: float = 42000, summary: str = "Shift spend toward email and search.") -> dict:
    return {
        "totalBudget": total_budget,
        "suggestions": [
            {
                "channelName": "Google Search Ads",
                "currentSpend": 15000,
                "recommendedSpend": 16500,
                "predictedConversions": 480,
                "predictedRevenue": 48600,
                "reasoning": "High ROAS headroom",
                "action": "increase",
            },
            {
                "channelName": "YouTube",
                "currentSpend": 5000,
                "recommendedSpend": 3500,
                "predictedConversions": 60,
                "predictedRevenue": 4500,
                "reasoning": "Hit diminishing returns",
                "action": "decrease",
            },
        ],
        "projectedTotalConversions": 1120,
        "projectedTotalRevenue": 112000,
        "summaryAnalysis": summary,
    }


@pytest.fixture
def prediction_payload() -> dict:
    return build_prediction_payload()


@pytest.fixture
def prediction_text(prediction_payload: dict) -> str:
    return json.dumps(prediction_payload)


@pytest.fixture
def oracle(prediction_text: str) -> MagicMock:
    mock = MagicMock()
    mock.invoke = AsyncMock(return_value=prediction_text)
    return mock


@pytest.fixture
def channels():
    return initial_channels()


@pytest.fixture
def dashboard(oracle: MagicMock) -> DashboardState:
    return DashboardState.create(oracle=oracle)
