import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from structlog import get_logger

from core.dashboard_state import DashboardState
from models.channel_model import ChannelEdit
from models.prediction_model import OptimizeRequestBody
from services.channel_metrics_service import build_efficiency_frontier
from utils.response_helpers import success_response

logger = get_logger(__name__)

router = APIRouter(prefix="/api/ds/attribution", tags=["attribution"])


def get_dashboard(request: Request) -> DashboardState:
    return request.app.state.dashboard


@router.get("/channels")
async def list_channels(dashboard: DashboardState = Depends(get_dashboard)):
    return success_response(dashboard.overview())


@router.patch("/channels/{channel_id}")
async def edit_channel(
    channel_id: str,
    edit: ChannelEdit,
    dashboard: DashboardState = Depends(get_dashboard),
):
    updated = dashboard.edit_channel(channel_id, edit.field, edit.value)
    return success_response(
        {"channel": updated, "metrics": dashboard.metrics()}
    )


@router.get("/metrics")
async def get_metrics(dashboard: DashboardState = Depends(get_dashboard)):
    return success_response(dashboard.metrics())


@router.get("/efficiency")
async def get_efficiency_frontier(dashboard: DashboardState = Depends(get_dashboard)):
    """Spend (x) vs ROAS (y) per channel; z is revenue. Includes the break-even line."""
    return success_response(build_efficiency_frontier(dashboard.store.channels))


@router.post("/optimize")
async def start_optimization(
    body: Optional[OptimizeRequestBody] = None,
    wait: bool = Query(False, description="Wait for the prediction before responding"),
    dashboard: DashboardState = Depends(get_dashboard),
):
    target_budget = body.target_budget if body else None
    response, task = dashboard.start_optimization(target_budget)

    if task is None:
        # A run is already in flight; nothing was started
        return success_response(response)

    if wait:
        # The run outlives a caller that stops waiting
        await asyncio.shield(task)
        response.optimization = dashboard.session.snapshot()
        return success_response(response)

    return success_response(response, status_code=status.HTTP_202_ACCEPTED)


@router.get("/optimization")
async def get_optimization(dashboard: DashboardState = Depends(get_dashboard)):
    return success_response(dashboard.session.snapshot())


@router.get("/optimization/comparison")
async def get_spend_comparison(dashboard: DashboardState = Depends(get_dashboard)):
    return success_response(dashboard.spend_comparison())
