import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from core.dashboard_state import DashboardState
from core.metadata import SERVICE_NAME, VERSION
from services.prediction_oracle import GeminiPredictionOracle

logger = structlog.get_logger(__name__)

STARTUP_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version}
║  Python {python} | env: {env} | {log_level}
╚══════════════════════════════════════════════╝"""

SHUTDOWN_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version} shutting down
╚══════════════════════════════════════════════╝"""


def initialize_dashboard(app: FastAPI) -> DashboardState:
    # Tests install their own state with a fake oracle before startup
    dashboard = getattr(app.state, "dashboard", None)
    if dashboard is None:
        dashboard = DashboardState.create(oracle=GeminiPredictionOracle())
        app.state.dashboard = dashboard
    if not os.getenv("GEMINI_API_KEY"):
        logger.warning(
            "GEMINI_API_KEY not set; optimization requests will fail",
            component="oracle",
        )
    logger.info(
        "Dashboard state initialized",
        component="dashboard",
        channel_count=len(dashboard.store),
    )
    return dashboard


async def cancel_inflight_optimization(dashboard: DashboardState) -> None:
    task = dashboard.session.current_task
    if task is None:
        return
    task.cancel()
    logger.info("In-flight optimization cancelled", component="oracle")


@asynccontextmanager
async def lifespan(app: FastAPI):
    dashboard = initialize_dashboard(app)

    environment = os.getenv("ENVIRONMENT", "local")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    python_version = sys.version.split()[0]

    print(
        STARTUP_BANNER.format(
            service=SERVICE_NAME,
            version=VERSION,
            python=python_version,
            env=environment,
            log_level=log_level,
        )
    )
    logger.info(
        "Service started",
        service=SERVICE_NAME,
        version=VERSION,
        python=python_version,
        environment=environment,
        log_level=log_level,
    )
    try:
        yield
    finally:
        print(SHUTDOWN_BANNER.format(service=SERVICE_NAME, version=VERSION))
        logger.info("Service shutting down", service=SERVICE_NAME, version=VERSION)
        await cancel_inflight_optimization(dashboard)
