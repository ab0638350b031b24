import asyncio
from typing import List, Optional

from structlog import get_logger

from config.optimization_config import OptimizationConfig
from exceptions.custom_exceptions import OracleInvocationError, PredictionPipelineError
from models.channel_model import ChannelRecord
from models.prediction_model import (
    OptimizationRequest,
    OptimizationSnapshot,
    PredictionResult,
    SessionStatus,
)
from services.optimization_request_builder import build_optimization_request
from services.prediction_oracle import PredictionOracle
from services.prediction_response_parser import parse_prediction_response

logger = get_logger(__name__)


class OptimizationSession:
    """
    Request lifecycle for budget optimization: idle -> loading -> success/error.

    Only one oracle call may be in flight. Triggering while loading is a no-op.
    A failed call never clears the last successful prediction.
    """

    def __init__(self, oracle: PredictionOracle):
        self.oracle = oracle
        self.status: SessionStatus = SessionStatus.IDLE
        self.prediction: Optional[PredictionResult] = None
        self.error_message: Optional[str] = None
        self.last_error: Optional[BaseException] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_loading(self) -> bool:
        return self.status == SessionStatus.LOADING

    @property
    def can_trigger(self) -> bool:
        return not self.is_loading

    @property
    def current_task(self) -> Optional[asyncio.Task]:
        return self._task if self.is_loading else None

    def trigger(
        self, channels: List[ChannelRecord], target_budget: float
    ) -> Optional[asyncio.Task]:
        """
        Start an optimization run in the background.
        Returns the running task, or None when a run is already in flight.
        """
        if self.is_loading:
            logger.info("optimization_trigger_ignored", reason="request_in_flight")
            return None

        request = build_optimization_request(channels, target_budget)

        self.status = SessionStatus.LOADING
        self.error_message = None
        self.last_error = None
        self._task = asyncio.create_task(self._run(request))
        self._task.add_done_callback(self._on_task_done)
        logger.info(
            "optimization_started",
            target_budget=target_budget,
            channel_count=len(request.channels),
        )
        return self._task

    async def optimize(
        self, channels: List[ChannelRecord], target_budget: float
    ) -> Optional[PredictionResult]:
        """Trigger and wait. None when the run failed or was not started."""
        task = self.trigger(channels, target_budget)
        if task is None:
            return None
        return await task

    async def _run(self, request: OptimizationRequest) -> Optional[PredictionResult]:
        try:
            raw_text = await self._invoke_oracle(request)
            result = parse_prediction_response(raw_text)
        except PredictionPipelineError as e:
            self._fail(e)
            return None

        self.prediction = result
        self.error_message = None
        self.status = SessionStatus.SUCCESS
        logger.info(
            "optimization_succeeded",
            target_budget=request.target_budget,
            suggestion_count=len(result.suggestions),
            projected_revenue=result.projectedTotalRevenue,
        )
        return result

    async def _invoke_oracle(self, request: OptimizationRequest) -> Optional[str]:
        try:
            return await self.oracle.invoke(
                prompt=request.prompt,
                schema=request.response_schema,
                system_instruction=request.system_instruction,
                temperature=request.temperature,
            )
        except PredictionPipelineError:
            raise
        except Exception as e:
            raise OracleInvocationError(f"{type(e).__name__}: {e}") from e

    def _on_task_done(self, task: asyncio.Task) -> None:
        # A task cancelled before its first step never runs _run at all
        if task is not self._task or not task.cancelled():
            return
        if self.is_loading:
            self._fail(
                asyncio.CancelledError(), message="Optimization was cancelled."
            )

    def _fail(
        self, error: BaseException, message: str = OptimizationConfig.ERROR_MESSAGE
    ) -> None:
        self.status = SessionStatus.ERROR
        self.error_message = message
        self.last_error = error
        logger.error(
            "optimization_failed",
            error_type=type(error).__name__,
            error=str(error),
            kept_previous_result=self.prediction is not None,
        )

    def snapshot(self) -> OptimizationSnapshot:
        return OptimizationSnapshot(
            status=self.status,
            is_loading=self.is_loading,
            can_trigger=self.can_trigger,
            has_result=self.prediction is not None,
            prediction=self.prediction,
            error_message=self.error_message,
        )
