"""Owned, in-memory state behind the attribution dashboard.

One instance lives on ``app.state.dashboard`` and is handed to request
handlers through a dependency. Nothing here is a module global, so tests build
their own instance with a fake oracle.
"""

from typing import Iterable, List, Optional

from core.channel_store import ChannelStore
from core.seed_data import initial_channels
from exceptions.custom_exceptions import ChannelNotFoundException
from models.channel_model import AggregateMetrics, ChannelOverview, ChannelRecord
from models.prediction_model import OptimizeResponse, SpendComparison
from services.channel_metrics_service import aggregate_channel_metrics, apply_channel_edit
from services.optimization_session import OptimizationSession
from services.prediction_oracle import PredictionOracle


class DashboardState:
    def __init__(self, store: ChannelStore, session: OptimizationSession):
        self.store = store
        self.session = session

    @classmethod
    def create(
        cls,
        oracle: PredictionOracle,
        channels: Optional[Iterable[ChannelRecord]] = None,
    ) -> "DashboardState":
        seed = initial_channels() if channels is None else channels
        return cls(ChannelStore(seed), OptimizationSession(oracle))

    def metrics(self) -> AggregateMetrics:
        return aggregate_channel_metrics(self.store.channels)

    def overview(self) -> ChannelOverview:
        channels = self.store.channels
        return ChannelOverview(
            channels=channels, metrics=aggregate_channel_metrics(channels)
        )

    def edit_channel(self, channel_id: str, field: str, value: float) -> ChannelRecord:
        channel = self.store.get(channel_id)
        if channel is None:
            raise ChannelNotFoundException(channel_id)

        updated = apply_channel_edit(channel, field, value)
        self.store.update_channel(updated)
        return updated

    def start_optimization(self, target_budget: Optional[float] = None):
        """
        Trigger a run for the current channels.
        Returns (response, task); task is None when a run was already in flight.
        """
        if target_budget is None:
            target_budget = self.metrics().total_spend

        task = self.session.trigger(self.store.channels, target_budget)
        response = OptimizeResponse(
            started=task is not None,
            target_budget=target_budget,
            optimization=self.session.snapshot(),
        )
        return response, task

    def spend_comparison(self) -> List[SpendComparison]:
        """Current vs recommended spend for the last prediction, matched by channel name."""
        prediction = self.session.prediction
        if prediction is None:
            return []
        return [
            SpendComparison(
                name=s.channelName,
                current=s.currentSpend,
                recommended=s.recommendedSpend,
                delta=s.recommendedSpend - s.currentSpend,
                action=s.action,
            )
            for s in prediction.suggestions
        ]
