import math
from typing import List

from exceptions.custom_exceptions import BusinessValidationException
from models.channel_model import (
    AggregateMetrics,
    ChannelRecord,
    EfficiencyFrontier,
    EfficiencyPoint,
    EDITABLE_CHANNEL_FIELDS,
    METRIC_INPUT_FIELDS,
)
from utils.metrics_utils import (
    BREAK_EVEN_ROAS,
    classify_efficiency_band,
    classify_roas_health,
    derive_channel_metrics,
    safe_ratio,
)


def apply_channel_edit(channel: ChannelRecord, field: str, value: float) -> ChannelRecord:
    """
    Returns a copy of the channel with one field edited.
    Editing spend, conversions or revenue recomputes cpa and roas together.
    """
    if field not in EDITABLE_CHANNEL_FIELDS:
        raise BusinessValidationException(f"Field '{field}' is not editable")
    if value is None or not math.isfinite(value) or value < 0:
        raise BusinessValidationException(
            f"'{field}' must be a finite, non-negative number"
        )

    update = {field: float(value)}
    if field in METRIC_INPUT_FIELDS:
        edited = {
            "spend": channel.spend,
            "conversions": channel.conversions,
            "revenue": channel.revenue,
            **update,
        }
        cpa, roas = derive_channel_metrics(
            edited["spend"], edited["conversions"], edited["revenue"]
        )
        update.update(cpa=cpa, roas=roas)

    return channel.model_copy(update=update)


def aggregate_channel_metrics(channels: List[ChannelRecord]) -> AggregateMetrics:
    total_spend = sum(c.spend for c in channels)
    total_revenue = sum(c.revenue for c in channels)
    total_conversions = sum(c.conversions for c in channels)
    blended_roas = safe_ratio(total_revenue, total_spend)

    return AggregateMetrics(
        total_spend=total_spend,
        total_revenue=total_revenue,
        total_conversions=total_conversions,
        blended_roas=blended_roas,
        blended_cpa=safe_ratio(total_spend, total_conversions),
        roas_health=classify_roas_health(blended_roas),
    )


def build_efficiency_frontier(channels: List[ChannelRecord]) -> EfficiencyFrontier:
    """Spend vs ROAS per channel, sized by revenue and banded by ROAS."""
    points = [
        EfficiencyPoint(
            name=c.name,
            x=c.spend,
            y=c.roas,
            z=c.revenue,
            band=classify_efficiency_band(c.roas),
        )
        for c in channels
    ]
    return EfficiencyFrontier(points=points, break_even_roas=BREAK_EVEN_ROAS)
