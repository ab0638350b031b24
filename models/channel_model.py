from typing import Optional, Literal, Tuple, get_args

from pydantic import BaseModel, Field

from utils.metrics_utils import derive_channel_metrics

# Fields a client may edit on a channel; cpa and roas are always derived.
EditableChannelField = Literal["spend", "conversions", "revenue", "saturation_point"]
EDITABLE_CHANNEL_FIELDS: Tuple[str, ...] = get_args(EditableChannelField)

# Editing any of these requires cpa/roas to be recomputed.
METRIC_INPUT_FIELDS: Tuple[str, ...] = ("spend", "conversions", "revenue")


class ChannelRecord(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    spend: float = Field(..., ge=0, allow_inf_nan=False)
    conversions: float = Field(..., ge=0, allow_inf_nan=False)
    revenue: float = Field(..., ge=0, allow_inf_nan=False)
    cpa: float = 0.0
    roas: float = 0.0
    saturation_point: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Estimated spend level where diminishing returns hit hard",
    )

    @classmethod
    def from_inputs(
        cls,
        id: str,
        name: str,
        spend: float,
        conversions: float,
        revenue: float,
        saturation_point: Optional[float] = None,
    ) -> "ChannelRecord":
        """Build a record with cpa/roas derived from its inputs."""
        cpa, roas = derive_channel_metrics(spend, conversions, revenue)
        return cls(
            id=id,
            name=name,
            spend=spend,
            conversions=conversions,
            revenue=revenue,
            cpa=cpa,
            roas=roas,
            saturation_point=saturation_point,
        )


class ChannelEdit(BaseModel):
    field: EditableChannelField
    value: float = Field(..., ge=0, allow_inf_nan=False)


class AggregateMetrics(BaseModel):
    total_spend: float
    total_revenue: float
    total_conversions: float
    blended_roas: float
    blended_cpa: float
    roas_health: Literal["Healthy", "Needs Optimization"]


class EfficiencyPoint(BaseModel):
    """One channel on the spend-vs-ROAS efficiency frontier."""

    name: str
    x: float  # spend
    y: float  # roas
    z: float  # revenue, drives bubble size
    band: Literal["efficient", "neutral", "poor"]


class EfficiencyFrontier(BaseModel):
    points: list[EfficiencyPoint]
    break_even_roas: float


class ChannelOverview(BaseModel):
    channels: list[ChannelRecord]
    metrics: AggregateMetrics
