from typing import Tuple

# Blended ROAS above this is reported as healthy.
HEALTHY_ROAS_THRESHOLD = 2.5


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def derive_channel_metrics(
    spend: float, conversions: float, revenue: float
) -> Tuple[float, float]:
    """
    Returns (cpa, roas) for a single channel.
    CPA is 0 when there are no conversions, ROAS is 0 when there is no spend.
    """
    cpa = safe_ratio(spend, conversions)
    roas = safe_ratio(revenue, spend)
    return cpa, roas


def classify_roas_health(blended_roas: float) -> str:
    return "Healthy" if blended_roas > HEALTHY_ROAS_THRESHOLD else "Needs Optimization"


# Efficiency frontier bands and the break-even reference line
EFFICIENT_ROAS_THRESHOLD = 3.0
POOR_ROAS_THRESHOLD = 1.5
BREAK_EVEN_ROAS = 1.0


def classify_efficiency_band(roas: float) -> str:
    if roas > EFFICIENT_ROAS_THRESHOLD:
        return "efficient"
    if roas < POOR_ROAS_THRESHOLD:
        return "poor"
    return "neutral"
