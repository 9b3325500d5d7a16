from app.engine.types import ThresholdConfig, Zone


def classify_zone(burnout_score: float, readiness_score: float, thresholds: ThresholdConfig) -> Zone:
    """Red wins over green when both cutoffs are met. Always an absolute comparison."""
    if burnout_score >= thresholds.burnout_red_threshold:
        return Zone.red
    if readiness_score >= thresholds.readiness_green_threshold:
        return Zone.green
    return Zone.yellow
