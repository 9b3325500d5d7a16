"""
Interaction effects — risk factors that compound when they co-occur.

Rules (closed set)
------------------
  BURNOUT_SPIRAL      Sleep + Overtime + Focus Time
  SLEEP_STRESS_LOOP   Sleep + Heart Rate Variability
  MEETING_OVERLOAD    Meeting Load + Focus Time
  SEDENTARY_OVERWORK  Work Hours + Exercise

Every precondition factor must be present, negative, and have a magnitude
(0–100) strictly above the cutoff. Cutoffs come from the resolved
ThresholdConfig: all above `interaction_critical_threshold` → critical,
all above `interaction_high_threshold` → high.

A fired rule adds a fixed penalty to the burnout accumulator before the
final clamp, so interactions move the score, not just the explanation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.engine.factors import FactorSet
from app.engine.types import Factor, Impact, InteractionEffect, MetricKey, ThresholdConfig

logger = logging.getLogger(__name__)


class Severity:
    HIGH     = "high"
    CRITICAL = "critical"


PENALTIES = {
    Severity.HIGH: 0.05,
    Severity.CRITICAL: 0.10,
}


@dataclass(frozen=True)
class InteractionRule:
    name: str
    metrics: tuple[MetricKey, ...]
    description: str


RULES: tuple[InteractionRule, ...] = (
    InteractionRule(
        name="Burnout Spiral",
        metrics=(MetricKey.sleep, MetricKey.overtime, MetricKey.focus_time),
        description=(
            "Short sleep, sustained overtime and little focus time are reinforcing "
            "each other: long days erode sleep and fragmented work stretches the day further"
        ),
    ),
    InteractionRule(
        name="Sleep-Stress Loop",
        metrics=(MetricKey.sleep, MetricKey.hrv),
        description="Poor sleep and elevated physiological stress are compounding",
    ),
    InteractionRule(
        name="Meeting Overload",
        metrics=(MetricKey.meeting_load, MetricKey.focus_time),
        description="Heavy meeting load is crowding out time for focused work",
    ),
    InteractionRule(
        name="Sedentary Overwork",
        metrics=(MetricKey.work_hours, MetricKey.exercise),
        description="Long hours are displacing physical activity that normally aids recovery",
    ),
)


@dataclass(frozen=True)
class InteractionResult:
    effects: tuple[InteractionEffect, ...]
    penalty: float


def _rule_severity(
    rule: InteractionRule,
    factors: dict[MetricKey, Factor],
    thresholds: ThresholdConfig,
) -> Optional[str]:
    preconditions = [factors.get(key) for key in rule.metrics]
    if any(f is None or f.impact != Impact.negative for f in preconditions):
        return None
    weakest = min(f.magnitude for f in preconditions)
    if weakest > thresholds.interaction_critical_threshold:
        return Severity.CRITICAL
    if weakest > thresholds.interaction_high_threshold:
        return Severity.HIGH
    return None


def detect_interactions(factor_set: FactorSet, thresholds: ThresholdConfig) -> InteractionResult:
    if not thresholds.enable_interaction_effects:
        return InteractionResult(effects=(), penalty=0.0)

    factors = factor_set.by_key()
    effects = []
    for rule in RULES:
        severity = _rule_severity(rule, factors, thresholds)
        if severity is None:
            continue
        penalty = PENALTIES[severity]
        logger.info("Interaction rule '%s' fired at %s severity", rule.name, severity)
        effects.append(InteractionEffect(
            name=rule.name,
            severity=severity,
            description=rule.description,
            metrics=rule.metrics,
            penalty=penalty,
        ))
    return InteractionResult(
        effects=tuple(effects),
        penalty=sum(e.penalty for e in effects),
    )
