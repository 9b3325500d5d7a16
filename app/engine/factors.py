"""
Factor computation — trailing-window metric averages → signed, weighted factors.

Each metric is averaged over the days in the trailing window that actually
carry a value, compared against the personalized target, and turned into a
deviation in [-1, 1] (negative = unfavourable). The deviation times the
personalized weight is the factor's contribution.

    burnout_acc   += -c           if c < 0   else  -c * RELIEF
    readiness_acc +=  c           if c > 0   else   c * RELIEF
    score          = clamp(50 + acc * SCALE_FACTOR, 0, 100)

Missing data
------------
A metric with no value anywhere in the window contributes nothing to either
accumulator and produces no Factor. Absence is never scored as "neutral".

Weekend adjustment
------------------
When enabled and the evaluation date is a Saturday or Sunday, work-category
weights are multiplied by WEEKEND_WORK_WEIGHT.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, Optional

from app.engine.personalization import PersonalizationContext
from app.engine.types import (
    DataCategory,
    Factor,
    Impact,
    MetricKey,
    MetricSample,
    ScoringParameters,
    ThresholdConfig,
    WeightKey,
)

logger = logging.getLogger(__name__)

SCALE_FACTOR = 100.0
RELIEF = 0.5
NEUTRAL_BAND = 0.05
WEEKEND_WORK_WEIGHT = 0.5

DEEP_SLEEP_SHARE = 0.2
OVERTIME_FULL_SHARE = 0.25
FOCUS_TARGET_HOURS = 2.0
HEALTHY_COMPLETION = 0.8
COMPLETION_SPAN = 0.2
MEETING_HOURS_PER_MEETING = 0.75
HRV_SENSITIVITY = 2.0
RHR_SENSITIVITY = 5.0
RECOVERY_MIDPOINT = 50.0

_SLEEP_TOLERANCE = {"rigid": 0.05, "moderate": 0.10, "flexible": 0.15}
_WORK_TOLERANCE = {"steady": 0.10, "burst": 0.20, "flexible": 0.15}


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FactorSet:
    factors: tuple[Factor, ...]
    burnout_accumulator: float
    readiness_accumulator: float
    weekend_adjusted: bool = False

    def by_key(self) -> dict[MetricKey, Factor]:
        return {f.key: f for f in self.factors}


@dataclass(frozen=True)
class _Reading:
    deviation: float
    value: str


@dataclass(frozen=True)
class _Window:
    """Samples split into the scoring window and the earlier baseline days."""
    recent: tuple[MetricSample, ...]
    prior: tuple[MetricSample, ...]

    def health(self, attr: str, prior: bool = False) -> list[float]:
        rows = self.prior if prior else self.recent
        return [
            float(getattr(s.health, attr))
            for s in rows
            if s.health is not None and getattr(s.health, attr) is not None
        ]

    def work(self, attr: str) -> list[float]:
        return [
            float(getattr(s.work, attr))
            for s in self.recent
            if s.work is not None and getattr(s.work, attr) is not None
        ]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def finalize_score(accumulator: float) -> float:
    return round(clamp(50.0 + accumulator * SCALE_FACTOR, 0.0, 100.0), 1)


def _mean(values: list[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def _pct(value: float) -> str:
    return f"{'+' if value >= 0 else ''}{round(value * 100)}%"


def _split_window(samples: Iterable[MetricSample], as_of: date, params: ScoringParameters) -> _Window:
    window_start = as_of - timedelta(days=params.window_days - 1)
    baseline_start = as_of - timedelta(days=params.baseline_days - 1)
    recent, prior = [], []
    for sample in sorted(samples, key=lambda s: s.day):
        if window_start <= sample.day <= as_of:
            recent.append(sample)
        elif baseline_start <= sample.day < window_start:
            prior.append(sample)
    return _Window(recent=tuple(recent), prior=tuple(prior))


# ---------------------------------------------------------------------------
# Per-metric readings
# ---------------------------------------------------------------------------

def _sleep(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    actual = _mean(window.health("sleep_hours"))
    if actual is None:
        return None
    ideal = ctx.ideal_sleep_hours
    deviation = -(ideal - actual) / ideal
    if abs(deviation) <= _SLEEP_TOLERANCE.get(ctx.sleep_flexibility, 0.10):
        deviation = 0.0
    adjusted = " (adjusted)" if ctx.adjustments.get("sleep") else ""
    return _Reading(deviation, f"{actual:.1f}h vs {ideal:.1f}h ideal{adjusted}")


def _deep_sleep(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    actual = _mean(window.health("deep_sleep_hours"))
    if actual is None:
        return None
    expected = ctx.ideal_sleep_hours * DEEP_SLEEP_SHARE
    return _Reading((actual - expected) / expected, f"{actual:.1f}h deep sleep vs {expected:.1f}h expected")


def _exercise(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    actual = _mean(window.health("exercise_minutes"))
    if actual is None:
        return None
    ideal = ctx.ideal_exercise_minutes
    diff = actual - ideal
    if abs(diff) < 5:
        value = f"{actual:.0f} min (on target)"
    else:
        value = f"{actual:.0f} min ({'+' if diff > 0 else ''}{diff:.0f} from ideal)"
    return _Reading((actual - ideal) / ideal, value)


def _hrv(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    recent = _mean(window.health("heart_rate_variability"))
    baseline = _mean(window.health("heart_rate_variability", prior=True))
    if recent is None or not baseline:
        return None
    change = (recent - baseline) / baseline
    return _Reading(change * HRV_SENSITIVITY, f"{_pct(change)} vs baseline")


def _resting_hr(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    recent = _mean(window.health("resting_heart_rate"))
    baseline = _mean(window.health("resting_heart_rate", prior=True))
    if recent is None or not baseline:
        return None
    change = (recent - baseline) / baseline
    return _Reading(-change * RHR_SENSITIVITY, f"{_pct(change)} vs baseline")


def _recovery(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    actual = _mean(window.health("recovery_score"))
    if actual is None:
        return None
    return _Reading((actual - RECOVERY_MIDPOINT) / RECOVERY_MIDPOINT, f"{actual:.0f}/100 recovery")


def _overtime(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    actual = _mean(window.work("overtime_hours"))
    if actual is None:
        return None
    full_scale = ctx.ideal_work_hours * OVERTIME_FULL_SHARE
    return _Reading(-actual / full_scale, f"{actual:.1f}h overtime/day")


def _work_hours(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    actual = _mean(window.work("hours_worked"))
    if actual is None:
        return None
    ideal = ctx.ideal_work_hours
    deviation = -(actual - ideal) / ideal
    if abs(deviation) <= _WORK_TOLERANCE.get(ctx.preferred_work_pattern, 0.10):
        deviation = 0.0
    # Working less than the ideal is relief, not a windfall.
    deviation = min(deviation, 0.5)
    return _Reading(deviation, f"{_pct((actual - ideal) / ideal)} vs your ideal")


def _meeting_load(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    hours = window.work("meeting_hours")
    if not hours:
        hours = [m * MEETING_HOURS_PER_MEETING for m in window.work("meetings_attended")]
    actual = _mean(hours)
    if actual is None:
        return None
    limit = ctx.max_meeting_hours
    if actual > limit:
        deviation = -(actual - limit) / limit
    else:
        deviation = (limit - actual) / limit * 0.5
    return _Reading(deviation, f"{actual:.1f}h/day vs {limit:.1f}h limit")


def _focus_time(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    actual = _mean(window.work("focus_time_hours"))
    if actual is None:
        return None
    return _Reading((actual - FOCUS_TARGET_HOURS) / FOCUS_TARGET_HOURS, f"{actual:.1f}h focus/day")


def _task_completion(window: _Window, ctx: PersonalizationContext) -> Optional[_Reading]:
    completed = assigned = 0.0
    for sample in window.recent:
        work = sample.work
        if work is None or not work.tasks_assigned or work.tasks_completed is None:
            continue
        completed += work.tasks_completed
        assigned += work.tasks_assigned
    if assigned <= 0:
        return None
    ratio = completed / assigned
    return _Reading((ratio - HEALTHY_COMPLETION) / COMPLETION_SPAN, f"{round(ratio * 100)}% of assigned tasks")


# ---------------------------------------------------------------------------
# Metric table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricSpec:
    key: MetricKey
    name: str
    category: DataCategory
    weight_key: WeightKey
    share: float
    reader: Callable[[_Window, PersonalizationContext], Optional[_Reading]]


METRICS: tuple[MetricSpec, ...] = (
    MetricSpec(MetricKey.sleep, "Sleep", DataCategory.health, WeightKey.sleep, 1.0, _sleep),
    MetricSpec(MetricKey.deep_sleep, "Deep Sleep", DataCategory.health, WeightKey.sleep, 0.5, _deep_sleep),
    MetricSpec(MetricKey.exercise, "Exercise", DataCategory.health, WeightKey.exercise, 1.0, _exercise),
    MetricSpec(MetricKey.hrv, "Heart Rate Variability", DataCategory.health, WeightKey.heart, 1.0, _hrv),
    MetricSpec(MetricKey.resting_hr, "Resting Heart Rate", DataCategory.health, WeightKey.heart, 0.5, _resting_hr),
    MetricSpec(MetricKey.recovery, "Recovery", DataCategory.health, WeightKey.heart, 0.5, _recovery),
    MetricSpec(MetricKey.overtime, "Overtime", DataCategory.work, WeightKey.workload, 1.0, _overtime),
    MetricSpec(MetricKey.work_hours, "Work Hours", DataCategory.work, WeightKey.workload, 0.5, _work_hours),
    MetricSpec(MetricKey.meeting_load, "Meeting Load", DataCategory.work, WeightKey.meetings, 1.0, _meeting_load),
    MetricSpec(MetricKey.focus_time, "Focus Time", DataCategory.work, WeightKey.meetings, 0.5, _focus_time),
    MetricSpec(MetricKey.task_completion, "Task Completion", DataCategory.work, WeightKey.workload, 0.5, _task_completion),
)


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------

_DESCRIPTIONS: dict[MetricKey, dict[Impact, str]] = {
    MetricKey.sleep: {
        Impact.negative: "Your sleep has been below your personal ideal recently",
        Impact.positive: "You've been getting more sleep than your personal ideal",
        Impact.neutral: "Your sleep is consistent with your personal ideal",
    },
    MetricKey.deep_sleep: {
        Impact.negative: "Your deep sleep has been lower than your body needs to recover",
        Impact.positive: "You're getting quality restorative sleep",
        Impact.neutral: "Your deep sleep is meeting your needs",
    },
    MetricKey.exercise: {
        Impact.negative: "Your activity level is below your personal goal",
        Impact.positive: "You're hitting your personal activity goals",
        Impact.neutral: "Your activity is within your target range",
    },
    MetricKey.hrv: {
        Impact.negative: "Your HRV indicates elevated stress levels",
        Impact.positive: "Your HRV shows good recovery and low stress",
        Impact.neutral: "Your stress indicators are within your normal range",
    },
    MetricKey.resting_hr: {
        Impact.negative: "Your resting heart rate is elevated compared to your baseline",
        Impact.positive: "Your resting heart rate is lower than usual, a sign of recovery",
        Impact.neutral: "Your resting heart rate is at your baseline",
    },
    MetricKey.recovery: {
        Impact.negative: "Your wearable shows incomplete recovery between days",
        Impact.positive: "Your body is recovering well between days",
        Impact.neutral: "Your recovery is at a typical level",
    },
    MetricKey.overtime: {
        Impact.negative: "You've been working overtime regularly",
        Impact.positive: "You've kept overtime under control",
        Impact.neutral: "You've had little or no overtime",
    },
    MetricKey.work_hours: {
        Impact.negative: "You've been working more than your ideal hours",
        Impact.positive: "You've kept your hours below your ideal, leaving room to recover",
        Impact.neutral: "Your work hours are consistent with your preferences",
    },
    MetricKey.meeting_load: {
        Impact.negative: "Your meeting load is above what works for you",
        Impact.positive: "Your meeting load leaves room for focused work",
        Impact.neutral: "Your meeting load is close to your limit",
    },
    MetricKey.focus_time: {
        Impact.negative: "You've had little uninterrupted focus time",
        Impact.positive: "You've protected time for deep work",
        Impact.neutral: "Your focus time is about where it should be",
    },
    MetricKey.task_completion: {
        Impact.negative: "Fewer assigned tasks are getting completed than usual",
        Impact.positive: "You're completing your assigned work at a healthy rate",
        Impact.neutral: "Your task completion is steady",
    },
}

_EVENT_DESCRIPTIONS: dict[MetricKey, str] = {
    MetricKey.sleep: "Your sleep is below your adjusted expectation during {label}",
    MetricKey.hrv: "Your HRV indicates elevated stress, which is expected during {label}",
    MetricKey.work_hours: "Working more than adjusted expectations for {label}",
    MetricKey.overtime: "Overtime is adding up on top of {label}",
}


def describe(key: MetricKey, impact: Impact, ctx: PersonalizationContext) -> str:
    label = ctx.first_event_label()
    if impact == Impact.negative and label and key in _EVENT_DESCRIPTIONS:
        return _EVENT_DESCRIPTIONS[key].format(label=label)
    return _DESCRIPTIONS[key][impact]


def _impact(deviation: float) -> Impact:
    if deviation > NEUTRAL_BAND:
        return Impact.positive
    if deviation < -NEUTRAL_BAND:
        return Impact.negative
    return Impact.neutral


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def is_weekend_adjusted(thresholds: ThresholdConfig, as_of: date) -> bool:
    return thresholds.weekend_adjustment_enabled and as_of.weekday() >= 5


def compute_factors(
    samples: Iterable[MetricSample],
    ctx: PersonalizationContext,
    thresholds: ThresholdConfig,
    as_of: date,
    params: ScoringParameters,
) -> FactorSet:
    window = _split_window(samples, as_of, params)
    weekend = is_weekend_adjusted(thresholds, as_of)

    factors: list[Factor] = []
    burnout_acc = 0.0
    readiness_acc = 0.0

    for spec in METRICS:
        reading = spec.reader(window, ctx)
        if reading is None:
            logger.debug("No %s data in window ending %s; metric omitted", spec.key.value, as_of)
            continue

        deviation = clamp(reading.deviation, -1.0, 1.0)
        weight = ctx.weight(spec.weight_key) * spec.share
        if weekend and spec.category == DataCategory.work:
            weight *= WEEKEND_WORK_WEIGHT
        base = ctx.base_weight(spec.weight_key) * spec.share
        multiplier = weight / base if base > 0 else 0.0

        contribution = deviation * weight
        if contribution < 0:
            burnout_acc += -contribution
            readiness_acc += contribution * RELIEF
        else:
            burnout_acc -= contribution * RELIEF
            readiness_acc += contribution

        impact = _impact(deviation)
        factors.append(Factor(
            key=spec.key,
            name=spec.name,
            category=spec.category,
            impact=impact,
            value=reading.value,
            description=describe(spec.key, impact, ctx),
            weight=round(weight, 4),
            deviation=round(deviation, 4),
            contribution=round(contribution, 4),
            magnitude=round(min(100.0, abs(deviation) * 100.0 * multiplier), 2),
        ))

    return FactorSet(
        factors=tuple(factors),
        burnout_accumulator=burnout_acc,
        readiness_accumulator=readiness_acc,
        weekend_adjusted=weekend,
    )
