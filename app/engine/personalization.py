"""
Personalization context — preferences + active life events → targets and weights.

Weights
-------
Preference weights are normalized to an importance budget of 1.0. Each
life-event axis is folded over the active events with a per-event clamp
of [-0.5, +0.5], and the folded sum is clamped again to [-0.8, +1.0]:

    multiplier[key] = weight[key] * (1 + aggregate[axis(key)])

Axis mapping: sleep→sleep, work→workload+meetings, exercise→exercise,
stress tolerance→heart.

Targets
-------
The same aggregates scale the ideal sleep, work-hour and exercise targets,
so a "new baby" event both lowers the expected sleep and reduces how much
sleep counts. Social-energy type scales the daily meeting allowance.

This stage never fails: anything missing is replaced with a default.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from app.engine.types import ActiveLifeEvent, LifeEvent, PersonalPreferences, WeightKey

IMPORTANCE_BUDGET = 1.0

DEFAULT_IDEAL_SLEEP_HOURS = 8.0
DEFAULT_IDEAL_EXERCISE_MINUTES = 45.0
DEFAULT_IDEAL_WORK_HOURS = 8.0
DEFAULT_MAX_MEETING_HOURS = 4.0

DEFAULT_WEIGHTS: dict[WeightKey, float] = {
    WeightKey.sleep: 0.30,
    WeightKey.exercise: 0.15,
    WeightKey.workload: 0.20,
    WeightKey.meetings: 0.15,
    WeightKey.heart: 0.20,
}

EVENT_CLAMP = (-0.5, 0.5)
AGGREGATE_CLAMP = (-0.8, 1.0)

_SOCIAL_MEETING_FACTOR = {"introvert": 0.75, "ambivert": 1.0, "extrovert": 1.25}

# Life-event axis → weight keys it scales.
_AXIS_WEIGHTS: dict[str, tuple[WeightKey, ...]] = {
    "sleep": (WeightKey.sleep,),
    "work": (WeightKey.workload, WeightKey.meetings),
    "exercise": (WeightKey.exercise,),
    "stress_tolerance": (WeightKey.heart,),
}

_AXIS_LABELS = {
    "sleep": "sleep",
    "work": "workload",
    "exercise": "exercise",
    "stress_tolerance": "stress tolerance",
}


@dataclass(frozen=True)
class PersonalizationContext:
    ideal_sleep_hours: float
    ideal_work_hours: float
    ideal_exercise_minutes: float
    max_meeting_hours: float
    weights: dict[WeightKey, float]
    base_weights: dict[WeightKey, float]
    adjustments: dict[str, float]
    chronotype: str = "neutral"
    social_energy_type: str = "ambivert"
    sleep_flexibility: str = "moderate"
    preferred_work_pattern: str = "steady"
    active_events: tuple[LifeEvent, ...] = ()
    has_preferences: bool = False

    @property
    def has_life_events(self) -> bool:
        return bool(self.active_events)

    def weight(self, key: WeightKey) -> float:
        return self.weights.get(key, 0.0)

    def base_weight(self, key: WeightKey) -> float:
        return self.base_weights.get(key, 0.0)

    def first_event_label(self) -> Optional[str]:
        return self.active_events[0].label if self.active_events else None

    def active_event_summaries(self) -> tuple[ActiveLifeEvent, ...]:
        """Label and adjusted axes only; raw values stay in this stage."""
        summaries = []
        for event in self.active_events:
            adjusted = tuple(
                _AXIS_LABELS[axis]
                for axis in _AXIS_WEIGHTS
                if _event_adjustment(event, axis) != 0
            )
            summaries.append(ActiveLifeEvent(label=event.label, adjusted=adjusted))
        return tuple(summaries)


# ---------------------------------------------------------------------------
# Clamp / fold
# ---------------------------------------------------------------------------

def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_event_adjustment(value: float) -> float:
    return _clamp(value, *EVENT_CLAMP)


def clamp_aggregate_adjustment(value: float) -> float:
    return _clamp(value, *AGGREGATE_CLAMP)


def _event_adjustment(event: LifeEvent, axis: str) -> float:
    return float(getattr(event, f"{axis}_adjustment") or 0.0)


def fold_adjustments(events: Iterable[LifeEvent], axis: str) -> float:
    total = 0.0
    for event in events:
        total += clamp_event_adjustment(_event_adjustment(event, axis))
    return clamp_aggregate_adjustment(total)


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------

def normalize_weights(preferences: Optional[PersonalPreferences]) -> dict[WeightKey, float]:
    if preferences is None:
        return dict(DEFAULT_WEIGHTS)
    raw = {
        WeightKey.sleep: preferences.weight_sleep,
        WeightKey.exercise: preferences.weight_exercise,
        WeightKey.workload: preferences.weight_workload,
        WeightKey.meetings: preferences.weight_meetings,
        WeightKey.heart: preferences.weight_heart_metrics,
    }
    filled = {
        key: float(value) if value is not None and value >= 0 else DEFAULT_WEIGHTS[key]
        for key, value in raw.items()
    }
    total = sum(filled.values())
    if total <= 0:
        return dict(DEFAULT_WEIGHTS)
    return {key: value * IMPORTANCE_BUDGET / total for key, value in filled.items()}


def _positive_or(value: Optional[float], default: float) -> float:
    return float(value) if value is not None and value > 0 else default


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def build_personalization(
    preferences: Optional[PersonalPreferences],
    life_events: Iterable[LifeEvent],
    as_of: date,
) -> PersonalizationContext:
    active = tuple(e for e in life_events if e.is_active_on(as_of))
    adjustments = {axis: fold_adjustments(active, axis) for axis in _AXIS_WEIGHTS}

    base_weights = normalize_weights(preferences)
    weights = dict(base_weights)
    for axis, keys in _AXIS_WEIGHTS.items():
        for key in keys:
            weights[key] = base_weights[key] * (1 + adjustments[axis])

    prefs = preferences or PersonalPreferences()
    social = prefs.social_energy_type or "ambivert"
    max_meetings = _positive_or(prefs.max_meeting_hours_daily, DEFAULT_MAX_MEETING_HOURS)
    max_meetings *= _SOCIAL_MEETING_FACTOR.get(social, 1.0)

    return PersonalizationContext(
        ideal_sleep_hours=_positive_or(prefs.ideal_sleep_hours, DEFAULT_IDEAL_SLEEP_HOURS)
        * (1 + adjustments["sleep"]),
        ideal_work_hours=_positive_or(prefs.ideal_work_hours, DEFAULT_IDEAL_WORK_HOURS)
        * (1 + adjustments["work"]),
        ideal_exercise_minutes=_positive_or(prefs.ideal_exercise_minutes, DEFAULT_IDEAL_EXERCISE_MINUTES)
        * (1 + adjustments["exercise"]),
        max_meeting_hours=max_meetings,
        weights=weights,
        base_weights=base_weights,
        adjustments=adjustments,
        chronotype=prefs.chronotype or "neutral",
        social_energy_type=social,
        sleep_flexibility=prefs.sleep_flexibility or "moderate",
        preferred_work_pattern=prefs.preferred_work_pattern or "steady",
        active_events=active,
        has_preferences=preferences is not None,
    )
