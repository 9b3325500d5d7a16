"""
Explanation assembly: factors, interaction effects, life events and
calibration notes, plus two recommendation sets (personal and leadership).

Recommendations are a closed set of categories chosen by explicit checks
on the zone and on which factors / interaction effects are present.
Leadership items are category-tagged and never quote metric values.
Deciding who may see which set happens at the service boundary.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from app.engine.types import (
    ActiveLifeEvent,
    CalibrationInfo,
    Factor,
    Impact,
    InteractionEffect,
    MetricKey,
    ScoreResult,
    Zone,
)

MAX_RECOMMENDATIONS = 6


class RecommendationCategory(str, enum.Enum):
    # personal
    GENTLE = "GENTLE"
    BREAKS = "BREAKS"
    SCHEDULE = "SCHEDULE"
    RECHARGE = "RECHARGE"
    SLEEP = "SLEEP"
    FOCUS = "FOCUS"
    MOVE = "MOVE"
    RESOURCES = "RESOURCES"
    CHALLENGE = "CHALLENGE"
    COLLABORATE = "COLLABORATE"
    ROUTINE = "ROUTINE"
    # leadership
    DIVERSION = "DIVERSION"
    CONTEXT = "CONTEXT"
    SUPPORT = "SUPPORT"
    PROTECT = "PROTECT"
    MEETINGS = "MEETINGS"
    WORKLOAD = "WORKLOAD"
    OPPORTUNITY = "OPPORTUNITY"
    GROWTH = "GROWTH"
    MENTORSHIP = "MENTORSHIP"
    RECOGNITION = "RECOGNITION"
    MONITOR = "MONITOR"
    BALANCE = "BALANCE"
    CHECK_IN = "CHECK-IN"


@dataclass(frozen=True)
class Recommendation:
    category: RecommendationCategory
    text: str

    def tagged(self) -> str:
        return f"{self.category.value}: {self.text}"


@dataclass(frozen=True)
class DayContext:
    label: str
    message: str


@dataclass(frozen=True)
class Explanation:
    zone: Zone
    # Shown at the same one-decimal precision the zone was classified on.
    burnout_score: float
    readiness_score: float
    factors: tuple[Factor, ...]
    personal: tuple[Recommendation, ...]
    leadership: tuple[Recommendation, ...]
    interaction_effects: tuple[InteractionEffect, ...]
    calibration: CalibrationInfo
    active_life_events: tuple[ActiveLifeEvent, ...]
    day_context: Optional[DayContext] = None
    using_personal_baselines: bool = False
    chronotype: Optional[str] = None


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

def order_factors(factors: tuple[Factor, ...]) -> tuple[Factor, ...]:
    return tuple(sorted(factors, key=lambda f: (-abs(f.contribution), f.name)))


# ---------------------------------------------------------------------------
# Recommendation selection
# ---------------------------------------------------------------------------

def _negative(factors: tuple[Factor, ...], key: MetricKey) -> bool:
    return any(f.key == key and f.impact == Impact.negative for f in factors)


def _effect(effects: tuple[InteractionEffect, ...], name: str) -> bool:
    return any(e.name == name for e in effects)


def _red(result: ScoreResult, event_label: Optional[str]) -> tuple[list, list]:
    personal: list[Recommendation] = []
    leadership: list[Recommendation] = []
    factors, effects = result.factors, result.interaction_effects

    if event_label:
        personal.append(Recommendation(
            RecommendationCategory.GENTLE,
            "During this time, focus on essentials and be gentle with yourself",
        ))
    personal.append(Recommendation(
        RecommendationCategory.BREAKS,
        "Take short breaks every 90 minutes to prevent mental fatigue",
    ))
    if result.chronotype == "night_owl":
        personal.append(Recommendation(
            RecommendationCategory.SCHEDULE,
            "As a night owl, try to protect your evening productivity hours",
        ))
    elif result.chronotype == "early_bird":
        personal.append(Recommendation(
            RecommendationCategory.SCHEDULE,
            "As an early bird, prioritize your most important work in the morning",
        ))
    if result.social_energy_type == "introvert":
        personal.append(Recommendation(
            RecommendationCategory.RECHARGE,
            "Block quiet time on your calendar to recharge between meetings",
        ))
    if _negative(factors, MetricKey.sleep):
        personal.append(Recommendation(
            RecommendationCategory.SLEEP,
            "Prioritize getting your ideal sleep hours - set a bedtime alarm",
        ))
    if _effect(effects, "Burnout Spiral"):
        personal.append(Recommendation(
            RecommendationCategory.FOCUS,
            "Set a fixed end to your workday and protect one focus block each morning",
        ))
    personal.append(Recommendation(
        RecommendationCategory.RESOURCES,
        "Consider using the wellness resources in the app",
    ))

    leadership.append(Recommendation(
        RecommendationCategory.DIVERSION,
        "Reassign non-critical tasks to reduce workload by 20-30%",
    ))
    if event_label:
        leadership.append(Recommendation(
            RecommendationCategory.CONTEXT,
            f'Employee is experiencing "{event_label}" - expectations adjusted',
        ))
    leadership.append(Recommendation(
        RecommendationCategory.SUPPORT,
        "Schedule a 1:1 check-in to discuss priorities",
    ))
    if _effect(effects, "Burnout Spiral") or _negative(factors, MetricKey.overtime):
        leadership.append(Recommendation(
            RecommendationCategory.WORKLOAD,
            "Review deadlines driving sustained overtime",
        ))
    leadership.append(Recommendation(
        RecommendationCategory.PROTECT,
        "Shield from new project requests until recovery",
    ))
    if result.social_energy_type == "introvert" or _effect(effects, "Meeting Overload"):
        leadership.append(Recommendation(
            RecommendationCategory.MEETINGS,
            "Reduce meeting load and protect blocks of uninterrupted time",
        ))
    return personal, leadership


def _green(result: ScoreResult, event_label: Optional[str]) -> tuple[list, list]:
    personal: list[Recommendation] = [Recommendation(
        RecommendationCategory.CHALLENGE,
        "This is a great time to tackle challenging projects",
    )]
    leadership: list[Recommendation] = []

    if result.chronotype == "night_owl":
        personal.append(Recommendation(
            RecommendationCategory.SCHEDULE,
            "Schedule your creative work in the evening when you peak",
        ))
    elif result.chronotype == "early_bird":
        personal.append(Recommendation(
            RecommendationCategory.SCHEDULE,
            "Tackle your hardest problems in the morning",
        ))
    if result.social_energy_type == "extrovert":
        personal.append(Recommendation(
            RecommendationCategory.COLLABORATE,
            "Great time for collaborative work and team projects",
        ))
    personal.append(Recommendation(
        RecommendationCategory.ROUTINE,
        "Maintain your current wellness routine - it's working!",
    ))

    leadership.append(Recommendation(
        RecommendationCategory.OPPORTUNITY,
        "Assign high-impact, challenging projects",
    ))
    leadership.append(Recommendation(
        RecommendationCategory.GROWTH,
        "Offer stretch assignments or leadership opportunities",
    ))
    if result.social_energy_type == "extrovert":
        leadership.append(Recommendation(
            RecommendationCategory.MENTORSHIP,
            "Leverage their energy to support struggling teammates",
        ))
    leadership.append(Recommendation(
        RecommendationCategory.RECOGNITION,
        "Acknowledge their peak performance state",
    ))
    return personal, leadership


def _yellow(result: ScoreResult, event_label: Optional[str]) -> tuple[list, list]:
    personal: list[Recommendation] = [Recommendation(
        RecommendationCategory.ROUTINE,
        "Maintain your current routine and monitor trends",
    )]
    leadership: list[Recommendation] = []
    factors, effects = result.factors, result.interaction_effects

    if event_label:
        personal.append(Recommendation(
            RecommendationCategory.GENTLE,
            f"You're managing {event_label} well",
        ))
    personal.append(Recommendation(
        RecommendationCategory.SLEEP,
        "Focus on a consistent sleep schedule this week",
    ))
    if _negative(factors, MetricKey.exercise):
        personal.append(Recommendation(
            RecommendationCategory.MOVE,
            "Fit in a short walk or workout on most days",
        ))
    if _effect(effects, "Meeting Overload") or _negative(factors, MetricKey.focus_time):
        personal.append(Recommendation(
            RecommendationCategory.FOCUS,
            "Block at least two hours of meeting-free focus time",
        ))

    leadership.append(Recommendation(
        RecommendationCategory.MONITOR,
        "Keep standard workload, watch for trend changes",
    ))
    if event_label:
        leadership.append(Recommendation(
            RecommendationCategory.CONTEXT,
            f'Employee is experiencing "{event_label}" - expectations adjusted',
        ))
    if effects:
        leadership.append(Recommendation(
            RecommendationCategory.WORKLOAD,
            "Compounding strain detected - review current commitments together",
        ))
    leadership.append(Recommendation(
        RecommendationCategory.BALANCE,
        "Ensure mix of challenging and routine tasks",
    ))
    leadership.append(Recommendation(
        RecommendationCategory.CHECK_IN,
        "Brief weekly sync to gauge wellbeing",
    ))
    return personal, leadership


def select_recommendations(
    result: ScoreResult, event_label: Optional[str] = None
) -> tuple[tuple[Recommendation, ...], tuple[Recommendation, ...]]:
    if result.zone == Zone.red:
        personal, leadership = _red(result, event_label)
    elif result.zone == Zone.green:
        personal, leadership = _green(result, event_label)
    else:
        personal, leadership = _yellow(result, event_label)
    return tuple(personal[:MAX_RECOMMENDATIONS]), tuple(leadership[:MAX_RECOMMENDATIONS])


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def generate_explanation(result: ScoreResult) -> Explanation:
    event_label = result.active_life_events[0].label if result.active_life_events else None
    personal, leadership = select_recommendations(result, event_label)
    day_context = None
    if result.weekend_adjusted:
        day_context = DayContext(
            label="Weekend",
            message="Work metrics count for less on weekends so intentional rest isn't penalized",
        )
    return Explanation(
        zone=result.zone,
        burnout_score=result.burnout_score,
        readiness_score=result.readiness_score,
        factors=order_factors(result.factors),
        personal=personal,
        leadership=leadership,
        interaction_effects=result.interaction_effects,
        calibration=result.calibration,
        active_life_events=result.active_life_events,
        day_context=day_context,
        using_personal_baselines=result.using_personal_baselines,
        chronotype=result.chronotype,
    )
