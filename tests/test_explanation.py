"""
Tests for zone classification, explanation assembly and recommendation
selection.
"""
import pytest
from dataclasses import replace
from datetime import date

from app.engine.explanation import (
    MAX_RECOMMENDATIONS,
    RecommendationCategory,
    generate_explanation,
    order_factors,
)
from app.engine.types import (
    ActiveLifeEvent,
    CalibrationInfo,
    DataCategory,
    Factor,
    Impact,
    InteractionEffect,
    MetricKey,
    ScoreResult,
    ThresholdConfig,
    ThresholdType,
    Zone,
)
from app.engine.zones import classify_zone

THRESHOLDS = ThresholdConfig(
    burnout_red_threshold=70,
    readiness_green_threshold=70,
    interaction_high_threshold=50,
    interaction_critical_threshold=70,
    threshold_type=ThresholdType.absolute,
    enable_interaction_effects=True,
    weekend_adjustment_enabled=True,
)


def _factor(key, contribution, impact=Impact.negative, value="raw"):
    return Factor(
        key=key,
        name=key.value.replace("_", " ").title(),
        category=DataCategory.health,
        impact=impact,
        value=value,
        description="",
        weight=0.2,
        deviation=contribution / 0.2,
        contribution=contribution,
        magnitude=abs(contribution / 0.2) * 100,
    )


def _result(zone=Zone.yellow, factors=(), effects=(), events=(), **kwargs):
    defaults = dict(
        employee_id=1,
        day=date(2026, 3, 10),
        burnout_score=55.4,
        readiness_score=48.6,
        zone=zone,
        factors=tuple(factors),
        interaction_effects=tuple(effects),
        calibration=CalibrationInfo(applied=False, message="n/a"),
        active_life_events=tuple(events),
        thresholds=THRESHOLDS,
        using_personal_baselines=False,
        chronotype=None,
        social_energy_type=None,
        weekend_adjusted=False,
        aggregate_eligible=True,
    )
    defaults.update(kwargs)
    return ScoreResult(**defaults)


def _categories(recs):
    return [r.category for r in recs]


# ---------------------------------------------------------------------------
# Zones
# ---------------------------------------------------------------------------

class TestClassifyZone:
    def test_red(self):
        assert classify_zone(75, 40, THRESHOLDS) == Zone.red

    def test_green(self):
        assert classify_zone(30, 80, THRESHOLDS) == Zone.green

    def test_yellow(self):
        assert classify_zone(60, 60, THRESHOLDS) == Zone.yellow

    def test_red_takes_precedence_over_green(self):
        assert classify_zone(75, 90, THRESHOLDS) == Zone.red

    def test_cutoffs_are_inclusive(self):
        assert classify_zone(70, 0, THRESHOLDS) == Zone.red
        assert classify_zone(0, 70, THRESHOLDS) == Zone.green

    def test_percentile_cutoffs_compare_the_same_way(self):
        percentile = replace(THRESHOLDS, threshold_type=ThresholdType.percentile, burnout_red_threshold=82)
        assert classify_zone(80, 0, percentile) == Zone.yellow


# ---------------------------------------------------------------------------
# Factor ordering
# ---------------------------------------------------------------------------

class TestOrderFactors:
    def test_largest_contribution_first(self):
        small = _factor(MetricKey.exercise, -0.02)
        big = _factor(MetricKey.sleep, -0.11)
        positive = _factor(MetricKey.focus_time, 0.05, Impact.positive)
        assert [f.key for f in order_factors((small, positive, big))] == [
            MetricKey.sleep, MetricKey.focus_time, MetricKey.exercise,
        ]

    def test_ties_broken_by_name(self):
        a = _factor(MetricKey.overtime, -0.1)
        b = _factor(MetricKey.exercise, -0.1)
        assert [f.key for f in order_factors((a, b))] == [MetricKey.exercise, MetricKey.overtime]


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

class TestRedRecommendations:
    def test_core_set(self):
        e = generate_explanation(_result(Zone.red, factors=[_factor(MetricKey.sleep, -0.1)]))
        assert RecommendationCategory.BREAKS in _categories(e.personal)
        assert RecommendationCategory.SLEEP in _categories(e.personal)
        assert RecommendationCategory.SUPPORT in _categories(e.leadership)
        assert RecommendationCategory.DIVERSION in _categories(e.leadership)

    def test_leadership_items_are_tagged(self):
        e = generate_explanation(_result(Zone.red))
        assert all(":" in r.tagged() for r in e.leadership)
        assert e.leadership[0].tagged().startswith("DIVERSION: ")

    def test_life_event_context_for_leadership(self):
        e = generate_explanation(_result(Zone.red, events=[ActiveLifeEvent("New baby", ("sleep",))]))
        assert RecommendationCategory.GENTLE in _categories(e.personal)
        context = [r for r in e.leadership if r.category == RecommendationCategory.CONTEXT]
        assert "New baby" in context[0].text

    def test_leadership_never_quotes_factor_values(self):
        factor = _factor(MetricKey.sleep, -0.1, value="4.2h vs 8.0h ideal")
        e = generate_explanation(_result(Zone.red, factors=[factor]))
        assert all("4.2h" not in r.text for r in e.leadership)

    def test_burnout_spiral_adds_workload_review(self):
        spiral = InteractionEffect(
            name="Burnout Spiral", severity="high", description="",
            metrics=(MetricKey.sleep, MetricKey.overtime, MetricKey.focus_time), penalty=0.05,
        )
        e = generate_explanation(_result(Zone.red, effects=[spiral]))
        assert RecommendationCategory.FOCUS in _categories(e.personal)
        assert RecommendationCategory.WORKLOAD in _categories(e.leadership)

    def test_capped(self):
        e = generate_explanation(_result(
            Zone.red,
            factors=[_factor(MetricKey.sleep, -0.1), _factor(MetricKey.overtime, -0.1)],
            events=[ActiveLifeEvent("Relocation", ("workload",))],
            chronotype="night_owl",
            social_energy_type="introvert",
            effects=[InteractionEffect("Burnout Spiral", "critical", "", (), 0.1)],
        ))
        assert len(e.personal) == MAX_RECOMMENDATIONS
        assert len(e.leadership) == MAX_RECOMMENDATIONS


class TestGreenRecommendations:
    def test_extrovert_mentorship(self):
        e = generate_explanation(_result(Zone.green, social_energy_type="extrovert"))
        assert RecommendationCategory.CHALLENGE in _categories(e.personal)
        assert RecommendationCategory.COLLABORATE in _categories(e.personal)
        assert RecommendationCategory.MENTORSHIP in _categories(e.leadership)

    def test_early_bird_schedule(self):
        e = generate_explanation(_result(Zone.green, chronotype="early_bird"))
        schedule = [r for r in e.personal if r.category == RecommendationCategory.SCHEDULE]
        assert "morning" in schedule[0].text


class TestYellowRecommendations:
    def test_monitor_and_check_in(self):
        e = generate_explanation(_result(Zone.yellow))
        assert _categories(e.leadership)[0] == RecommendationCategory.MONITOR
        assert e.leadership[-1].tagged().startswith("CHECK-IN: ")

    def test_exercise_deficit_adds_move(self):
        e = generate_explanation(_result(Zone.yellow, factors=[_factor(MetricKey.exercise, -0.05)]))
        assert RecommendationCategory.MOVE in _categories(e.personal)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

class TestGenerateExplanation:
    def test_scores_keep_one_decimal(self):
        e = generate_explanation(_result())
        assert e.burnout_score == 55.4
        assert e.readiness_score == 48.6

    def test_displayed_score_agrees_with_zone(self):
        zone = classify_zone(69.6, 40, THRESHOLDS)
        e = generate_explanation(_result(zone=zone, burnout_score=69.6, readiness_score=40.0))
        assert e.zone == Zone.yellow
        assert e.burnout_score == 69.6
        assert e.burnout_score < THRESHOLDS.burnout_red_threshold

    def test_weekend_day_context(self):
        e = generate_explanation(_result(weekend_adjusted=True))
        assert e.day_context is not None
        assert e.day_context.label == "Weekend"

    def test_no_day_context_on_weekdays(self):
        assert generate_explanation(_result()).day_context is None

    def test_carries_calibration_and_baselines(self):
        info = CalibrationInfo(applied=True, message="adjusted", discrepancy=22.0, correction=10.0)
        e = generate_explanation(_result(calibration=info, using_personal_baselines=True, chronotype="neutral"))
        assert e.calibration == info
        assert e.using_personal_baselines is True
        assert e.chronotype == "neutral"

    def test_empty_factor_list_still_explains(self):
        e = generate_explanation(_result())
        assert e.factors == ()
        assert e.personal
        assert e.leadership
