"""
Scoring pipeline — one pure call chain per (employee, date).

    thresholds ─┐
    consent ────┼─► factors ─► interactions ─► calibration ─► zone
    personal ───┘

No I/O happens here: the snapshot is already materialized. Identical
snapshots and parameters always produce an identical ScoreResult.
"""
from __future__ import annotations

from app.engine.calibration import calibrate
from app.engine.consent import apply_consent
from app.engine.factors import compute_factors, finalize_score
from app.engine.interactions import detect_interactions
from app.engine.personalization import build_personalization
from app.engine.thresholds import resolve_thresholds
from app.engine.types import ScoreResult, ScoringParameters, ScoringSnapshot
from app.engine.zones import classify_zone


def score_snapshot(snapshot: ScoringSnapshot, params: ScoringParameters | None = None) -> ScoreResult:
    params = params or ScoringParameters()
    as_of = snapshot.as_of

    thresholds = resolve_thresholds(snapshot.threshold_layers, as_of)
    consented = apply_consent(snapshot.samples, snapshot.checkins, snapshot.consent)
    ctx = build_personalization(snapshot.preferences, snapshot.life_events, as_of)

    factor_set = compute_factors(consented.samples, ctx, thresholds, as_of, params)
    interactions = detect_interactions(factor_set, thresholds)

    burnout = finalize_score(factor_set.burnout_accumulator + interactions.penalty)
    readiness = finalize_score(factor_set.readiness_accumulator)

    burnout, calibration = calibrate(
        burnout,
        consented.checkins,
        as_of,
        params.calibration_window_days,
        checkins_consented=consented.checkins_consented,
    )

    return ScoreResult(
        employee_id=snapshot.employee_id,
        day=as_of,
        burnout_score=burnout,
        readiness_score=readiness,
        zone=classify_zone(burnout, readiness, thresholds),
        factors=factor_set.factors,
        interaction_effects=interactions.effects,
        calibration=calibration,
        active_life_events=ctx.active_event_summaries(),
        thresholds=thresholds,
        using_personal_baselines=ctx.has_preferences,
        chronotype=ctx.chronotype if ctx.has_preferences else None,
        social_energy_type=ctx.social_energy_type if ctx.has_preferences else None,
        weekend_adjusted=factor_set.weekend_adjusted,
        aggregate_eligible=consented.consent.allow_aggregate_contribution,
    )
