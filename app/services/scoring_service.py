"""
Scoring service: loads one consistent snapshot and runs the pure engine.

Public API
----------
load_snapshot(db, employee_id, day, params)            -> ScoringSnapshot
compute_score(db, employee_id, day, params=None)       -> ScoreResult
explain(db, employee_id, day, viewer_role, ...)        -> Explanation (redacted for viewer)
redact_for_viewer(explanation, viewer_role, ...)       -> Explanation

Redaction boundary
------------------
The engine always produces both recommendation sets and full factor
values. Here, for anyone other than the employee themself:
  - personal recommendations are dropped,
  - health factor values are replaced with a neutral phrase,
  - chronotype is withheld.
Asking for raw values as a non-employee viewer is a contract violation
and raises ConsentViolationError.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ConsentViolationError
from app.engine.explanation import Explanation, generate_explanation
from app.engine.pipeline import score_snapshot
from app.engine.types import (
    DataCategory,
    Factor,
    Impact,
    ScoreResult,
    ScoringParameters,
    ScoringSnapshot,
    ViewerRole,
)
from app.services import store

logger = logging.getLogger(__name__)

_REDACTED_VALUES = {
    Impact.negative: "Below personal target",
    Impact.positive: "Above personal target",
    Impact.neutral: "Within personal range",
}


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


def load_snapshot(
    db: Session, employee_id: int, day: date, params: ScoringParameters
) -> ScoringSnapshot:
    """Read everything the engine needs for (employee, day) in one session."""
    employee = store.get_employee(db, employee_id)
    lookback = max(params.window_days, params.baseline_days)
    samples = store.get_metric_samples(db, employee_id, day - timedelta(days=lookback - 1), day)
    checkins = store.get_checkins(
        db, employee_id, day - timedelta(days=params.calibration_window_days - 1), day
    )
    return ScoringSnapshot(
        employee_id=employee_id,
        as_of=day,
        samples=tuple(samples),
        checkins=tuple(checkins),
        threshold_layers=store.get_threshold_layers(db, employee_id, employee.organization_id, day),
        preferences=store.get_preferences(db, employee_id),
        life_events=tuple(store.get_active_life_events(db, employee_id, day)),
        consent=store.get_consent(db, employee_id),
    )


def compute_score(
    db: Session,
    employee_id: int,
    day: Optional[date] = None,
    params: Optional[ScoringParameters] = None,
) -> ScoreResult:
    target = day or _today()
    params = params or settings.scoring_parameters()
    snapshot = load_snapshot(db, employee_id, target, params)
    result = score_snapshot(snapshot, params)
    logger.info(
        "Scored employee %s on %s: burnout=%.1f readiness=%.1f zone=%s",
        employee_id, target, result.burnout_score, result.readiness_score, result.zone.value,
    )
    return result


# ---------------------------------------------------------------------------
# Redaction
# ---------------------------------------------------------------------------

def _redact_factor(factor: Factor) -> Factor:
    if factor.category != DataCategory.health:
        return factor
    return replace(factor, value=_REDACTED_VALUES[factor.impact])


def redact_for_viewer(
    explanation: Explanation,
    viewer_role: ViewerRole,
    employee_id: int,
    include_raw_values: bool = False,
) -> Explanation:
    role = ViewerRole(viewer_role)
    if role == ViewerRole.employee:
        return explanation
    if include_raw_values:
        raise ConsentViolationError(role.value, employee_id)
    return replace(
        explanation,
        factors=tuple(_redact_factor(f) for f in explanation.factors),
        personal=(),
        chronotype=None,
    )


def explain(
    db: Session,
    employee_id: int,
    day: Optional[date] = None,
    viewer_role: ViewerRole = ViewerRole.employee,
    include_raw_values: bool = False,
    params: Optional[ScoringParameters] = None,
) -> Explanation:
    role = ViewerRole(viewer_role)
    # Fail the contract check before doing any work.
    if include_raw_values and role != ViewerRole.employee:
        raise ConsentViolationError(role.value, employee_id)
    result = compute_score(db, employee_id, day, params)
    return redact_for_viewer(generate_explanation(result), role, employee_id, include_raw_values)
