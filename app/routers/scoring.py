"""
Scoring router.

GET /employees/{employee_id}/score         scores + zone for one day
GET /employees/{employee_id}/explanation   why, with role-based redaction
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.engine.explanation import Explanation
from app.engine.types import ScoreResult, ViewerRole
from app.schemas.common import ErrorResponse
from app.schemas.scoring import (
    ActiveLifeEventResponse,
    CalibrationInfoResponse,
    DayContextResponse,
    ExplanationContext,
    ExplanationResponse,
    FactorResponse,
    InteractionEffectResponse,
    RecommendationsResponse,
    ScoreResponse,
    ThresholdsResponse,
)
from app.services.scoring_service import compute_score, explain

router = APIRouter(prefix="/employees", tags=["scoring"])

_LIFE_EVENT_IMPACT = "Expectations adjusted for this period"


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _score_to_response(r: ScoreResult) -> ScoreResponse:
    return ScoreResponse(
        employee_id=r.employee_id,
        date=str(r.day),
        zone=r.zone.value,
        burnout_score=r.burnout_score,
        readiness_score=r.readiness_score,
        thresholds=ThresholdsResponse(
            burnout_red_threshold=r.thresholds.burnout_red_threshold,
            readiness_green_threshold=r.thresholds.readiness_green_threshold,
            threshold_type=r.thresholds.threshold_type.value,
            source=r.thresholds.source.value,
        ),
        calibration_applied=r.calibration.applied,
        interaction_effect_count=len(r.interaction_effects),
        aggregate_eligible=r.aggregate_eligible,
    )


def _life_event_impact(adjusted: tuple[str, ...]) -> str:
    if not adjusted:
        return _LIFE_EVENT_IMPACT
    return f"{_LIFE_EVENT_IMPACT} ({', '.join(adjusted)})"


def _explanation_to_response(e: Explanation) -> ExplanationResponse:
    day_context = None
    if e.day_context is not None:
        day_context = DayContextResponse(label=e.day_context.label, message=e.day_context.message)
    return ExplanationResponse(
        zone=e.zone.value,
        burnout_score=e.burnout_score,
        readiness_score=e.readiness_score,
        factors=[
            FactorResponse(
                name=f.name,
                impact=f.impact.value,
                value=f.value,
                description=f.description,
                weight=f.weight,
            )
            for f in e.factors
        ],
        recommendations=RecommendationsResponse(
            personal=[r.text for r in e.personal],
            leadership=[r.tagged() for r in e.leadership],
        ),
        context=ExplanationContext(
            interaction_effects=[
                InteractionEffectResponse(
                    name=ie.name,
                    impact="negative",
                    description=ie.description,
                    severity=ie.severity,
                )
                for ie in e.interaction_effects
            ],
            calibration_info=CalibrationInfoResponse(
                applied=e.calibration.applied,
                message=e.calibration.message,
                discrepancy=e.calibration.discrepancy,
            ),
            active_life_events=[
                ActiveLifeEventResponse(label=ev.label, impact=_life_event_impact(ev.adjusted))
                for ev in e.active_life_events
            ],
            day_context=day_context,
            using_personal_baselines=e.using_personal_baselines or None,
            chronotype=e.chronotype,
        ),
    )


# ---------------------------------------------------------------------------
# GET /employees/{employee_id}/score
# ---------------------------------------------------------------------------

@router.get(
    "/{employee_id}/score",
    response_model=ScoreResponse,
    summary="Burnout / readiness scores and zone for one day",
    responses={
        404: {"model": ErrorResponse, "description": "Employee not found."},
        409: {"model": ErrorResponse, "description": "Ambiguous or missing threshold configuration."},
    },
)
def get_score(
    employee_id: int,
    day: Optional[date] = Query(
        default=None,
        alias="date",
        description="Evaluation date. Defaults to today (UTC).",
        examples=["2026-03-10"],
    ),
    db: Session = Depends(get_db),
):
    """
    Compute the scores fresh from stored metrics and configuration.
    Stateless and idempotent: calling it again with unchanged data
    returns the same result.
    """
    return _score_to_response(compute_score(db=db, employee_id=employee_id, day=day))


# ---------------------------------------------------------------------------
# GET /employees/{employee_id}/explanation
# ---------------------------------------------------------------------------

@router.get(
    "/{employee_id}/explanation",
    response_model=ExplanationResponse,
    response_model_exclude_none=True,
    summary="Why the employee is in their zone, redacted for the viewer",
    responses={
        403: {"model": ErrorResponse, "description": "Viewer not entitled to raw health values."},
        404: {"model": ErrorResponse, "description": "Employee not found."},
        409: {"model": ErrorResponse, "description": "Ambiguous or missing threshold configuration."},
    },
)
def get_explanation(
    employee_id: int,
    day: Optional[date] = Query(default=None, alias="date", examples=["2026-03-10"]),
    viewer_role: ViewerRole = Query(
        default=ViewerRole.employee,
        description='"employee" (own record), "manager" or "admin".',
    ),
    include_raw_values: bool = Query(
        default=False,
        description="Request raw health values. Only the employee themself may.",
    ),
    db: Session = Depends(get_db),
):
    """
    ### Visibility
    | Viewer | Personal recs | Leadership recs | Health values |
    |---|---|---|---|
    | `employee` | yes | yes | raw |
    | `manager` / `admin` | no | yes | redacted |
    """
    result = explain(
        db=db,
        employee_id=employee_id,
        day=day,
        viewer_role=viewer_role,
        include_raw_values=include_raw_values,
    )
    return _explanation_to_response(result)
