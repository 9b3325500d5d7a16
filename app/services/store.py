"""
Scoring store: the narrow read/write contract between the relational
database and the scoring engine.

Read side (snapshot for one computation)
----------------------------------------
get_employee(db, employee_id)                              -> Employee
get_metric_samples(db, employee_id, start, end)            -> list[MetricSample]
get_checkins(db, employee_id, start, end)                  -> list[Checkin]
get_threshold_layers(db, employee_id, organization_id, as_of) -> ThresholdLayers
get_preferences(db, employee_id)                           -> PersonalPreferences | None
get_active_life_events(db, employee_id, as_of)             -> list[LifeEvent]
get_consent(db, employee_id)                               -> ScoringConsent

Write side (used by integration adapters and check-in submission)
-----------------------------------------------------------------
upsert_health_metrics(db, employee_id, day, **fields)  non-null fields only
upsert_work_metrics(db, employee_id, day, **fields)    non-null fields only
add_checkin(db, employee_id, ...)                      append-only

ORM rows are converted to engine value types here so nothing downstream
ever holds a live Session object.
"""
from __future__ import annotations

import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import ConfigurationError, EmployeeNotFoundError
from app.engine import types as t
from app.models.checkin import FeelingCheckin
from app.models.consent import ScoringConsent
from app.models.employee import Employee
from app.models.health_metric import HealthMetric
from app.models.life_event import LifeEvent
from app.models.preference import PersonalPreference
from app.models.threshold import EmployeeThresholdOverride, OrganizationThreshold
from app.models.work_metric import WorkMetric


_HEALTH_FIELDS = frozenset({
    "resting_heart_rate", "avg_heart_rate", "heart_rate_variability",
    "sleep_hours", "deep_sleep_hours", "rem_sleep_hours",
    "steps", "exercise_minutes", "recovery_score", "source",
})
_WORK_FIELDS = frozenset({
    "hours_worked", "overtime_hours", "meetings_attended", "meeting_hours",
    "focus_time_hours", "tasks_completed", "tasks_assigned",
    "emails_sent", "messages_sent", "source",
})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _num(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value) if isinstance(value, Decimal) else value


def _day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


def _layer(row) -> t.ThresholdLayer:
    return t.ThresholdLayer(
        burnout_red_threshold=_num(row.burnout_red_threshold),
        readiness_green_threshold=_num(row.readiness_green_threshold),
        interaction_high_threshold=_num(row.interaction_high_threshold),
        interaction_critical_threshold=_num(row.interaction_critical_threshold),
        threshold_type=(
            t.ThresholdType(row.threshold_type)
            if getattr(row, "threshold_type", None) else None
        ),
        enable_interaction_effects=getattr(row, "enable_interaction_effects", None),
        weekend_adjustment_enabled=getattr(row, "weekend_adjustment_enabled", None),
    )


def _health(row: HealthMetric) -> t.HealthMetrics:
    return t.HealthMetrics(**{name: _num(getattr(row, name)) for name in _HEALTH_FIELDS})


def _work(row: WorkMetric) -> t.WorkMetrics:
    return t.WorkMetrics(**{name: _num(getattr(row, name)) for name in _WORK_FIELDS})


def _responses(raw: Optional[str]) -> tuple[t.InstrumentResponse, ...]:
    if not raw:
        return ()
    try:
        items = json.loads(raw)
    except (ValueError, TypeError):
        return ()
    return tuple(
        t.InstrumentResponse(
            response=int(item["response"]),
            weight=float(item.get("weight", 1.0)),
            reverse_scored=bool(item.get("reverse_scored", False)),
        )
        for item in items
        if isinstance(item, dict) and item.get("response") is not None
    )


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------

def get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if employee is None:
        raise EmployeeNotFoundError(employee_id)
    return employee


def get_metric_samples(db: Session, employee_id: int, start: date, end: date) -> list[t.MetricSample]:
    """One MetricSample per day that has health and/or work data, oldest first."""
    health_rows = (
        db.query(HealthMetric)
        .filter(
            HealthMetric.employee_id == employee_id,
            HealthMetric.day >= start,
            HealthMetric.day <= end,
        )
        .all()
    )
    work_rows = (
        db.query(WorkMetric)
        .filter(
            WorkMetric.employee_id == employee_id,
            WorkMetric.day >= start,
            WorkMetric.day <= end,
        )
        .all()
    )
    health_by_day = {r.day: _health(r) for r in health_rows}
    work_by_day = {r.day: _work(r) for r in work_rows}
    return [
        t.MetricSample(
            employee_id=employee_id,
            day=day,
            health=health_by_day.get(day),
            work=work_by_day.get(day),
        )
        for day in sorted(set(health_by_day) | set(work_by_day))
    ]


def get_checkins(db: Session, employee_id: int, start: date, end: date) -> list[t.Checkin]:
    lower, upper = _day_bounds(start, end)
    rows = (
        db.query(FeelingCheckin)
        .filter(
            FeelingCheckin.employee_id == employee_id,
            FeelingCheckin.created_at >= lower,
            FeelingCheckin.created_at < upper,
        )
        .order_by(FeelingCheckin.created_at.asc(), FeelingCheckin.id.asc())
        .all()
    )
    return [
        t.Checkin(
            employee_id=row.employee_id,
            created_at=row.created_at,
            overall_feeling=row.overall_feeling,
            energy_level=row.energy_level,
            stress_level=row.stress_level,
            motivation_level=row.motivation_level,
            validated_responses=_responses(row.validated_responses),
            notes=row.notes,
            burnout_score_at_checkin=_num(row.burnout_score_at_checkin),
        )
        for row in rows
    ]


def get_threshold_layers(
    db: Session, employee_id: int, organization_id: Optional[int], as_of: date
) -> t.ThresholdLayers:
    """
    Read all three layers in one go. Overrides are pre-filtered to those
    that could contain as_of; the resolver decides, and rejects overlaps.
    """
    system_rows = (
        db.query(OrganizationThreshold)
        .filter(OrganizationThreshold.organization_id.is_(None))
        .order_by(OrganizationThreshold.id.asc())
        .all()
    )
    # A unique index does not stop several NULL organization ids.
    if len(system_rows) > 1:
        raise ConfigurationError.duplicate_system_default([row.id for row in system_rows])
    system_row = system_rows[0] if system_rows else None
    org_row = None
    if organization_id is not None:
        org_row = (
            db.query(OrganizationThreshold)
            .filter(OrganizationThreshold.organization_id == organization_id)
            .first()
        )
    override_rows = (
        db.query(EmployeeThresholdOverride)
        .filter(
            EmployeeThresholdOverride.employee_id == employee_id,
            EmployeeThresholdOverride.start_date <= as_of,
            or_(
                EmployeeThresholdOverride.end_date.is_(None),
                EmployeeThresholdOverride.end_date > as_of,
            ),
        )
        .order_by(EmployeeThresholdOverride.id.asc())
        .all()
    )
    return t.ThresholdLayers(
        employee_id=employee_id,
        system=_layer(system_row) if system_row else None,
        organization=_layer(org_row) if org_row else None,
        overrides=tuple(
            t.ThresholdOverride(
                override_id=row.id,
                employee_id=row.employee_id,
                start_date=row.start_date,
                end_date=row.end_date,
                reason=row.override_reason,
                layer=_layer(row),
            )
            for row in override_rows
        ),
    )


def get_preferences(db: Session, employee_id: int) -> Optional[t.PersonalPreferences]:
    row = (
        db.query(PersonalPreference)
        .filter(PersonalPreference.employee_id == employee_id)
        .first()
    )
    if row is None:
        return None
    return t.PersonalPreferences(
        ideal_sleep_hours=_num(row.ideal_sleep_hours),
        ideal_work_hours=_num(row.ideal_work_hours),
        ideal_exercise_minutes=_num(row.ideal_exercise_minutes),
        max_meeting_hours_daily=_num(row.max_meeting_hours_daily),
        chronotype=row.chronotype,
        social_energy_type=row.social_energy_type,
        sleep_flexibility=row.sleep_flexibility,
        preferred_work_pattern=row.preferred_work_pattern,
        weight_sleep=_num(row.weight_sleep),
        weight_exercise=_num(row.weight_exercise),
        weight_workload=_num(row.weight_workload),
        weight_meetings=_num(row.weight_meetings),
        weight_heart_metrics=_num(row.weight_heart_metrics),
    )


def get_active_life_events(db: Session, employee_id: int, as_of: date) -> list[t.LifeEvent]:
    rows = (
        db.query(LifeEvent)
        .filter(
            LifeEvent.employee_id == employee_id,
            LifeEvent.start_date <= as_of,
            or_(LifeEvent.end_date.is_(None), LifeEvent.end_date > as_of),
        )
        .order_by(LifeEvent.start_date.asc(), LifeEvent.id.asc())
        .all()
    )
    return [
        t.LifeEvent(
            event_type=row.event_type,
            label=row.event_label,
            start_date=row.start_date,
            end_date=row.end_date,
            sleep_adjustment=_num(row.sleep_adjustment) or 0.0,
            work_adjustment=_num(row.work_adjustment) or 0.0,
            exercise_adjustment=_num(row.exercise_adjustment) or 0.0,
            stress_tolerance_adjustment=_num(row.stress_tolerance_adjustment) or 0.0,
        )
        for row in rows
    ]


def get_consent(db: Session, employee_id: int) -> t.ScoringConsent:
    row = db.get(ScoringConsent, employee_id)
    if row is None:
        return t.ScoringConsent()
    return t.ScoringConsent(
        use_health_data=row.use_health_data,
        use_work_data=row.use_work_data,
        use_checkin_data=row.use_checkin_data,
        allow_aggregate_contribution=row.allow_aggregate_contribution,
    )


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------

def _upsert(db: Session, model, allowed: frozenset, employee_id: int, day: date, fields: dict):
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Unknown {model.__tablename__} fields: {sorted(unknown)}")
    row = (
        db.query(model)
        .filter(model.employee_id == employee_id, model.day == day)
        .first()
    )
    if row is None:
        row = model(employee_id=employee_id, day=day)
        db.add(row)
    for name, value in fields.items():
        if value is not None:
            setattr(row, name, value)
    db.commit()
    db.refresh(row)
    return row


def upsert_health_metrics(db: Session, employee_id: int, day: date, **fields) -> HealthMetric:
    return _upsert(db, HealthMetric, _HEALTH_FIELDS, employee_id, day, fields)


def upsert_work_metrics(db: Session, employee_id: int, day: date, **fields) -> WorkMetric:
    return _upsert(db, WorkMetric, _WORK_FIELDS, employee_id, day, fields)


def add_checkin(
    db: Session,
    employee_id: int,
    overall_feeling: int,
    energy_level: Optional[int] = None,
    stress_level: Optional[int] = None,
    motivation_level: Optional[int] = None,
    notes: Optional[str] = None,
    validated_responses: Optional[list[dict]] = None,
    burnout_score_at_checkin: Optional[float] = None,
    created_at: Optional[datetime] = None,
) -> FeelingCheckin:
    row = FeelingCheckin(
        employee_id=employee_id,
        overall_feeling=overall_feeling,
        energy_level=energy_level,
        stress_level=stress_level,
        motivation_level=motivation_level,
        notes=notes,
        validated_responses=json.dumps(validated_responses) if validated_responses else None,
        burnout_score_at_checkin=burnout_score_at_checkin,
    )
    if created_at is not None:
        row.created_at = created_at
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
