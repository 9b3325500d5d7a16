"""
Value types shared by every scoring stage.

Plain frozen dataclasses, with no ORM or Pydantic types. Stages take these as input
and return new instances; nothing is mutated after construction.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Zone(str, enum.Enum):
    red = "red"
    yellow = "yellow"
    green = "green"


class Impact(str, enum.Enum):
    positive = "positive"
    negative = "negative"
    neutral = "neutral"


class DataCategory(str, enum.Enum):
    health = "health"
    work = "work"


class WeightKey(str, enum.Enum):
    sleep = "sleep"
    exercise = "exercise"
    workload = "workload"
    meetings = "meetings"
    heart = "heart"


class MetricKey(str, enum.Enum):
    sleep = "sleep"
    deep_sleep = "deep_sleep"
    exercise = "exercise"
    hrv = "hrv"
    resting_hr = "resting_hr"
    recovery = "recovery"
    overtime = "overtime"
    work_hours = "work_hours"
    meeting_load = "meeting_load"
    focus_time = "focus_time"
    task_completion = "task_completion"


class ThresholdType(str, enum.Enum):
    absolute = "absolute"
    # Cutoffs are pre-resolved by an external analytics job.
    percentile = "percentile"


class ThresholdSource(str, enum.Enum):
    system = "system"
    organization = "organization"
    employee_override = "employee_override"


class ViewerRole(str, enum.Enum):
    employee = "employee"
    manager = "manager"
    admin = "admin"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthMetrics:
    resting_heart_rate: Optional[float] = None
    avg_heart_rate: Optional[float] = None
    heart_rate_variability: Optional[float] = None
    sleep_hours: Optional[float] = None
    deep_sleep_hours: Optional[float] = None
    rem_sleep_hours: Optional[float] = None
    steps: Optional[int] = None
    exercise_minutes: Optional[float] = None
    recovery_score: Optional[float] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class WorkMetrics:
    hours_worked: Optional[float] = None
    overtime_hours: Optional[float] = None
    meetings_attended: Optional[int] = None
    meeting_hours: Optional[float] = None
    focus_time_hours: Optional[float] = None
    tasks_completed: Optional[int] = None
    tasks_assigned: Optional[int] = None
    emails_sent: Optional[int] = None
    messages_sent: Optional[int] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class MetricSample:
    """One calendar day for one employee. Either part may be absent."""
    employee_id: int
    day: date
    health: Optional[HealthMetrics] = None
    work: Optional[WorkMetrics] = None


@dataclass(frozen=True)
class InstrumentResponse:
    """One answer to a validated burnout instrument question (1–5 scale)."""
    response: int
    weight: float = 1.0
    reverse_scored: bool = False


@dataclass(frozen=True)
class Checkin:
    employee_id: int
    created_at: datetime
    overall_feeling: int
    energy_level: Optional[int] = None
    stress_level: Optional[int] = None
    motivation_level: Optional[int] = None
    validated_responses: tuple[InstrumentResponse, ...] = ()
    notes: Optional[str] = None
    burnout_score_at_checkin: Optional[float] = None


@dataclass(frozen=True)
class PersonalPreferences:
    ideal_sleep_hours: Optional[float] = None
    ideal_work_hours: Optional[float] = None
    ideal_exercise_minutes: Optional[float] = None
    max_meeting_hours_daily: Optional[float] = None
    chronotype: Optional[str] = None
    social_energy_type: Optional[str] = None
    sleep_flexibility: Optional[str] = None
    preferred_work_pattern: Optional[str] = None
    weight_sleep: Optional[float] = None
    weight_exercise: Optional[float] = None
    weight_workload: Optional[float] = None
    weight_meetings: Optional[float] = None
    weight_heart_metrics: Optional[float] = None


@dataclass(frozen=True)
class LifeEvent:
    event_type: str
    label: str
    start_date: date
    end_date: Optional[date] = None
    sleep_adjustment: float = 0.0
    work_adjustment: float = 0.0
    exercise_adjustment: float = 0.0
    stress_tolerance_adjustment: float = 0.0

    def is_active_on(self, day: date) -> bool:
        if self.start_date > day:
            return False
        return self.end_date is None or day < self.end_date


@dataclass(frozen=True)
class ThresholdLayer:
    """One layer of threshold configuration. None means "inherit"."""
    burnout_red_threshold: Optional[float] = None
    readiness_green_threshold: Optional[float] = None
    interaction_high_threshold: Optional[float] = None
    interaction_critical_threshold: Optional[float] = None
    threshold_type: Optional[ThresholdType] = None
    enable_interaction_effects: Optional[bool] = None
    weekend_adjustment_enabled: Optional[bool] = None


@dataclass(frozen=True)
class ThresholdOverride:
    override_id: int
    employee_id: int
    start_date: date
    layer: ThresholdLayer
    end_date: Optional[date] = None
    reason: Optional[str] = None

    def is_active_on(self, day: date) -> bool:
        if self.start_date > day:
            return False
        return self.end_date is None or day < self.end_date


@dataclass(frozen=True)
class ThresholdLayers:
    """Everything the resolver needs, read from a single configuration snapshot."""
    employee_id: Optional[int]
    system: Optional[ThresholdLayer]
    organization: Optional[ThresholdLayer] = None
    overrides: tuple[ThresholdOverride, ...] = ()


@dataclass(frozen=True)
class ThresholdConfig:
    """Fully resolved thresholds. No field is ever None."""
    burnout_red_threshold: float
    readiness_green_threshold: float
    interaction_high_threshold: float
    interaction_critical_threshold: float
    threshold_type: ThresholdType
    enable_interaction_effects: bool
    weekend_adjustment_enabled: bool
    source: ThresholdSource = ThresholdSource.system
    override_reason: Optional[str] = None


@dataclass(frozen=True)
class ScoringConsent:
    use_health_data: bool = True
    use_work_data: bool = True
    use_checkin_data: bool = True
    allow_aggregate_contribution: bool = True


@dataclass(frozen=True)
class ScoringParameters:
    window_days: int = 7
    baseline_days: int = 28
    calibration_window_days: int = 7


@dataclass(frozen=True)
class ScoringSnapshot:
    """All inputs for one (employee, date) computation, already fetched."""
    employee_id: int
    as_of: date
    samples: tuple[MetricSample, ...]
    checkins: tuple[Checkin, ...]
    threshold_layers: ThresholdLayers
    preferences: Optional[PersonalPreferences] = None
    life_events: tuple[LifeEvent, ...] = ()
    consent: ScoringConsent = field(default_factory=ScoringConsent)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Factor:
    key: MetricKey
    name: str
    category: DataCategory
    impact: Impact
    value: str
    description: str
    weight: float
    deviation: float
    contribution: float
    magnitude: float


@dataclass(frozen=True)
class InteractionEffect:
    name: str
    severity: str
    description: str
    metrics: tuple[MetricKey, ...]
    penalty: float


@dataclass(frozen=True)
class CalibrationInfo:
    applied: bool
    message: str
    discrepancy: float = 0.0
    correction: float = 0.0
    checkins_used: int = 0


@dataclass(frozen=True)
class ActiveLifeEvent:
    label: str
    adjusted: tuple[str, ...]


@dataclass(frozen=True)
class ScoreResult:
    employee_id: int
    day: date
    burnout_score: float
    readiness_score: float
    zone: Zone
    factors: tuple[Factor, ...]
    interaction_effects: tuple[InteractionEffect, ...]
    calibration: CalibrationInfo
    active_life_events: tuple[ActiveLifeEvent, ...]
    thresholds: ThresholdConfig
    using_personal_baselines: bool
    chronotype: Optional[str]
    social_energy_type: Optional[str]
    weekend_adjusted: bool
    aggregate_eligible: bool
