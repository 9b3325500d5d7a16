"""
Scoring response schemas.

Field names are camelCase on the wire; the dashboard's Explanation and
ZoneStatus types depend on them exactly.

GET /employees/{id}/score        → ScoreResponse
GET /employees/{id}/explanation  → ExplanationResponse
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FactorResponse(CamelModel):
    name: str
    impact: str = Field(description='"positive" | "negative" | "neutral"')
    value: str = Field(description="Human-readable value; redacted for health factors unless self-view.")
    description: str
    weight: float = Field(description="Weight applied after personalization and consent.")


class RecommendationsResponse(CamelModel):
    personal: list[str] = Field(description="Self-view only; empty for other viewers.")
    leadership: list[str] = Field(description='Category-tagged, e.g. "SUPPORT: ...".')


class InteractionEffectResponse(CamelModel):
    name: str
    impact: Optional[str] = None
    description: str
    severity: str = Field(description='"high" | "critical"')


class CalibrationInfoResponse(CamelModel):
    applied: bool
    message: str
    discrepancy: float


class ActiveLifeEventResponse(CamelModel):
    label: str
    impact: str


class DayContextResponse(CamelModel):
    label: str
    message: str


class ExplanationContext(CamelModel):
    interaction_effects: list[InteractionEffectResponse] = Field(default_factory=list)
    calibration_info: CalibrationInfoResponse
    active_life_events: list[ActiveLifeEventResponse] = Field(default_factory=list)
    day_context: Optional[DayContextResponse] = None
    using_personal_baselines: Optional[bool] = None
    chronotype: Optional[str] = None


class ExplanationResponse(CamelModel):
    zone: str = Field(description='"red" | "yellow" | "green"')
    burnout_score: float
    readiness_score: float
    factors: list[FactorResponse]
    recommendations: RecommendationsResponse
    context: ExplanationContext


class ThresholdsResponse(CamelModel):
    burnout_red_threshold: float
    readiness_green_threshold: float
    threshold_type: str
    source: str = Field(description='"system" | "organization" | "employee_override"')


class ScoreResponse(CamelModel):
    employee_id: int
    date: str
    zone: str
    burnout_score: float
    readiness_score: float
    thresholds: ThresholdsResponse
    calibration_applied: bool
    interaction_effect_count: int
    aggregate_eligible: bool = Field(
        description="False when the employee opted out of organization-level aggregates."
    )
