"""
Consent filtering. Withdrawn categories are removed, not zeroed: a missing
value takes the missing-data path downstream, a zero is a real reading.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from app.engine.types import Checkin, MetricSample, ScoringConsent


@dataclass(frozen=True)
class ConsentedInputs:
    samples: tuple[MetricSample, ...]
    checkins: tuple[Checkin, ...]
    consent: ScoringConsent

    @property
    def checkins_consented(self) -> bool:
        return self.consent.use_checkin_data


def apply_consent(
    samples: Iterable[MetricSample],
    checkins: Iterable[Checkin],
    consent: ScoringConsent | None,
) -> ConsentedInputs:
    consent = consent or ScoringConsent()
    filtered = []
    for sample in samples:
        if not consent.use_health_data and sample.health is not None:
            sample = replace(sample, health=None)
        if not consent.use_work_data and sample.work is not None:
            sample = replace(sample, work=None)
        filtered.append(sample)
    kept_checkins = tuple(checkins) if consent.use_checkin_data else ()
    return ConsentedInputs(samples=tuple(filtered), checkins=kept_checkins, consent=consent)
