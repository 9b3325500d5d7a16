"""
Calibration: nudge the algorithmic burnout score toward how the employee
says they actually feel.

Felt burnout (0–100) per check-in day, latest entry of the day wins:
  - overall feeling, energy, motivation: (5 - x) / 4 * 100
  - stress:                              (x - 1) / 4 * 100
  - mean of the items present, blended 50/50 with the validated
    instrument score when responses were given.

Discrepancy = mean(felt - algorithmic) across check-in days, where the
algorithmic side is the score captured at check-in time when stored,
otherwise the current provisional score.

A correction of discrepancy * CORRECTION_RATE, capped at ±MAX_CORRECTION,
is applied only when |discrepancy| > DISCREPANCY_THRESHOLD and at least
MIN_CHECKINS distinct days are in the window.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Optional

from app.engine.types import CalibrationInfo, Checkin

logger = logging.getLogger(__name__)

MAX_CORRECTION = 10.0
DISCREPANCY_THRESHOLD = 15.0
MIN_CHECKINS = 3
CORRECTION_RATE = 0.5

_SCALE_MIN = 1
_SCALE_MAX = 5


def _rescale(value: int, reverse: bool) -> float:
    value = max(_SCALE_MIN, min(_SCALE_MAX, value))
    fraction = (value - _SCALE_MIN) / (_SCALE_MAX - _SCALE_MIN)
    return (1 - fraction) * 100 if reverse else fraction * 100


def instrument_score(checkin: Checkin) -> Optional[float]:
    """Weighted 0–100 burnout score from validated instrument responses."""
    total = weight_sum = 0.0
    for answer in checkin.validated_responses:
        if answer.weight <= 0:
            continue
        total += _rescale(answer.response, reverse=answer.reverse_scored) * answer.weight
        weight_sum += answer.weight
    return total / weight_sum if weight_sum else None


def felt_burnout(checkin: Checkin) -> float:
    items = [_rescale(checkin.overall_feeling, reverse=True)]
    if checkin.energy_level is not None:
        items.append(_rescale(checkin.energy_level, reverse=True))
    if checkin.stress_level is not None:
        items.append(_rescale(checkin.stress_level, reverse=False))
    if checkin.motivation_level is not None:
        items.append(_rescale(checkin.motivation_level, reverse=True))
    mood = sum(items) / len(items)
    instrument = instrument_score(checkin)
    if instrument is None:
        return mood
    return 0.5 * mood + 0.5 * instrument


def latest_per_day(checkins: Iterable[Checkin], as_of: date, window_days: int) -> list[Checkin]:
    start = as_of - timedelta(days=window_days - 1)
    latest: dict[date, Checkin] = {}
    for checkin in checkins:
        day = checkin.created_at.date()
        if not (start <= day <= as_of):
            continue
        current = latest.get(day)
        if current is None or checkin.created_at >= current.created_at:
            latest[day] = checkin
    return [latest[d] for d in sorted(latest)]


def calibrate(
    burnout_score: float,
    checkins: Iterable[Checkin],
    as_of: date,
    window_days: int,
    checkins_consented: bool = True,
) -> tuple[float, CalibrationInfo]:
    """Return (calibrated burnout score, CalibrationInfo)."""
    if not checkins_consented:
        return burnout_score, CalibrationInfo(
            applied=False,
            message="Check-in data is not used for scoring, so no calibration was applied",
        )

    days = latest_per_day(checkins, as_of, window_days)
    if len(days) < MIN_CHECKINS:
        return burnout_score, CalibrationInfo(
            applied=False,
            message=(
                f"Calibration needs at least {MIN_CHECKINS} check-ins in the last "
                f"{window_days} days ({len(days)} so far)"
            ),
            checkins_used=len(days),
        )

    gaps = []
    for checkin in days:
        algorithmic = checkin.burnout_score_at_checkin
        if algorithmic is None:
            algorithmic = burnout_score
        gaps.append(felt_burnout(checkin) - float(algorithmic))
    discrepancy = round(sum(gaps) / len(gaps), 1)

    if abs(discrepancy) <= DISCREPANCY_THRESHOLD:
        return burnout_score, CalibrationInfo(
            applied=False,
            message="Your check-ins agree with your measured data",
            discrepancy=discrepancy,
            checkins_used=len(days),
        )

    correction = max(-MAX_CORRECTION, min(MAX_CORRECTION, discrepancy * CORRECTION_RATE))
    calibrated = round(max(0.0, min(100.0, burnout_score + correction)), 1)
    direction = "higher" if discrepancy > 0 else "lower"
    logger.info(
        "Calibration applied: discrepancy=%.1f correction=%.1f over %d check-ins",
        discrepancy, correction, len(days),
    )
    return calibrated, CalibrationInfo(
        applied=True,
        message=(
            f"You've been reporting {direction} strain than your data shows, "
            f"so your score was adjusted toward how you feel"
        ),
        discrepancy=discrepancy,
        correction=round(calibrated - burnout_score, 1),
        checkins_used=len(days),
    )
