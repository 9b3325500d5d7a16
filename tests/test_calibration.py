"""
Tests for check-in calibration of the burnout score.

Felt burnout for overall_feeling alone: 1 → 100, 3 → 50, 5 → 0.
"""
import pytest
from datetime import date, datetime, timedelta

from app.engine.calibration import (
    MAX_CORRECTION,
    calibrate,
    felt_burnout,
    instrument_score,
    latest_per_day,
)
from app.engine.types import Checkin, InstrumentResponse

AS_OF = date(2026, 3, 10)
WINDOW = 7


def _checkin(days_ago=0, hour=9, overall=3, at_checkin=None, **kwargs):
    created = datetime.combine(AS_OF - timedelta(days=days_ago), datetime.min.time()) + timedelta(hours=hour)
    return Checkin(
        employee_id=1,
        created_at=created,
        overall_feeling=overall,
        burnout_score_at_checkin=at_checkin,
        **kwargs,
    )


def _three_days(**kwargs):
    return [_checkin(days_ago=d, **kwargs) for d in range(3)]


class TestFeltBurnout:
    def test_overall_feeling_scale(self):
        assert felt_burnout(_checkin(overall=1)) == 100.0
        assert felt_burnout(_checkin(overall=3)) == 50.0
        assert felt_burnout(_checkin(overall=5)) == 0.0

    def test_stress_is_not_reversed(self):
        assert felt_burnout(_checkin(overall=5, stress_level=5)) == pytest.approx(50.0)

    def test_instrument_blended_half_and_half(self):
        checkin = _checkin(overall=3, validated_responses=(InstrumentResponse(response=5),))
        assert instrument_score(checkin) == 100.0
        assert felt_burnout(checkin) == pytest.approx(75.0)

    def test_instrument_weights_and_reverse_scoring(self):
        checkin = _checkin(validated_responses=(
            InstrumentResponse(response=5, weight=3.0),
            InstrumentResponse(response=5, weight=1.0, reverse_scored=True),
        ))
        assert instrument_score(checkin) == pytest.approx(75.0)

    def test_no_instrument(self):
        assert instrument_score(_checkin()) is None


class TestLatestPerDay:
    def test_latest_entry_of_the_day_wins(self):
        morning = _checkin(hour=8, overall=1)
        evening = _checkin(hour=20, overall=5)
        assert latest_per_day([evening, morning], AS_OF, WINDOW) == [evening]

    def test_window_bounds(self):
        inside = _checkin(days_ago=WINDOW - 1)
        outside = _checkin(days_ago=WINDOW)
        assert latest_per_day([inside, outside], AS_OF, WINDOW) == [inside]


class TestCalibrate:
    def test_too_few_checkin_days(self):
        score, info = calibrate(50.0, [_checkin(hour=h, overall=1) for h in (8, 12, 18)], AS_OF, WINDOW)
        assert score == 50.0
        assert info.applied is False
        assert info.checkins_used == 1

    def test_agreement_leaves_score_alone(self):
        score, info = calibrate(40.0, _three_days(overall=3), AS_OF, WINDOW)
        assert score == 40.0
        assert info.applied is False
        assert info.discrepancy == pytest.approx(10.0)

    def test_feeling_worse_raises_score_by_capped_amount(self):
        score, info = calibrate(50.0, _three_days(overall=1), AS_OF, WINDOW)
        assert score == 50.0 + MAX_CORRECTION
        assert info.applied is True
        assert info.discrepancy == pytest.approx(50.0)
        assert info.correction == pytest.approx(MAX_CORRECTION)
        assert "higher" in info.message

    def test_feeling_better_lowers_score(self):
        score, info = calibrate(50.0, _three_days(overall=5), AS_OF, WINDOW)
        assert score == 50.0 - MAX_CORRECTION
        assert "lower" in info.message

    def test_uses_score_captured_at_checkin(self):
        # felt 50 vs 32 at check-in time → discrepancy 18 → correction 9
        score, info = calibrate(50.0, _three_days(overall=3, at_checkin=32.0), AS_OF, WINDOW)
        assert info.applied is True
        assert score == pytest.approx(59.0)

    def test_result_stays_in_bounds(self):
        score, info = calibrate(95.0, _three_days(overall=1, at_checkin=50.0), AS_OF, WINDOW)
        assert score == 100.0
        assert info.correction == pytest.approx(5.0)

    def test_checkin_consent_withdrawn(self):
        score, info = calibrate(50.0, _three_days(overall=1), AS_OF, WINDOW, checkins_consented=False)
        assert score == 50.0
        assert info.applied is False
        assert "not used" in info.message
