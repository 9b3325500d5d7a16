"""
Tests for threshold resolution: override > organization > system,
field-by-field merge, half-open override intervals, and the two
configuration failures (ambiguous override, missing system default).
"""
import pytest
from datetime import date

from app.core.errors import ConfigurationError
from app.engine.thresholds import active_override, resolve_thresholds
from app.engine.types import (
    ThresholdLayer,
    ThresholdLayers,
    ThresholdOverride,
    ThresholdSource,
    ThresholdType,
)

AS_OF = date(2026, 3, 10)

SYSTEM = ThresholdLayer(
    burnout_red_threshold=70,
    readiness_green_threshold=70,
    interaction_high_threshold=50,
    interaction_critical_threshold=70,
    threshold_type=ThresholdType.absolute,
    enable_interaction_effects=True,
    weekend_adjustment_enabled=True,
)


def _override(override_id, start, end=None, reason=None, **fields):
    return ThresholdOverride(
        override_id=override_id,
        employee_id=1,
        start_date=start,
        end_date=end,
        reason=reason,
        layer=ThresholdLayer(**fields),
    )


class TestLayering:
    def test_system_only(self):
        cfg = resolve_thresholds(ThresholdLayers(employee_id=1, system=SYSTEM), AS_OF)
        assert cfg.source == ThresholdSource.system
        assert cfg.burnout_red_threshold == 70.0
        assert cfg.threshold_type == ThresholdType.absolute
        assert cfg.override_reason is None

    def test_organization_replaces_only_fields_it_sets(self):
        layers = ThresholdLayers(
            employee_id=1,
            system=SYSTEM,
            organization=ThresholdLayer(burnout_red_threshold=60),
        )
        cfg = resolve_thresholds(layers, AS_OF)
        assert cfg.source == ThresholdSource.organization
        assert cfg.burnout_red_threshold == 60.0
        assert cfg.readiness_green_threshold == 70.0
        assert cfg.enable_interaction_effects is True

    def test_partial_override_inherits_from_organization(self):
        layers = ThresholdLayers(
            employee_id=1,
            system=SYSTEM,
            organization=ThresholdLayer(burnout_red_threshold=60),
            overrides=(_override(1, date(2026, 3, 1), readiness_green_threshold=80),),
        )
        cfg = resolve_thresholds(layers, AS_OF)
        assert cfg.source == ThresholdSource.employee_override
        assert cfg.readiness_green_threshold == 80.0
        assert cfg.burnout_red_threshold == 60.0

    def test_override_reason_is_carried(self):
        layers = ThresholdLayers(
            employee_id=1,
            system=SYSTEM,
            overrides=(_override(1, date(2026, 3, 1), reason="Post-surgery recovery", burnout_red_threshold=85),),
        )
        cfg = resolve_thresholds(layers, AS_OF)
        assert cfg.override_reason == "Post-surgery recovery"

    def test_explicit_false_in_organization_wins(self):
        layers = ThresholdLayers(
            employee_id=1,
            system=SYSTEM,
            organization=ThresholdLayer(enable_interaction_effects=False),
        )
        assert resolve_thresholds(layers, AS_OF).enable_interaction_effects is False


class TestOverrideInterval:
    def test_start_date_inclusive(self):
        layers = ThresholdLayers(1, SYSTEM, overrides=(_override(1, AS_OF, burnout_red_threshold=85),))
        assert resolve_thresholds(layers, AS_OF).burnout_red_threshold == 85.0

    def test_end_date_exclusive(self):
        layers = ThresholdLayers(
            1, SYSTEM, overrides=(_override(1, date(2026, 3, 1), end=AS_OF, burnout_red_threshold=85),)
        )
        cfg = resolve_thresholds(layers, AS_OF)
        assert cfg.burnout_red_threshold == 70.0
        assert cfg.source == ThresholdSource.system

    def test_future_override_ignored(self):
        layers = ThresholdLayers(1, SYSTEM, overrides=(_override(1, date(2026, 4, 1), burnout_red_threshold=85),))
        assert active_override(layers, AS_OF) is None

    def test_back_to_back_overrides_are_not_ambiguous(self):
        layers = ThresholdLayers(
            1,
            SYSTEM,
            overrides=(
                _override(1, date(2026, 3, 1), end=AS_OF, burnout_red_threshold=80),
                _override(2, AS_OF, burnout_red_threshold=85),
            ),
        )
        assert resolve_thresholds(layers, AS_OF).burnout_red_threshold == 85.0


class TestConfigurationErrors:
    def test_overlapping_overrides_raise(self):
        layers = ThresholdLayers(
            1,
            SYSTEM,
            overrides=(
                _override(11, date(2026, 3, 1), burnout_red_threshold=80),
                _override(12, date(2026, 3, 5), end=date(2026, 3, 20), burnout_red_threshold=85),
            ),
        )
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_thresholds(layers, AS_OF)
        err = exc_info.value
        assert err.http_status == 409
        assert err.details["override_ids"] == ["11", "12"]
        assert err.details["as_of"] == "2026-03-10"

    def test_missing_system_default_raises(self):
        with pytest.raises(ConfigurationError):
            resolve_thresholds(ThresholdLayers(employee_id=1, system=None), AS_OF)

    def test_incomplete_system_default_lists_missing_fields(self):
        incomplete = ThresholdLayer(burnout_red_threshold=70, readiness_green_threshold=70)
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_thresholds(ThresholdLayers(employee_id=1, system=incomplete), AS_OF)
        missing = exc_info.value.details["missing_fields"]
        assert "interaction_high_threshold" in missing
        assert "burnout_red_threshold" not in missing

    def test_organization_cannot_fill_gaps_in_system_default(self):
        layers = ThresholdLayers(
            1,
            ThresholdLayer(burnout_red_threshold=70),
            organization=SYSTEM,
        )
        with pytest.raises(ConfigurationError):
            resolve_thresholds(layers, AS_OF)
