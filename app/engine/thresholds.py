"""
Threshold resolution: employee override > organization default > system default.

The lookup takes an explicit as-of date and one ThresholdLayers snapshot;
it never reads ambient configuration. Override intervals are half-open:
[start_date, end_date), with end_date=None meaning permanent.
"""
from __future__ import annotations

import logging
from dataclasses import fields
from datetime import date
from typing import Optional

from app.core.errors import ConfigurationError
from app.engine.types import (
    ThresholdConfig,
    ThresholdLayer,
    ThresholdLayers,
    ThresholdOverride,
    ThresholdSource,
    ThresholdType,
)

logger = logging.getLogger(__name__)

_LAYER_FIELDS = [f.name for f in fields(ThresholdLayer)]


def active_override(layers: ThresholdLayers, as_of: date) -> Optional[ThresholdOverride]:
    """Return the single override active on as_of, or None. Overlaps raise."""
    matching = [o for o in layers.overrides if o.is_active_on(as_of)]
    if len(matching) > 1:
        logger.warning(
            "Ambiguous threshold overrides for employee %s on %s: %s",
            layers.employee_id, as_of, [o.override_id for o in matching],
        )
        raise ConfigurationError.ambiguous_override(
            layers.employee_id, as_of, [o.override_id for o in matching]
        )
    return matching[0] if matching else None


def _merge(top: ThresholdLayer, bottom: ThresholdLayer) -> ThresholdLayer:
    merged = {}
    for name in _LAYER_FIELDS:
        value = getattr(top, name)
        merged[name] = value if value is not None else getattr(bottom, name)
    return ThresholdLayer(**merged)


def resolve_thresholds(layers: ThresholdLayers, as_of: date) -> ThresholdConfig:
    """
    Resolve the effective ThresholdConfig for as_of.

    Layers merge field-by-field so a partial override only replaces the
    cutoffs it actually sets. The system default must be complete; it is
    the last fallback and is never papered over with constants.
    """
    system = layers.system
    if system is None:
        raise ConfigurationError.missing_system_default()
    missing = [name for name in _LAYER_FIELDS if getattr(system, name) is None]
    if missing:
        raise ConfigurationError.missing_system_default(missing)

    effective = system
    source = ThresholdSource.system
    reason = None

    if layers.organization is not None:
        effective = _merge(layers.organization, effective)
        source = ThresholdSource.organization

    override = active_override(layers, as_of)
    if override is not None:
        effective = _merge(override.layer, effective)
        source = ThresholdSource.employee_override
        reason = override.reason

    return ThresholdConfig(
        burnout_red_threshold=float(effective.burnout_red_threshold),
        readiness_green_threshold=float(effective.readiness_green_threshold),
        interaction_high_threshold=float(effective.interaction_high_threshold),
        interaction_critical_threshold=float(effective.interaction_critical_threshold),
        threshold_type=ThresholdType(effective.threshold_type),
        enable_interaction_effects=bool(effective.enable_interaction_effects),
        weekend_adjustment_enabled=bool(effective.weekend_adjustment_enabled),
        source=source,
        override_reason=reason,
    )
