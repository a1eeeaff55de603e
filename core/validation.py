# -*- coding: utf-8 -*-

import math

from core.shots import ALL_SHOTS, FRONT_COURT_SHOTS, REAR_COURT_SHOTS, group_weights
from domain.errors import (
    DegenerateDistribution,
    InvalidConfiguration,
    InvalidRange,
)
from domain.models import DrillConfig, DrillKind, FixedReps, SecondsRange


def _check_seconds(name: str, r: SecondsRange) -> None:
    # NaN compares false both ways and inf never converts to ms
    if not (math.isfinite(r.min) and math.isfinite(r.max)):
        raise InvalidConfiguration(f"{name}: durations must be finite numbers.")
    if r.min > r.max:
        raise InvalidRange(f"{name}: min {r.min} must be <= max {r.max}.")
    if r.min <= 0:
        raise InvalidConfiguration(f"{name}: durations must be positive.")


def validate_config(cfg: DrillConfig) -> None:
    """
    Raise a DrillConfigError for anything that would break a run.
    Called once per start; a config that passes is never re-checked mid-run.
    """
    _check_seconds("Time to target", cfg.time_to_target)
    _check_seconds("Time to center", cfg.time_to_center)

    if not math.isfinite(cfg.number_display_sec) or cfg.number_display_sec <= 0:
        raise InvalidConfiguration("Display time must be a positive number.")

    if isinstance(cfg.rep_policy, FixedReps) and cfg.rep_policy.target <= 0:
        raise InvalidConfiguration("Target reps must be positive.")

    if cfg.drill_kind is DrillKind.FOOTWORK:
        nums = cfg.shuttle_numbers
        if nums.min > nums.max:
            raise InvalidRange(
                f"Shuttle numbers: min {nums.min} must be <= max {nums.max}."
            )
        if nums.min < 1:
            raise InvalidConfiguration("Shuttle numbers must be positive.")
        return

    # shots drill
    for name in ALL_SHOTS:
        if cfg.shot_weights.get(name, 0) < 0:
            raise DegenerateDistribution(f"Weight for '{name}' is negative.")
    for label, group in (("Front court", FRONT_COURT_SHOTS), ("Rear court", REAR_COURT_SHOTS)):
        if sum(group_weights(cfg.shot_weights, group).values()) <= 0:
            raise DegenerateDistribution(f"{label} shot weights sum to zero.")
