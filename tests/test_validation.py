from __future__ import annotations

from dataclasses import replace

import pytest

from core.validation import validate_config
from domain.errors import (
    DegenerateDistribution,
    InvalidConfiguration,
    InvalidRange,
)
from domain.models import (
    DrillConfig,
    DrillKind,
    FixedReps,
    IntRange,
    SecondsRange,
)

SHOTS = DrillConfig(drill_kind=DrillKind.FOOTWORK_WITH_SHOTS)


def test_defaults_are_valid():
    validate_config(DrillConfig())
    validate_config(SHOTS)


def test_single_value_shuttle_range_is_valid():
    validate_config(DrillConfig(shuttle_numbers=IntRange(5, 5)))


@pytest.mark.parametrize(
    "cfg",
    [
        DrillConfig(shuttle_numbers=IntRange(5, 1)),
        DrillConfig(time_to_target=SecondsRange(3.0, 1.0)),
        DrillConfig(time_to_center=SecondsRange(2.0, 1.5)),
    ],
)
def test_inverted_ranges(cfg):
    with pytest.raises(InvalidRange):
        validate_config(cfg)


@pytest.mark.parametrize(
    "cfg",
    [
        DrillConfig(number_display_sec=0),
        DrillConfig(time_to_target=SecondsRange(0.0, 1.0)),
        DrillConfig(rep_policy=FixedReps(0)),
        DrillConfig(shuttle_numbers=IntRange(0, 4)),
    ],
)
def test_non_positive_values(cfg):
    with pytest.raises(InvalidConfiguration):
        validate_config(cfg)


def test_zero_front_weights_are_degenerate():
    cfg = replace(SHOTS, shot_weights={"net": 0, "lift": 0, "drop": 40, "clear": 40, "smash": 20})
    with pytest.raises(DegenerateDistribution):
        validate_config(cfg)


def test_missing_rear_weights_are_degenerate():
    cfg = replace(SHOTS, shot_weights={"net": 50, "lift": 50})
    with pytest.raises(DegenerateDistribution):
        validate_config(cfg)


def test_weights_ignored_for_plain_footwork():
    validate_config(DrillConfig(shot_weights={}))


def test_weights_need_not_total_100():
    cfg = replace(SHOTS, shot_weights={"net": 3, "lift": 1, "drop": 0, "clear": 0, "smash": 7})
    validate_config(cfg)


@pytest.mark.parametrize(
    "cfg",
    [
        DrillConfig(time_to_target=SecondsRange(float("nan"), float("nan"))),
        DrillConfig(time_to_target=SecondsRange(1.0, float("nan"))),
        DrillConfig(time_to_center=SecondsRange(1.0, float("inf"))),
        DrillConfig(number_display_sec=float("inf")),
        DrillConfig(number_display_sec=float("nan")),
    ],
)
def test_non_finite_durations(cfg):
    with pytest.raises(InvalidConfiguration):
        validate_config(cfg)
