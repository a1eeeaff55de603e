from __future__ import annotations

import random

import pytest

from core.shots import (
    FRONT_COURT_SHOTS,
    REAR_COURT_SHOTS,
    SHOT_DIRECTIONS,
    arrow_for,
    choose_shot,
    compose_phrase,
    court_group,
)
from domain.errors import DegenerateDistribution, InvalidTarget
from fakes import ScriptedRandom

WEIGHTS = {"net": 50, "lift": 50, "drop": 40, "clear": 40, "smash": 20}


@pytest.mark.parametrize("target", [1, 2])
def test_front_targets_draw_front_shots(target):
    rng = random.Random(target)
    for _ in range(200):
        shot, direction = choose_shot(rng, target, WEIGHTS)
        assert shot in FRONT_COURT_SHOTS
        assert direction in SHOT_DIRECTIONS[shot]


@pytest.mark.parametrize("target", [3, 4])
def test_rear_targets_draw_rear_shots(target):
    rng = random.Random(target)
    shots = set()
    for _ in range(300):
        shot, direction = choose_shot(rng, target, WEIGHTS)
        assert shot in REAR_COURT_SHOTS
        assert direction in SHOT_DIRECTIONS[shot]
        shots.add(shot)
    assert shots == set(REAR_COURT_SHOTS)


@pytest.mark.parametrize("target", [0, 5, -1])
def test_targets_outside_grid_are_invalid(target):
    with pytest.raises(InvalidTarget):
        court_group(target)
    with pytest.raises(InvalidTarget):
        choose_shot(random.Random(0), target, WEIGHTS)


def test_lift_never_goes_middle():
    rng = random.Random(5)
    weights = dict(WEIGHTS, net=0)
    dirs = {choose_shot(rng, 1, weights)[1] for _ in range(200)}
    assert dirs == {"left", "right"}


def test_group_weights_only_use_their_group():
    # rear weights are irrelevant for a front target
    weights = {"net": 0, "lift": 1, "drop": 0, "clear": 0, "smash": 0}
    assert choose_shot(random.Random(0), 2, weights)[0] == "lift"
    with pytest.raises(DegenerateDistribution):
        choose_shot(random.Random(0), 3, weights)


def test_scripted_draw_picks_net_then_right():
    # 0.1 -> net (first half of 50/50), 0.9 -> last of three directions
    shot, direction = choose_shot(ScriptedRandom(0.1, 0.9), 2, WEIGHTS)
    assert (shot, direction) == ("net", "right")


def test_phrase_and_arrow():
    assert compose_phrase(2, "net", "left") == "2, Net shot left"
    assert compose_phrase(4, "smash", "middle") == "4, Smash middle"
    assert compose_phrase(3) == "3"
    assert arrow_for("left") == "←"
    assert arrow_for("middle") == "↓"
    assert arrow_for("right") == "→"
    assert arrow_for(None) == ""
