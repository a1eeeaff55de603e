# -*- coding: utf-8 -*-

from typing import Dict, Mapping, Optional, Tuple

from core.random_selector import RandomSource, pick_categorical, pick_choice
from domain.errors import InvalidTarget

FRONT_COURT_SHOTS = ("net", "lift")
REAR_COURT_SHOTS = ("drop", "clear", "smash")
ALL_SHOTS = FRONT_COURT_SHOTS + REAR_COURT_SHOTS

# court grid used by the shots drill: 1-2 front, 3-4 rear
FRONT_COURT_TARGETS = (1, 2)
REAR_COURT_TARGETS = (3, 4)
SHOT_TARGET_RANGE = (1, 4)

SHOT_DIRECTIONS: Dict[str, Tuple[str, ...]] = {
    "net": ("left", "middle", "right"),
    "lift": ("left", "right"),
    "drop": ("left", "middle", "right"),
    "clear": ("left", "right"),
    "smash": ("left", "middle", "right"),
}

SHOT_LABELS: Dict[str, str] = {
    "net": "Net shot",
    "lift": "Lift",
    "drop": "Drop shot",
    "clear": "Clear",
    "smash": "Smash",
}

ARROW_SYMBOLS: Dict[str, str] = {
    "left": "←",
    "middle": "↓",
    "right": "→",
}


def court_group(target: int) -> Tuple[str, ...]:
    if target in FRONT_COURT_TARGETS:
        return FRONT_COURT_SHOTS
    if target in REAR_COURT_TARGETS:
        return REAR_COURT_SHOTS
    raise InvalidTarget(f"Target {target} has no shot group (expected 1-4).")


def group_weights(
    shot_weights: Mapping[str, int], group: Tuple[str, ...]
) -> Dict[str, int]:
    # missing names count as zero so a partial mapping still fails the sum check
    return {name: int(shot_weights.get(name, 0)) for name in group}


def choose_shot(
    rng: RandomSource, target: int, shot_weights: Mapping[str, int]
) -> Tuple[str, str]:
    """Return (shot, direction) for a target number."""
    group = court_group(target)
    shot = pick_categorical(rng, group_weights(shot_weights, group))
    direction = pick_choice(rng, SHOT_DIRECTIONS[shot])
    return shot, direction


def shot_label(shot: str) -> str:
    return SHOT_LABELS.get(shot, shot)


def arrow_for(direction: Optional[str]) -> str:
    if not direction:
        return ""
    return ARROW_SYMBOLS.get(direction, "")


def compose_phrase(
    number: int, shot: Optional[str] = None, direction: Optional[str] = None
) -> str:
    # "2" for plain footwork, "2, Net shot left" with a shot
    if not shot:
        return str(number)
    return f"{number}, {shot_label(shot)} {direction or ''}".rstrip()
