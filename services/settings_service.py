# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import math
from dataclasses import replace
from enum import Enum
from typing import Any, Dict, Mapping

from loguru import logger

from core.shots import ALL_SHOTS, FRONT_COURT_SHOTS, REAR_COURT_SHOTS
from core.validation import validate_config
from domain.errors import SettingsFormError
from domain.models import (
    DrillConfig,
    DrillKind,
    FixedReps,
    InfiniteReps,
    IntRange,
    SecondsRange,
)
from storage.db import Database
from storage.repos import AppStateRepo

SETTINGS_KEY = "training_settings"


class WeightPolicy(str, Enum):
    # every group must total exactly 100 percent
    STRICT = "strict"
    # any non-negative weights with a positive group total
    LENIENT = "lenient"


# ----- JSON blob <-> DrillConfig -----
def config_to_dict(cfg: DrillConfig) -> Dict[str, Any]:
    fixed = isinstance(cfg.rep_policy, FixedReps)
    return {
        "drill_kind": cfg.drill_kind.value,
        "time_to_target": [cfg.time_to_target.min, cfg.time_to_target.max],
        "time_to_center": [cfg.time_to_center.min, cfg.time_to_center.max],
        "rep_mode": "fixed" if fixed else "infinite",
        "target_reps": cfg.rep_policy.target if fixed else cfg.fixed_target_reps,
        "sound_enabled": cfg.sound_enabled,
        "shuttle_numbers": [cfg.shuttle_numbers.min, cfg.shuttle_numbers.max],
        "number_display_sec": cfg.number_display_sec,
        "shot_weights": dict(cfg.shot_weights),
    }


def config_from_dict(data: Mapping[str, Any]) -> DrillConfig:
    """
    Build a config from a stored blob. Missing keys take defaults;
    malformed values raise (ValueError / TypeError / KeyError).
    """
    if not isinstance(data, Mapping):
        raise TypeError("Stored settings are not an object.")
    base = DrillConfig()

    def pair(key: str, default):
        if key not in data:
            return default
        lo, hi = data[key]
        return type(default)(type(default.min)(lo), type(default.max)(hi))

    kind = DrillKind(data.get("drill_kind", base.drill_kind.value))
    target_reps = int(data.get("target_reps", base.fixed_target_reps))
    sound_enabled = data.get("sound_enabled", base.sound_enabled)
    if not isinstance(sound_enabled, bool):
        raise TypeError(f"sound_enabled must be true/false, got {sound_enabled!r}")
    mode = data.get("rep_mode", "infinite")
    if mode not in ("infinite", "fixed"):
        raise ValueError(f"Unknown rep mode: {mode!r}")
    policy = FixedReps(target_reps) if mode == "fixed" else InfiniteReps()

    weights = dict(base.shot_weights)
    for name, w in dict(data.get("shot_weights", {})).items():
        if name in ALL_SHOTS:
            weights[name] = int(w)

    cfg = DrillConfig(
        drill_kind=kind,
        time_to_target=pair("time_to_target", base.time_to_target),
        time_to_center=pair("time_to_center", base.time_to_center),
        rep_policy=policy,
        sound_enabled=sound_enabled,
        shuttle_numbers=pair("shuttle_numbers", base.shuttle_numbers),
        number_display_sec=float(
            data.get("number_display_sec", base.number_display_sec)
        ),
        shot_weights=weights,
        fixed_target_reps=target_reps,
    )
    times = (
        cfg.time_to_target.min,
        cfg.time_to_target.max,
        cfg.time_to_center.min,
        cfg.time_to_center.max,
        cfg.number_display_sec,
    )
    if not all(math.isfinite(t) for t in times):
        raise ValueError("Stored durations must be finite numbers.")
    return cfg


# ----- Form validation -----
def check_shot_percentages(
    weights: Mapping[str, int], policy: WeightPolicy = WeightPolicy.STRICT
) -> None:
    for name in ALL_SHOTS:
        if weights.get(name, 0) < 0:
            raise SettingsFormError("Probabilities must be non-negative (0-100)")

    if policy is WeightPolicy.LENIENT:
        for label, group in (("Front", FRONT_COURT_SHOTS), ("Rear", REAR_COURT_SHOTS)):
            if sum(weights.get(n, 0) for n in group) <= 0:
                raise SettingsFormError(f"{label} court shots need at least one non-zero value")
        return

    if any(weights.get(name, 0) > 100 for name in ALL_SHOTS):
        raise SettingsFormError("Probabilities must be ≤ 100%")
    front = sum(weights.get(n, 0) for n in FRONT_COURT_SHOTS)
    if front != 100:
        raise SettingsFormError(f"Sum of Front court shots: {front}% (must be 100%)")
    rear = sum(weights.get(n, 0) for n in REAR_COURT_SHOTS)
    if rear != 100:
        raise SettingsFormError(f"Sum of Rear court shots: {rear}% (must be 100%)")


def form_values(cfg: DrillConfig) -> Dict[str, str]:
    fixed = isinstance(cfg.rep_policy, FixedReps)
    values = {
        "time_to_target_min": str(cfg.time_to_target.min),
        "time_to_target_max": str(cfg.time_to_target.max),
        "time_to_center_min": str(cfg.time_to_center.min),
        "time_to_center_max": str(cfg.time_to_center.max),
        "number_display_sec": str(cfg.number_display_sec),
        "rep_mode": "fixed" if fixed else "infinite",
        "target_reps": str(cfg.rep_policy.target if fixed else cfg.fixed_target_reps),
        "min_shuttle_number": str(cfg.shuttle_numbers.min),
        "max_shuttle_number": str(cfg.shuttle_numbers.max),
    }
    for name in ALL_SHOTS:
        values[name] = str(cfg.shot_weights.get(name, 0))
    return values


def parse_form(
    cfg: DrillConfig,
    values: Mapping[str, str],
    policy: WeightPolicy = WeightPolicy.STRICT,
) -> DrillConfig:
    """
    Apply settings-dialog fields on top of `cfg`.
    Only the fields of the current drill kind are read.
    """
    try:
        t_min = float(values["time_to_target_min"])
        t_max = float(values["time_to_target_max"])
        c_min = float(values["time_to_center_min"])
        c_max = float(values["time_to_center_max"])
        display = float(values["number_display_sec"])
        fixed = values.get("rep_mode", "infinite") == "fixed"
        target_reps = int(values["target_reps"]) if fixed else cfg.fixed_target_reps

        shuttle = cfg.shuttle_numbers
        weights = dict(cfg.shot_weights)
        if cfg.drill_kind is DrillKind.FOOTWORK:
            shuttle = IntRange(
                int(values["min_shuttle_number"]), int(values["max_shuttle_number"])
            )
        else:
            weights = {name: int(values[name]) for name in ALL_SHOTS}
    except (KeyError, ValueError):
        raise SettingsFormError("Please enter valid numbers in all fields")
    if not all(math.isfinite(v) for v in (t_min, t_max, c_min, c_max, display)):
        raise SettingsFormError("Please enter valid numbers in all fields")

    if cfg.drill_kind is DrillKind.FOOTWORK:
        if shuttle.min >= shuttle.max:
            raise SettingsFormError("Min number must be less than max number")
    else:
        check_shot_percentages(weights, policy)

    if display <= 0:
        raise SettingsFormError("Display time must be positive")
    if t_min > t_max or c_min > c_max:
        raise SettingsFormError("Min times must be less than or equal to max times")
    if fixed and target_reps <= 0:
        raise SettingsFormError("Target reps must be positive")

    new_cfg = replace(
        cfg,
        time_to_target=SecondsRange(t_min, t_max),
        time_to_center=SecondsRange(c_min, c_max),
        number_display_sec=display,
        rep_policy=FixedReps(target_reps) if fixed else InfiniteReps(),
        fixed_target_reps=target_reps,
        shuttle_numbers=shuttle,
        shot_weights=weights,
    )
    # whatever passes the form must also be startable
    validate_config(new_cfg)
    return new_cfg


class SettingsService:
    """
    Settings store: one JSON blob in app_state.
    load() never fails; unreadable blobs fall back to the default config.
    """

    def __init__(self, db: Database, policy: WeightPolicy = WeightPolicy.STRICT):
        self.db = db
        self.state = AppStateRepo(db)
        self.policy = policy

    def load(self) -> DrillConfig:
        raw = self.state.get(SETTINGS_KEY)
        if not raw:
            return DrillConfig()
        try:
            return config_from_dict(json.loads(raw))
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"Stored settings unreadable, using defaults: {e}")
            return DrillConfig()

    def save(self, cfg: DrillConfig) -> None:
        self.state.set(SETTINGS_KEY, json.dumps(config_to_dict(cfg)))
        logger.debug("Settings saved", drill_kind=cfg.drill_kind.value)

    def update_from_form(self, values: Mapping[str, str]) -> DrillConfig:
        cfg = parse_form(self.load(), values, self.policy)
        self.save(cfg)
        return cfg

    def set_drill_kind(self, kind: DrillKind) -> DrillConfig:
        cfg = replace(self.load(), drill_kind=kind)
        self.save(cfg)
        return cfg

    def set_sound_enabled(self, enabled: bool) -> DrillConfig:
        cfg = replace(self.load(), sound_enabled=bool(enabled))
        self.save(cfg)
        return cfg
