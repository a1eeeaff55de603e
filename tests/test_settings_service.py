from __future__ import annotations

from dataclasses import replace

import pytest

from domain.errors import DegenerateDistribution, SettingsFormError
from domain.models import (
    DrillConfig,
    DrillKind,
    FixedReps,
    InfiniteReps,
    IntRange,
    SecondsRange,
)
from services.settings_service import (
    SETTINGS_KEY,
    SettingsService,
    WeightPolicy,
    check_shot_percentages,
    config_from_dict,
    config_to_dict,
    form_values,
    parse_form,
)
from storage.repos import AppStateRepo


def test_load_without_stored_blob_gives_defaults(db):
    cfg = SettingsService(db).load()
    assert cfg == DrillConfig()
    assert cfg.rep_policy == InfiniteReps()
    assert cfg.shot_weights == {"net": 50, "lift": 50, "drop": 40, "clear": 40, "smash": 20}


def test_save_then_load(db):
    svc = SettingsService(db)
    cfg = DrillConfig(
        drill_kind=DrillKind.FOOTWORK_WITH_SHOTS,
        time_to_target=SecondsRange(0.8, 2.5),
        rep_policy=FixedReps(12),
        sound_enabled=False,
        shuttle_numbers=IntRange(2, 6),
        number_display_sec=1.25,
        shot_weights={"net": 70, "lift": 30, "drop": 10, "clear": 30, "smash": 60},
        fixed_target_reps=12,
    )
    svc.save(cfg)
    assert svc.load() == cfg


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '{"drill_kind": "drill9"}', '{"time_to_target": 3}'])
def test_corrupt_blob_falls_back_to_defaults(db, raw):
    AppStateRepo(db).set(SETTINGS_KEY, raw)
    assert SettingsService(db).load() == DrillConfig()


def test_partial_blob_keeps_defaults_for_missing_keys():
    cfg = config_from_dict({"rep_mode": "fixed", "target_reps": 5, "shot_weights": {"net": 10, "bogus": 3}})
    assert cfg.rep_policy == FixedReps(5)
    assert cfg.shot_weights["net"] == 10
    assert "bogus" not in cfg.shot_weights
    assert cfg.time_to_center == DrillConfig().time_to_center


def test_blob_keeps_fixed_target_while_infinite():
    cfg = DrillConfig(rep_policy=InfiniteReps(), fixed_target_reps=25)
    data = config_to_dict(cfg)
    assert data["rep_mode"] == "infinite"
    assert data["target_reps"] == 25
    assert config_from_dict(data).fixed_target_reps == 25


def test_set_drill_kind_and_sound_persist(db):
    svc = SettingsService(db)
    svc.set_drill_kind(DrillKind.FOOTWORK_WITH_SHOTS)
    svc.set_sound_enabled(False)
    cfg = svc.load()
    assert cfg.drill_kind is DrillKind.FOOTWORK_WITH_SHOTS
    assert cfg.sound_enabled is False


# ----- form -----
def _form(cfg=None, **changes):
    values = form_values(cfg or DrillConfig())
    values.update({k: str(v) for k, v in changes.items()})
    return values


def test_form_round_trip_is_identity():
    cfg = DrillConfig()
    assert parse_form(cfg, form_values(cfg)) == cfg


def test_form_switches_to_fixed_reps():
    cfg = parse_form(DrillConfig(), _form(rep_mode="fixed", target_reps=15))
    assert cfg.rep_policy == FixedReps(15)


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"time_to_target_min": "abc"}, "valid numbers"),
        ({"min_shuttle_number": "4", "max_shuttle_number": "4"}, "less than max"),
        ({"number_display_sec": "0"}, "Display time"),
        ({"time_to_center_min": "3", "time_to_center_max": "2"}, "Min times"),
        ({"rep_mode": "fixed", "target_reps": "0"}, "Target reps"),
    ],
)
def test_form_errors_for_footwork(changes, message):
    with pytest.raises(SettingsFormError, match=message):
        parse_form(DrillConfig(), _form(**changes))


def test_form_ignores_target_reps_when_infinite():
    cfg = parse_form(DrillConfig(), _form(target_reps="oops"))
    assert cfg.rep_policy == InfiniteReps()


SHOTS = DrillConfig(drill_kind=DrillKind.FOOTWORK_WITH_SHOTS)


def test_strict_policy_requires_100_per_group():
    with pytest.raises(SettingsFormError, match="Front court shots: 90%"):
        parse_form(SHOTS, _form(SHOTS, net=40, lift=50))
    with pytest.raises(SettingsFormError, match="Rear court shots: 110%"):
        parse_form(SHOTS, _form(SHOTS, smash=30))
    with pytest.raises(SettingsFormError, match="≤ 100%"):
        parse_form(SHOTS, _form(SHOTS, net=150, lift=0))


def test_strict_policy_rejects_negative_first():
    with pytest.raises(SettingsFormError, match="non-negative"):
        check_shot_percentages({"net": -10, "lift": 110, "drop": 40, "clear": 40, "smash": 20})


def test_lenient_policy_accepts_any_positive_sum():
    cfg = parse_form(SHOTS, _form(SHOTS, net=3, lift=1, drop=0, clear=0, smash=9), WeightPolicy.LENIENT)
    assert cfg.shot_weights == {"net": 3, "lift": 1, "drop": 0, "clear": 0, "smash": 9}


def test_lenient_policy_still_rejects_empty_group():
    with pytest.raises(SettingsFormError, match="Front court"):
        parse_form(SHOTS, _form(SHOTS, net=0, lift=0), WeightPolicy.LENIENT)


def test_shots_form_does_not_touch_shuttle_range():
    cfg = parse_form(SHOTS, _form(SHOTS, min_shuttle_number=9, max_shuttle_number=1))
    assert cfg.shuttle_numbers == SHOTS.shuttle_numbers


def test_form_result_must_be_startable():
    # passes the form rules, fails the engine rule of positive durations
    with pytest.raises(ValueError):
        parse_form(DrillConfig(), _form(time_to_target_min=0, time_to_target_max=0))


def test_update_from_form_saves(db):
    svc = SettingsService(db)
    svc.save(replace(DrillConfig(), drill_kind=DrillKind.FOOTWORK))
    svc.update_from_form(_form(number_display_sec=1.5, max_shuttle_number=6))
    cfg = svc.load()
    assert cfg.number_display_sec == 1.5
    assert cfg.shuttle_numbers == IntRange(1, 6)


def test_lenient_store_degenerate_weights_never_saved(db):
    svc = SettingsService(db, policy=WeightPolicy.LENIENT)
    svc.save(SHOTS)
    with pytest.raises(SettingsFormError):
        svc.update_from_form(_form(SHOTS, drop=0, clear=0, smash=0))
    assert svc.load() == SHOTS
    assert issubclass(DegenerateDistribution, ValueError)


@pytest.mark.parametrize(
    "changes",
    [
        {"time_to_center_min": "nan", "time_to_center_max": "nan"},
        {"time_to_target_max": "inf"},
        {"number_display_sec": "inf"},
        {"number_display_sec": "nan"},
    ],
)
def test_form_rejects_non_finite_numbers(changes):
    with pytest.raises(SettingsFormError, match="valid numbers"):
        parse_form(DrillConfig(), _form(**changes))


@pytest.mark.parametrize(
    "raw",
    [
        '{"time_to_target": [NaN, NaN]}',
        '{"time_to_center": [1.0, Infinity]}',
        '{"number_display_sec": NaN}',
    ],
)
def test_stored_non_finite_durations_fall_back_to_defaults(db, raw):
    AppStateRepo(db).set(SETTINGS_KEY, raw)
    assert SettingsService(db).load() == DrillConfig()


@pytest.mark.parametrize("value", ['"false"', "0", "null"])
def test_stored_sound_flag_must_be_a_bool(db, value):
    AppStateRepo(db).set(SETTINGS_KEY, '{"sound_enabled": %s}' % value)
    assert SettingsService(db).load() == DrillConfig()
