# -*- coding: utf-8 -*-

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Union


class DrillKind(str, Enum):
    FOOTWORK = "footwork"
    FOOTWORK_WITH_SHOTS = "footwork_with_shots"

    @property
    def display_name(self) -> str:
        if self is DrillKind.FOOTWORK_WITH_SHOTS:
            return "Drill #2 - Random Footwork with Shots"
        return "Drill #1 - Random Footwork"


class Phase(str, Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    TARGET_REVEAL = "target_reveal"
    REACTION_WINDOW = "reaction_window"
    RECOVERY_WINDOW = "recovery_window"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SecondsRange:
    min: float
    max: float


@dataclass(frozen=True)
class IntRange:
    min: int
    max: int


# ----- Rep policy -----
@dataclass(frozen=True)
class InfiniteReps:
    pass


@dataclass(frozen=True)
class FixedReps:
    target: int


RepPolicy = Union[InfiniteReps, FixedReps]


@dataclass(frozen=True)
class DrillConfig:
    drill_kind: DrillKind = DrillKind.FOOTWORK
    time_to_target: SecondsRange = SecondsRange(1.0, 3.0)
    time_to_center: SecondsRange = SecondsRange(1.0, 2.0)
    rep_policy: RepPolicy = InfiniteReps()
    sound_enabled: bool = True
    shuttle_numbers: IntRange = IntRange(1, 4)
    number_display_sec: float = 0.5
    shot_weights: Dict[str, int] = field(
        default_factory=lambda: {
            "net": 50,
            "lift": 50,
            "drop": 40,
            "clear": 40,
            "smash": 20,
        }
    )
    # kept so the settings form can restore the last fixed target
    # while the policy is infinite
    fixed_target_reps: int = 10

    def snapshot(self) -> "DrillConfig":
        # detach the weights dict so a running drill never sees later edits
        return replace(self, shot_weights=dict(self.shot_weights))


# ----- Pending timer (tagged union) -----
@dataclass(frozen=True)
class NoTimer:
    pass


@dataclass(frozen=True)
class ScheduledTimer:
    handle: Any
    purpose: str


PendingTimer = Union[NoTimer, ScheduledTimer]

NO_TIMER = NoTimer()


@dataclass
class RunState:
    phase: Phase = Phase.IDLE
    rep_index: int = 0
    target_number: Optional[int] = None
    chosen_shot: Optional[str] = None
    chosen_direction: Optional[str] = None
    active_duration_sec: Optional[float] = None
    elapsed_ms: int = 0
    cue_index: int = 0
    pending: PendingTimer = NO_TIMER

    @property
    def active_duration_ms(self) -> int:
        if self.active_duration_sec is None:
            return 0
        return max(1, int(round(self.active_duration_sec * 1000)))

    @property
    def remaining_ms(self) -> int:
        return max(0, self.active_duration_ms - self.elapsed_ms)

    def clear_timing(self) -> None:
        self.active_duration_sec = None
        self.elapsed_ms = 0


# ----- Events -----
@dataclass(frozen=True)
class CountdownCue:
    word: str  # Ready | Set | Go


@dataclass(frozen=True)
class TargetRevealed:
    number: int
    shot: Optional[str] = None
    direction: Optional[str] = None
    shot_label: Optional[str] = None
    arrow: Optional[str] = None
    phrase: str = ""


@dataclass(frozen=True)
class ProgressTick:
    phase: Phase  # REACTION_WINDOW | RECOVERY_WINDOW
    remaining_sec: float
    progress: float


@dataclass(frozen=True)
class RepCompleted:
    rep_index: int


@dataclass(frozen=True)
class DrillCompleted:
    total_reps: int


@dataclass(frozen=True)
class Stopped:
    reps: int


DrillEvent = Union[
    CountdownCue, TargetRevealed, ProgressTick, RepCompleted, DrillCompleted, Stopped
]


@dataclass(frozen=True)
class EngineSnapshot:
    phase: Phase
    rep_index: int
    target_number: Optional[int]
    chosen_shot: Optional[str]
    chosen_direction: Optional[str]
    remaining_sec: float
    progress: float
    is_running: bool
    is_idle: bool


@dataclass(frozen=True)
class SessionLog:
    id: str
    drill_kind: str
    start_ts: int
    end_ts: Optional[int]
    reps: int
    outcome: Optional[str]  # completed | stopped
