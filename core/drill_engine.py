# -*- coding: utf-8 -*-

import random
from dataclasses import replace
from typing import Callable, Optional

from loguru import logger

from core.random_selector import RandomSource, pick_int, pick_uniform_float
from core.scheduler import Scheduler
from core.shots import SHOT_TARGET_RANGE, arrow_for, choose_shot, compose_phrase, shot_label
from core.validation import validate_config
from domain.models import (
    NO_TIMER,
    CountdownCue,
    DrillCompleted,
    DrillConfig,
    DrillEvent,
    DrillKind,
    EngineSnapshot,
    FixedReps,
    Phase,
    ProgressTick,
    RepCompleted,
    RunState,
    ScheduledTimer,
    SecondsRange,
    Stopped,
    TargetRevealed,
)

# (word, hold in ms)
COUNTDOWN_CUES = (("Ready", 1500), ("Set", 1500), ("Go", 2000))
TICK_MS = 50


def _to_ms(seconds: float) -> int:
    return max(1, int(round(seconds * 1000)))


class DrillEngine:
    """
    Drill phase state machine (no Tkinter).

    Advances only from its own scheduled callbacks; at most one callback
    is pending at any time, tracked in RunState.pending.
    Events go to `emit`, spoken cues to `speech` when sound is enabled.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        emit: Optional[Callable[[DrillEvent], None]] = None,
        speech=None,
        rng: Optional[RandomSource] = None,
        config: Optional[DrillConfig] = None,
    ):
        self.scheduler = scheduler
        self.speech = speech
        self.rng = rng if rng is not None else random.Random()
        self._emit_fn = emit

        # last accepted config; a run works on its own snapshot
        self.config = config or DrillConfig()
        self._run_cfg: Optional[DrillConfig] = None
        self.state = RunState()

    # ----- Queries -----
    @property
    def is_running(self) -> bool:
        return self.state.phase is not Phase.IDLE

    @property
    def run_config(self) -> DrillConfig:
        """Config of the active run, or the last accepted one when idle."""
        return self._run_cfg or self.config

    def snapshot(self) -> EngineSnapshot:
        st = self.state
        timed = st.phase in (Phase.REACTION_WINDOW, Phase.RECOVERY_WINDOW)
        remaining_ms = st.remaining_ms if timed else 0
        progress = remaining_ms / st.active_duration_ms if timed else 0.0
        return EngineSnapshot(
            phase=st.phase,
            rep_index=st.rep_index,
            target_number=st.target_number,
            chosen_shot=st.chosen_shot,
            chosen_direction=st.chosen_direction,
            remaining_sec=remaining_ms / 1000.0,
            progress=progress,
            is_running=self.is_running,
            is_idle=not self.is_running,
        )

    # ----- Public API -----
    def start(self, config: Optional[DrillConfig] = None) -> None:
        """
        Begin a run with `config` (or the last accepted one).
        Raises DrillConfigError and stays idle when the config is invalid.
        """
        if self.is_running:
            self.stop()

        cfg = (config or self.config).snapshot()
        validate_config(cfg)

        self.config = cfg
        self._run_cfg = cfg
        self.state = RunState(phase=Phase.COUNTDOWN)
        logger.debug("Drill run started", drill_kind=cfg.drill_kind.value)
        self._countdown_step()

    def stop(self) -> None:
        if not self.is_running:
            return
        self._cancel_pending()
        reps = self.state.rep_index
        self._say("Training stopped")
        self._reset_to_idle()
        logger.debug("Drill run stopped", reps=reps)
        self._emit(Stopped(reps=reps))

    def reconfigure(self, config: DrillConfig) -> None:
        """A different drill kind stops the active run; other changes apply next run."""
        if self.is_running and config.drill_kind is not self._run_cfg.drill_kind:
            self.stop()
        self.config = config

    def set_sound_enabled(self, enabled: bool) -> None:
        self.config = replace(self.config, sound_enabled=bool(enabled))
        if self._run_cfg is not None:
            self._run_cfg = replace(self._run_cfg, sound_enabled=bool(enabled))

    # ----- Phases -----
    def _countdown_step(self) -> None:
        run = self.state
        if run.cue_index >= len(COUNTDOWN_CUES):
            self._enter_target_reveal()
            return

        word, hold_ms = COUNTDOWN_CUES[run.cue_index]
        run.cue_index += 1
        self._say(word)
        self._emit(CountdownCue(word=word))
        if self.state is not run:
            return
        self._schedule(hold_ms, "countdown", self._countdown_step)

    def _enter_target_reveal(self) -> None:
        cfg = self._run_cfg
        run = self.state
        run.phase = Phase.TARGET_REVEAL
        run.clear_timing()

        if cfg.drill_kind is DrillKind.FOOTWORK_WITH_SHOTS:
            run.target_number = pick_int(self.rng, *SHOT_TARGET_RANGE)
            run.chosen_shot, run.chosen_direction = choose_shot(
                self.rng, run.target_number, cfg.shot_weights
            )
        else:
            nums = cfg.shuttle_numbers
            run.target_number = pick_int(self.rng, nums.min, nums.max)
            run.chosen_shot = None
            run.chosen_direction = None

        event = TargetRevealed(
            number=run.target_number,
            shot=run.chosen_shot,
            direction=run.chosen_direction,
            shot_label=shot_label(run.chosen_shot) if run.chosen_shot else None,
            arrow=arrow_for(run.chosen_direction) or None,
            phrase=compose_phrase(
                run.target_number, run.chosen_shot, run.chosen_direction
            ),
        )
        self._say(event.phrase)
        self._emit(event)
        if self.state is not run:
            return
        self._schedule(
            _to_ms(cfg.number_display_sec), "target_reveal", self._enter_reaction
        )

    def _enter_reaction(self) -> None:
        self._enter_window(
            Phase.REACTION_WINDOW, self._run_cfg.time_to_target, self._reaction_done
        )

    def _reaction_done(self) -> None:
        self._say("Hit")
        self._enter_window(
            Phase.RECOVERY_WINDOW, self._run_cfg.time_to_center, self._complete_rep
        )

    def _enter_window(
        self, phase: Phase, window: SecondsRange, on_done: Callable[[], None]
    ) -> None:
        run = self.state
        run.phase = phase
        run.active_duration_sec = pick_uniform_float(self.rng, window.min, window.max)
        run.elapsed_ms = 0

        def tick() -> None:
            step = min(TICK_MS, run.remaining_ms)
            run.elapsed_ms += step
            remaining_ms = run.remaining_ms
            self._emit(
                ProgressTick(
                    phase=phase,
                    remaining_sec=remaining_ms / 1000.0,
                    progress=remaining_ms / run.active_duration_ms,
                )
            )
            if self.state is not run:
                return
            if remaining_ms <= 0:
                on_done()
            else:
                self._schedule(min(TICK_MS, remaining_ms), phase.value, tick)

        self._schedule(min(TICK_MS, run.active_duration_ms), phase.value, tick)

    def _complete_rep(self) -> None:
        cfg = self._run_cfg
        run = self.state
        run.phase = Phase.COMPLETE
        run.clear_timing()
        run.rep_index += 1
        self._emit(RepCompleted(rep_index=run.rep_index))
        if self.state is not run:
            return

        policy = cfg.rep_policy
        if isinstance(policy, FixedReps) and run.rep_index >= policy.target:
            total = run.rep_index
            self._say("Training complete")
            self._reset_to_idle()
            logger.debug("Drill run completed", reps=total)
            self._emit(DrillCompleted(total_reps=total))
            return

        self._enter_target_reveal()

    # ----- Timer internals -----
    def _schedule(self, delay_ms: int, purpose: str, fn: Callable[[], None]) -> None:
        self._cancel_pending()
        run = self.state

        def fire() -> None:
            pending = run.pending
            # ignore anything that is no longer the live timer of the live run
            if self.state is not run:
                return
            if not isinstance(pending, ScheduledTimer) or pending.handle != handle:
                return
            run.pending = NO_TIMER
            fn()

        handle = self.scheduler.schedule_once(delay_ms, fire)
        run.pending = ScheduledTimer(handle=handle, purpose=purpose)

    def _cancel_pending(self) -> None:
        pending = self.state.pending
        if isinstance(pending, ScheduledTimer):
            self.scheduler.cancel(pending.handle)
        self.state.pending = NO_TIMER

    def _reset_to_idle(self) -> None:
        self.state = RunState()
        self._run_cfg = None

    # ----- Outputs -----
    def _emit(self, event: DrillEvent) -> None:
        if self._emit_fn:
            self._emit_fn(event)

    def _say(self, text: str) -> None:
        cfg = self.run_config
        if self.speech is not None and cfg.sound_enabled and text:
            self.speech.speak(text)
