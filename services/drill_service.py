# -*- coding: utf-8 -*-

from typing import Callable, Optional

from loguru import logger

from core.drill_engine import DrillEngine
from core.random_selector import RandomSource
from core.scheduler import Scheduler
from domain.models import (
    CountdownCue,
    DrillCompleted,
    DrillConfig,
    DrillEvent,
    DrillKind,
    ProgressTick,
    RepCompleted,
    Stopped,
    TargetRevealed,
)
from services.settings_service import SettingsService
from storage.repos import SessionRepo


class DrillService:
    """
    Orchestrates:
    - DrillEngine runs
    - settings load/save around start, drill selection and the sound switch
    - SQLite session logging (one row per run)
    - Callbacks for UI
    """

    def __init__(
        self,
        scheduler: Scheduler,
        settings: SettingsService,
        session_repo: SessionRepo,
        speech=None,
        rng: Optional[RandomSource] = None,
    ):
        self.settings = settings
        self.session_repo = session_repo
        self.speech = speech

        self.engine = DrillEngine(
            scheduler,
            emit=self._dispatch,
            speech=speech,
            rng=rng,
            config=settings.load(),
        )

        self._active_session_id: Optional[str] = None

        self._on_countdown_cue: Optional[Callable[[str], None]] = None
        self._on_target_revealed: Optional[Callable[[TargetRevealed], None]] = None
        self._on_progress_tick: Optional[Callable[[ProgressTick], None]] = None
        self._on_rep_completed: Optional[Callable[[int], None]] = None
        self._on_drill_completed: Optional[Callable[[int], None]] = None
        self._on_stopped: Optional[Callable[[], None]] = None

    # ----- Callbacks -----
    def set_on_countdown_cue(self, fn: Callable[[str], None]) -> None:
        self._on_countdown_cue = fn

    def set_on_target_revealed(self, fn: Callable[[TargetRevealed], None]) -> None:
        self._on_target_revealed = fn

    def set_on_progress_tick(self, fn: Callable[[ProgressTick], None]) -> None:
        self._on_progress_tick = fn

    def set_on_rep_completed(self, fn: Callable[[int], None]) -> None:
        self._on_rep_completed = fn

    def set_on_drill_completed(self, fn: Callable[[int], None]) -> None:
        self._on_drill_completed = fn

    def set_on_stopped(self, fn: Callable[[], None]) -> None:
        self._on_stopped = fn

    def _dispatch(self, event: DrillEvent) -> None:
        if isinstance(event, ProgressTick):
            if self._on_progress_tick:
                self._on_progress_tick(event)
        elif isinstance(event, CountdownCue):
            if self._on_countdown_cue:
                self._on_countdown_cue(event.word)
        elif isinstance(event, TargetRevealed):
            if self._on_target_revealed:
                self._on_target_revealed(event)
        elif isinstance(event, RepCompleted):
            if self._on_rep_completed:
                self._on_rep_completed(event.rep_index)
        elif isinstance(event, DrillCompleted):
            self._end_session(event.total_reps, "completed")
            logger.info("Drill complete", reps=event.total_reps)
            if self._on_drill_completed:
                self._on_drill_completed(event.total_reps)
        elif isinstance(event, Stopped):
            self._end_session(event.reps, "stopped")
            logger.info("Drill stopped", reps=event.reps)
            if self._on_stopped:
                self._on_stopped()

    # ----- Public API -----
    @property
    def config(self) -> DrillConfig:
        return self.engine.config

    @property
    def is_running(self) -> bool:
        return self.engine.is_running

    @property
    def run_config(self) -> DrillConfig:
        return self.engine.run_config

    def start(self) -> None:
        """Start with the stored settings. Raises DrillConfigError on bad settings."""
        if self.engine.is_running:
            self.engine.stop()
        cfg = self.settings.load()
        self.engine.start(cfg)
        self._start_session(cfg.drill_kind)
        logger.info("Drill started", drill_kind=cfg.drill_kind.value)

    def stop(self) -> None:
        self.engine.stop()

    def toggle(self) -> None:
        if self.engine.is_running:
            self.stop()
        else:
            self.start()

    def select_drill(self, kind: DrillKind) -> bool:
        """
        Persist a drill choice. Returns True when it interrupted a run
        (the engine stops before a new kind is honored).
        """
        if kind is self.engine.config.drill_kind:
            return False
        was_running = self.engine.is_running
        cfg = self.settings.set_drill_kind(kind)
        self.engine.reconfigure(cfg)
        return was_running and not self.engine.is_running

    def set_sound_enabled(self, enabled: bool) -> None:
        self.settings.set_sound_enabled(enabled)
        self.engine.set_sound_enabled(enabled)
        if enabled and self.speech is not None:
            self.speech.speak("Sound enabled")

    def apply_settings(self, cfg: DrillConfig) -> None:
        # settings edited while a run is active take effect on the next run
        self.engine.reconfigure(cfg)

    def shutdown(self) -> None:
        self.engine.stop()
        if self.speech is not None:
            self.speech.shutdown()

    # ----- Session logging internals -----
    def _start_session(self, kind: DrillKind) -> None:
        log = self.session_repo.start_session(drill_kind=kind.value)
        self._active_session_id = log.id

    def _end_session(self, reps: int, outcome: str) -> None:
        if self._active_session_id:
            try:
                self.session_repo.end_session(
                    self._active_session_id, reps=reps, outcome=outcome
                )
            finally:
                self._active_session_id = None
