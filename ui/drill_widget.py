# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable

from domain.errors import DrillConfigError
from domain.models import FixedReps, Phase, ProgressTick, TargetRevealed
from services.drill_service import DrillService

BAR_MAX = 1000


def format_seconds(seconds: float) -> str:
    return f"{max(0.0, seconds):.1f}s"


class DrillWidget(ttk.Frame):
    """
    Drill screen: countdown word, shuttle number, shot + arrow,
    the two progress bars and the rep counter.
    """

    def __init__(
        self,
        master,
        drill_service: DrillService,
        on_request_refresh: Callable[[], None],
    ):
        super().__init__(master)

        self.drill_service = drill_service
        self.on_request_refresh = on_request_refresh

        self._build_ui()

        # wire callbacks from service -> widget UI
        self.drill_service.set_on_countdown_cue(self._on_countdown_cue)
        self.drill_service.set_on_target_revealed(self._on_target_revealed)
        self.drill_service.set_on_progress_tick(self._on_progress_tick)
        self.drill_service.set_on_rep_completed(self._on_rep_completed)
        self.drill_service.set_on_drill_completed(self._on_drill_completed)
        self.drill_service.set_on_stopped(self._on_stopped)

        self._render_idle()

    def _build_ui(self):
        self.columnconfigure(0, weight=1)

        self.status_var = tk.StringVar(value="Press Start")
        self.number_var = tk.StringVar(value="")
        self.shot_var = tk.StringVar(value="")
        self.arrow_var = tk.StringVar(value="")
        self.target_time_var = tk.StringVar(value="")
        self.center_time_var = tk.StringVar(value="")
        self.reps_var = tk.StringVar(value="Reps: 0")

        ttk.Label(self, textvariable=self.status_var, font=("Sans", 20, "bold")).grid(
            row=0, column=0, pady=(0, 6)
        )
        ttk.Label(self, textvariable=self.number_var, font=("Sans", 96, "bold")).grid(
            row=1, column=0
        )
        ttk.Label(self, textvariable=self.shot_var, font=("Sans", 24)).grid(
            row=2, column=0
        )
        ttk.Label(self, textvariable=self.arrow_var, font=("Sans", 48, "bold")).grid(
            row=3, column=0
        )

        bars = ttk.Frame(self)
        bars.grid(row=4, column=0, sticky="ew", pady=(10, 6))
        bars.columnconfigure(0, weight=1)

        ttk.Label(bars, text="Time to shuttle").grid(row=0, column=0, sticky="w")
        self.target_bar = ttk.Progressbar(bars, maximum=BAR_MAX)
        self.target_bar.grid(row=1, column=0, sticky="ew")
        ttk.Label(bars, textvariable=self.target_time_var).grid(row=1, column=1, padx=(6, 0))

        ttk.Label(bars, text="Time to center").grid(row=2, column=0, sticky="w", pady=(6, 0))
        self.center_bar = ttk.Progressbar(bars, maximum=BAR_MAX)
        self.center_bar.grid(row=3, column=0, sticky="ew")
        ttk.Label(bars, textvariable=self.center_time_var).grid(row=3, column=1, padx=(6, 0))

        ttk.Label(self, textvariable=self.reps_var, font=("Sans", 14)).grid(
            row=5, column=0, pady=(6, 6)
        )

        btns = ttk.Frame(self)
        btns.grid(row=6, column=0)
        self.start_btn = ttk.Button(btns, text="Start", command=self._toggle)
        self.start_btn.grid(row=0, column=0)

    # ---- Actions ----
    def _toggle(self):
        try:
            self.drill_service.toggle()
        except DrillConfigError as e:
            messagebox.showerror("Cannot start", str(e), parent=self)
        self._update_buttons()
        self.on_request_refresh()

    def _update_buttons(self):
        self.start_btn.configure(text="Stop" if self.drill_service.is_running else "Start")

    def _reps_text(self, reps: int) -> str:
        policy = self.drill_service.run_config.rep_policy
        if isinstance(policy, FixedReps):
            return f"Reps: {reps} / {policy.target}"
        return f"Reps: {reps}"

    # ---- Service callbacks ----
    def _on_countdown_cue(self, word: str):
        self._clear_target()
        self.status_var.set(word)
        self._update_buttons()

    def _on_target_revealed(self, event: TargetRevealed):
        self.status_var.set("")
        self.number_var.set(str(event.number))
        self.shot_var.set(event.shot_label or "")
        self.arrow_var.set(event.arrow or "")
        self.target_bar["value"] = BAR_MAX
        self.center_bar["value"] = BAR_MAX
        self.target_time_var.set("")
        self.center_time_var.set("")

    def _on_progress_tick(self, tick: ProgressTick):
        value = int(tick.progress * BAR_MAX)
        if tick.phase is Phase.REACTION_WINDOW:
            self.status_var.set("Go to shuttle")
            self.target_bar["value"] = value
            self.target_time_var.set(format_seconds(tick.remaining_sec))
        else:
            self.status_var.set("Back to center")
            self.center_bar["value"] = value
            self.center_time_var.set(format_seconds(tick.remaining_sec))

    def _on_rep_completed(self, rep_index: int):
        self.reps_var.set(self._reps_text(rep_index))

    def _on_drill_completed(self, total_reps: int):
        self._render_idle()
        self.status_var.set("Done!")
        self.reps_var.set(f"Reps: {total_reps} / {total_reps}")
        self.on_request_refresh()
        messagebox.showinfo(
            "Training complete",
            f"Training complete! Completed {total_reps} reps.",
            parent=self,
        )

    def _on_stopped(self):
        self._render_idle()
        self.on_request_refresh()

    # ---- Render helpers ----
    def _clear_target(self):
        self.number_var.set("")
        self.shot_var.set("")
        self.arrow_var.set("")

    def _render_idle(self):
        self._clear_target()
        self.status_var.set("Press Start")
        self.target_bar["value"] = 0
        self.center_bar["value"] = 0
        self.target_time_var.set("")
        self.center_time_var.set("")
        self.reps_var.set(self._reps_text(0))
        self._update_buttons()
