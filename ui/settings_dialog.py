# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, Dict

from core.shots import ALL_SHOTS, SHOT_LABELS
from domain.models import DrillConfig, DrillKind
from services.settings_service import SettingsService, form_values


class SettingsDialog(tk.Toplevel):
    """Training settings. Save keeps the dialog open until the values validate."""

    def __init__(
        self,
        master,
        settings: SettingsService,
        on_saved: Callable[[DrillConfig], None],
    ):
        super().__init__(master)
        self.title("Training Settings")
        self.transient(master)
        self.resizable(False, False)

        self.settings = settings
        self.on_saved = on_saved
        self.cfg = settings.load()

        self._vars: Dict[str, tk.StringVar] = {
            k: tk.StringVar(value=v) for k, v in form_values(self.cfg).items()
        }
        self._build_ui()
        self._sync_rep_mode()
        self.grab_set()

    def _row(self, parent, row: int, label: str, key: str):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", pady=2)
        ttk.Entry(parent, textvariable=self._vars[key], width=8).grid(
            row=row, column=1, sticky="e", pady=2
        )

    def _build_ui(self):
        outer = ttk.Frame(self, padding=12)
        outer.pack(fill="both", expand=True)

        ttk.Label(outer, text=self.cfg.drill_kind.display_name, font=("Sans", 11, "bold")).grid(
            row=0, column=0, columnspan=2, sticky="w", pady=(0, 8)
        )

        common = ttk.Labelframe(outer, text="Timing", padding=8)
        common.grid(row=1, column=0, columnspan=2, sticky="ew")
        self._row(common, 0, "Time to shuttle min (s)", "time_to_target_min")
        self._row(common, 1, "Time to shuttle max (s)", "time_to_target_max")
        self._row(common, 2, "Time to center min (s)", "time_to_center_min")
        self._row(common, 3, "Time to center max (s)", "time_to_center_max")
        self._row(common, 4, "Number display time (s)", "number_display_sec")

        reps = ttk.Labelframe(outer, text="Repetitions", padding=8)
        reps.grid(row=2, column=0, columnspan=2, sticky="ew", pady=(8, 0))
        ttk.Radiobutton(
            reps, text="Infinite", value="infinite",
            variable=self._vars["rep_mode"], command=self._sync_rep_mode,
        ).grid(row=0, column=0, sticky="w")
        ttk.Radiobutton(
            reps, text="Fixed", value="fixed",
            variable=self._vars["rep_mode"], command=self._sync_rep_mode,
        ).grid(row=1, column=0, sticky="w")
        self.target_entry = ttk.Entry(reps, textvariable=self._vars["target_reps"], width=8)
        self.target_entry.grid(row=1, column=1, sticky="e")

        specific = ttk.Labelframe(outer, padding=8)
        specific.grid(row=3, column=0, columnspan=2, sticky="ew", pady=(8, 0))
        if self.cfg.drill_kind is DrillKind.FOOTWORK:
            specific.configure(text="Shuttle numbers")
            self._row(specific, 0, "Min number", "min_shuttle_number")
            self._row(specific, 1, "Max number", "max_shuttle_number")
        else:
            specific.configure(text="Shot probabilities (%)")
            for i, name in enumerate(ALL_SHOTS):
                self._row(specific, i, SHOT_LABELS[name], name)

        btns = ttk.Frame(outer)
        btns.grid(row=4, column=0, columnspan=2, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Cancel", command=self.destroy).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Save", command=self._save).grid(row=0, column=1)

    def _sync_rep_mode(self):
        fixed = self._vars["rep_mode"].get() == "fixed"
        self.target_entry.state(["!disabled"] if fixed else ["disabled"])

    def _save(self):
        values = {k: v.get().strip() for k, v in self._vars.items()}
        try:
            cfg = self.settings.update_from_form(values)
        except ValueError as e:
            messagebox.showerror("Invalid settings", str(e), parent=self)
            return
        self.on_saved(cfg)
        self.destroy()


class DrillSelectDialog(tk.Toplevel):
    def __init__(
        self,
        master,
        current: DrillKind,
        on_select: Callable[[DrillKind], None],
    ):
        super().__init__(master)
        self.title("Select Drill")
        self.transient(master)
        self.resizable(False, False)
        self.on_select = on_select

        self.kind_var = tk.StringVar(value=current.value)

        outer = ttk.Frame(self, padding=12)
        outer.pack(fill="both", expand=True)
        for i, kind in enumerate(DrillKind):
            ttk.Radiobutton(
                outer, text=kind.display_name, value=kind.value, variable=self.kind_var
            ).grid(row=i, column=0, sticky="w", pady=2)

        btns = ttk.Frame(outer)
        btns.grid(row=len(DrillKind), column=0, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Cancel", command=self.destroy).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Select", command=self._select).grid(row=0, column=1)
        self.grab_set()

    def _select(self):
        kind = DrillKind(self.kind_var.get())
        self.destroy()
        self.on_select(kind)
