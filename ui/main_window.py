# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import messagebox, ttk

from tkinterweb import HtmlFrame

from domain.models import DrillConfig, DrillKind
from services.drill_service import DrillService
from services.stats_service import StatsService
from ui.drill_widget import DrillWidget
from ui.markdown_renderer import MarkdownRenderer
from ui.settings_dialog import DrillSelectDialog, SettingsDialog


class MainWindow:
    def __init__(
        self,
        root: tk.Tk,
        drill_service: DrillService,
        stats_service: StatsService,
    ):
        self.drill_service = drill_service
        self.stats_service = stats_service
        self._md = MarkdownRenderer()

        self.root = root
        self.root.title("Badminton Drills")
        self.root.geometry("900x620")
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        self._build_ui()
        self._refresh_all()

    def _build_ui(self):
        root = self.root

        outer = ttk.Frame(root, padding=10)
        outer.pack(fill="both", expand=True)

        outer.columnconfigure(0, weight=2)
        outer.columnconfigure(1, weight=1)
        outer.rowconfigure(0, weight=1)

        # LEFT: drill screen
        self.drill = DrillWidget(
            outer,
            drill_service=self.drill_service,
            on_request_refresh=self._refresh_stats_only,
        )
        self.drill.grid(row=0, column=0, sticky="nsew", padx=(0, 10))

        # RIGHT: drill choice, guide, stats
        right = ttk.Frame(outer)
        right.grid(row=0, column=1, sticky="nsew")
        right.columnconfigure(0, weight=1)
        right.rowconfigure(1, weight=1)

        top = ttk.Frame(right)
        top.grid(row=0, column=0, sticky="ew")
        top.columnconfigure(0, weight=1)

        self.drill_name_var = tk.StringVar(value="")
        ttk.Label(top, textvariable=self.drill_name_var, font=("Sans", 11, "bold")).grid(
            row=0, column=0, columnspan=3, sticky="w"
        )
        ttk.Button(top, text="Drill...", command=self._select_drill).grid(
            row=1, column=0, sticky="w", pady=(6, 0)
        )
        ttk.Button(top, text="Settings...", command=self._open_settings).grid(
            row=1, column=1, padx=(6, 0), pady=(6, 0)
        )
        self.sound_var = tk.BooleanVar(value=self.drill_service.config.sound_enabled)
        ttk.Checkbutton(
            top, text="Sound", variable=self.sound_var, command=self._toggle_sound
        ).grid(row=1, column=2, padx=(6, 0), pady=(6, 0))

        guide = ttk.Labelframe(right, text="How it works", padding=4)
        guide.grid(row=1, column=0, sticky="nsew", pady=(10, 0))
        guide.columnconfigure(0, weight=1)
        guide.rowconfigure(0, weight=1)
        self.guide_view = HtmlFrame(guide, horizontal_scrollbar="auto")
        self.guide_view.grid(row=0, column=0, sticky="nsew")

        stats = ttk.Labelframe(right, text="Progress", padding=10)
        stats.grid(row=2, column=0, sticky="ew", pady=(10, 0))
        self.stats_var = tk.StringVar(value="")
        ttk.Label(stats, textvariable=self.stats_var).grid(row=0, column=0, sticky="w")

    def run(self):
        self.root.mainloop()

    # ----- UI actions -----
    def _select_drill(self):
        DrillSelectDialog(
            self.root,
            current=self.drill_service.config.drill_kind,
            on_select=self._on_drill_selected,
        )

    def _on_drill_selected(self, kind: DrillKind):
        interrupted = self.drill_service.select_drill(kind)
        if interrupted:
            messagebox.showinfo(
                "Drill changed", "Drill changed. Please restart training.", parent=self.root
            )
        self._refresh_all()

    def _open_settings(self):
        SettingsDialog(
            self.root,
            settings=self.drill_service.settings,
            on_saved=self._on_settings_saved,
        )

    def _on_settings_saved(self, cfg: DrillConfig):
        self.drill_service.apply_settings(cfg)
        self._refresh_all()

    def _toggle_sound(self):
        self.drill_service.set_sound_enabled(self.sound_var.get())

    def _on_close(self):
        self.drill_service.shutdown()
        self.root.destroy()

    # ----- Refresh -----
    def _refresh_all(self):
        cfg = self.drill_service.config
        self.drill_name_var.set(cfg.drill_kind.display_name)
        self.guide_view.load_html(self._md.guide_html(cfg))
        self._refresh_stats_only()

    def _refresh_stats_only(self):
        kind = self.drill_service.config.drill_kind
        today = self.stats_service.total_reps_today()
        total = self.stats_service.total_reps_for(kind)
        best = self.stats_service.best_completed_run(kind)
        self.stats_var.set(
            f"Reps today: {today}\nReps in this drill: {total}\nBest completed run: {best}"
        )
