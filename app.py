#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import tkinter as tk

from core.logger import setup_logger
from services.drill_service import DrillService
from services.settings_service import SettingsService, WeightPolicy
from services.speech import NullSpeech, Pyttsx3Speech
from services.stats_service import StatsService
from storage.db import Database
from storage.repos import SessionRepo
from ui.main_window import MainWindow
from ui.tk_scheduler import TkScheduler


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Badminton footwork drill trainer")
    p.add_argument("--db", default="drills.db", help="sqlite file for settings and sessions")
    p.add_argument("--log-level", default="INFO")
    p.add_argument("--log-file", default=None)
    p.add_argument("--mute", action="store_true", help="disable text-to-speech")
    p.add_argument(
        "--weight-policy",
        choices=[w.value for w in WeightPolicy],
        default=WeightPolicy.STRICT.value,
        help="strict: shot percentages per court must total 100",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logger(level=args.log_level, log_file=args.log_file)

    db = Database(db_path=args.db)
    db.init_schema()

    settings = SettingsService(db, policy=WeightPolicy(args.weight_policy))
    session_repo = SessionRepo(db)
    stats_service = StatsService(db)
    speech = NullSpeech() if args.mute else Pyttsx3Speech()

    root = tk.Tk()
    drill_service = DrillService(
        scheduler=TkScheduler(root),
        settings=settings,
        session_repo=session_repo,
        speech=speech,
    )

    app = MainWindow(root, drill_service, stats_service)
    try:
        app.run()
    finally:
        db.close()


if __name__ == "__main__":
    main()
