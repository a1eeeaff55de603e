# -*- coding: utf-8 -*-

import tkinter as tk
from typing import Callable


class TkScheduler:
    """Scheduler on the Tk event loop (after / after_cancel)."""

    def __init__(self, widget: tk.Misc):
        self.widget = widget

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.widget.after(max(0, int(delay_ms)), callback)

    def cancel(self, handle: str) -> None:
        try:
            self.widget.after_cancel(handle)
        except tk.TclError:
            # already fired or widget destroyed
            pass
