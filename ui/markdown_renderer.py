# ui/markdown_renderer.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from markdown import markdown

from core.shots import (
    FRONT_COURT_SHOTS,
    REAR_COURT_SHOTS,
    SHOT_DIRECTIONS,
    SHOT_LABELS,
    group_weights,
)
from domain.models import DrillConfig, DrillKind, FixedReps

FOOTWORK_GUIDE = """\
## Random Footwork

Stand at the center of the court. Each rep:

1. A **number** appears (and is called out). Move to that shuttle position.
2. The *time to shuttle* bar runs down. Play your shadow shot on **Hit**.
3. The *time to center* bar runs down. Recover to the center.

Numbers are drawn from **{lo}** to **{hi}**.

!!! note "Timing"
    Time to shuttle: {t_min:g}-{t_max:g} s. Time to center: {c_min:g}-{c_max:g} s.
    {reps}
"""

SHOTS_GUIDE = """\
## Random Footwork with Shots

Positions **1-2** are front court, **3-4** rear court. Each rep calls a
position, a shot and a direction, for example *"2, Net shot left"*.
The arrow shows the direction: ← left, ↓ middle, → right.

{table}

!!! note "Timing"
    Time to shuttle: {t_min:g}-{t_max:g} s. Time to center: {c_min:g}-{c_max:g} s.
    {reps}
"""


@dataclass(frozen=True)
class MarkdownTheme:
    text: str = "#111827"
    muted: str = "#6B7280"
    border: str = "#E5E7EB"
    panel: str = "#FFFFFF"
    link: str = "#2563EB"
    accent: str = "#16A34A"


def _percent(weight: int, total: int) -> str:
    if total <= 0:
        return "-"
    return f"{round(100.0 * weight / total)}%"


def shot_table(cfg: DrillConfig) -> str:
    rows: List[str] = [
        "| Court | Shot | Chance | Directions |",
        "|---|---|---|---|",
    ]
    for court, group in (("Front", FRONT_COURT_SHOTS), ("Rear", REAR_COURT_SHOTS)):
        weights = group_weights(cfg.shot_weights, group)
        total = sum(weights.values())
        for name in group:
            rows.append(
                f"| {court} | {SHOT_LABELS[name]} | {_percent(weights[name], total)} "
                f"| {', '.join(SHOT_DIRECTIONS[name])} |"
            )
    return "\n".join(rows)


def guide_markdown(cfg: DrillConfig) -> str:
    if isinstance(cfg.rep_policy, FixedReps):
        reps = f"Drill ends after {cfg.rep_policy.target} reps."
    else:
        reps = "Reps continue until you press Stop."
    common = dict(
        t_min=cfg.time_to_target.min,
        t_max=cfg.time_to_target.max,
        c_min=cfg.time_to_center.min,
        c_max=cfg.time_to_center.max,
        reps=reps,
    )
    if cfg.drill_kind is DrillKind.FOOTWORK_WITH_SHOTS:
        return SHOTS_GUIDE.format(table=shot_table(cfg), **common)
    return FOOTWORK_GUIDE.format(
        lo=cfg.shuttle_numbers.min, hi=cfg.shuttle_numbers.max, **common
    )


class MarkdownRenderer:
    """
    Single responsibility:
    - Convert MD -> HTML
    - Provide CSS

    tkinterweb (tkhtml) renders a limited HTML subset, so only
    extensions that emit plain tables/divs are enabled.
    """

    def __init__(self, theme: Optional[MarkdownTheme] = None):
        self.theme = theme or MarkdownTheme()

    # ---------- extensions ----------
    def extensions(self) -> Tuple[List[str], Dict]:
        exts: List[str] = [
            "extra",
            "sane_lists",
            "tables",
            "admonition",
        ]
        return exts, {}

    # ---------- CSS ----------
    def css(self) -> str:
        t = self.theme
        return f"""
        body {{
          font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif;
          margin: 12px;
          color: {t.text};
          background: {t.panel};
          font-size: 14px;
          line-height: 1.5;
        }}

        h2 {{ font-size: 1.2em; margin: 0.4em 0 0.6em; color: {t.accent}; }}

        p {{ margin: 0.5em 0; }}

        ol, ul {{ padding-left: 1.2em; margin: 0.5em 0; }}
        li {{ margin: 0.2em 0; }}

        table {{
          border-collapse: collapse;
          width: 100%;
          margin: 0.8em 0;
          font-size: 0.95em;
        }}
        th, td {{
          border: 1px solid {t.border};
          padding: 6px 8px;
          text-align: left;
        }}
        th {{ font-weight: 700; }}

        /* admonition (div-based) => tkhtml friendly */
        .admonition {{
          border: 1px solid {t.border};
          border-radius: 8px;
          padding: 8px 10px;
          margin: 0.8em 0;
          color: {t.muted};
        }}
        .admonition-title {{
          font-weight: 800;
          margin-bottom: 4px;
          color: {t.text};
        }}
        """

    # ---------- render ----------
    def to_html(self, md_text: str) -> str:
        exts, cfg = self.extensions()
        body = markdown(
            md_text or "",
            extensions=exts,
            extension_configs=cfg,
            output_format="html5",
        )
        return f"""
        <html>
          <head>
            <meta charset="utf-8"/>
            <style>{self.css()}</style>
          </head>
          <body>{body}</body>
        </html>
        """

    def guide_html(self, cfg: DrillConfig) -> str:
        return self.to_html(guide_markdown(cfg))
