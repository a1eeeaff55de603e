# -*- coding: utf-8 -*-

import time
from typing import Optional

from domain.models import DrillKind
from storage.db import Database


def _start_of_today_ts() -> int:
    now = time.time()
    lt = time.localtime(now)
    start = time.mktime(
        (
            lt.tm_year,
            lt.tm_mon,
            lt.tm_mday,
            0,
            0,
            0,
            lt.tm_wday,
            lt.tm_yday,
            lt.tm_isdst,
        )
    )
    return int(start)


class StatsService:
    def __init__(self, db: Database):
        self.db = db

    def total_reps_today(self, since_ts: Optional[int] = None) -> int:
        start_ts = _start_of_today_ts() if since_ts is None else since_ts
        row = self.db.conn.execute(
            """
            SELECT COALESCE(SUM(reps), 0) AS total
            FROM sessions
            WHERE end_ts IS NOT NULL
              AND start_ts >= ?
            """,
            (start_ts,),
        ).fetchone()
        return int(row["total"] or 0)

    def total_reps_for(self, drill_kind: DrillKind) -> int:
        row = self.db.conn.execute(
            """
            SELECT COALESCE(SUM(reps), 0) AS total
            FROM sessions
            WHERE end_ts IS NOT NULL
              AND drill_kind = ?
            """,
            (drill_kind.value,),
        ).fetchone()
        return int(row["total"] or 0)

    def best_completed_run(self, drill_kind: Optional[DrillKind] = None) -> int:
        if drill_kind is None:
            row = self.db.conn.execute(
                "SELECT COALESCE(MAX(reps), 0) AS best FROM sessions WHERE outcome='completed'"
            ).fetchone()
        else:
            row = self.db.conn.execute(
                """
                SELECT COALESCE(MAX(reps), 0) AS best
                FROM sessions
                WHERE outcome='completed' AND drill_kind = ?
                """,
                (drill_kind.value,),
            ).fetchone()
        return int(row["best"] or 0)
