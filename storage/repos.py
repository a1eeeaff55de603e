# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import time
import uuid
from typing import List, Optional

from domain.models import SessionLog
from storage.db import Database


def _now_ts() -> int:
    return int(time.time())


class AppStateRepo:
    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.conn.execute(
            "SELECT value FROM app_state WHERE key=?",
            (key,),
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.db.conn.execute(
            """
            INSERT INTO app_state(key, value) VALUES(?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, value),
        )
        self.db.conn.commit()


class SessionRepo:
    def __init__(self, db: Database):
        self.db = db

    def start_session(self, drill_kind: str, start_ts: Optional[int] = None) -> SessionLog:
        sid = str(uuid.uuid4())
        ts = start_ts if start_ts is not None else _now_ts()
        self.db.conn.execute(
            "INSERT INTO sessions(id, drill_kind, start_ts, reps) VALUES(?,?,?,0)",
            (sid, drill_kind, ts),
        )
        self.db.conn.commit()
        return self.get(sid)

    def end_session(
        self,
        session_id: str,
        reps: int,
        outcome: str,
        end_ts: Optional[int] = None,
    ) -> None:
        ts = end_ts if end_ts is not None else _now_ts()
        self.db.conn.execute(
            "UPDATE sessions SET end_ts=?, reps=?, outcome=? WHERE id=?",
            (ts, int(reps), outcome, session_id),
        )
        self.db.conn.commit()

    def get(self, session_id: str) -> Optional[SessionLog]:
        r = self.db.conn.execute(
            """
            SELECT id, drill_kind, start_ts, end_ts, reps, outcome
            FROM sessions WHERE id=?
            """,
            (session_id,),
        ).fetchone()
        return SessionLog(**dict(r)) if r else None

    def list_recent(self, limit: int = 20) -> List[SessionLog]:
        rows = self.db.conn.execute(
            """
            SELECT id, drill_kind, start_ts, end_ts, reps, outcome
            FROM sessions ORDER BY start_ts DESC LIMIT ?
            """,
            (limit,),
        ).fetchall()
        return [SessionLog(**dict(r)) for r in rows]
