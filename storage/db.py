#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import sqlite3


class Database:
    def __init__(self, db_path: str = "drills.db"):
        self.db_path = db_path
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row

    def _cols(self, table: str):
        return [
            r["name"]
            for r in self.conn.execute(f"PRAGMA table_info({table});").fetchall()
        ]

    def init_schema(self):
        cur = self.conn.cursor()

        # key/value blobs (settings live here as JSON)
        cur.execute("""
            CREATE TABLE IF NOT EXISTS app_state (
                key TEXT PRIMARY KEY,
                value TEXT
            );
        """)

        # one row per drill run
        cur.execute("""
            CREATE TABLE IF NOT EXISTS sessions (
                id TEXT PRIMARY KEY,
                drill_kind TEXT NOT NULL,
                start_ts INTEGER NOT NULL,
                end_ts INTEGER,
                reps INTEGER NOT NULL DEFAULT 0,
                outcome TEXT
            );
        """)

        # sessions migration (early builds had no outcome column)
        if "outcome" not in self._cols("sessions"):
            cur.execute("ALTER TABLE sessions ADD COLUMN outcome TEXT;")

        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_sessions_start ON sessions(start_ts);"
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_sessions_kind ON sessions(drill_kind);"
        )

        self.conn.commit()

    def close(self):
        self.conn.close()
