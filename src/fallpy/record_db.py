"""
record_db.py: Persistence for the best score (and the small settings the client keeps).
"""

import logging
import sqlite3
from typing import Dict, Optional, Protocol

log = logging.getLogger(__name__)


class RecordStore(Protocol):
    def load_record(self) -> int: ...

    def save_record(self, score: int) -> None: ...


class MemoryRecordStore:
    """In-process store used by tests and headless runs."""

    def __init__(self, best: int = 0):
        self.best = best
        self.saves = 0
        self.settings: Dict[str, str] = {}

    def load_record(self) -> int:
        return self.best

    def save_record(self, score: int):
        self.best = score
        self.saves += 1

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: str):
        self.settings[key] = value


class SqliteRecordStore:
    """Handles all interaction with the SQLite database."""

    def __init__(self, db_file: str):
        self.db_file = db_file
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates tables if they don't exist."""
        try:
            self.cur.execute("""
                CREATE TABLE IF NOT EXISTS Records (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    best INTEGER NOT NULL DEFAULT 0
                )
            """)
            self.cur.execute("""
                CREATE TABLE IF NOT EXISTS Settings (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)
            self.conn.commit()
        except sqlite3.Error:
            log.exception("Could not initialise record database %s", self.db_file)
            raise

    def load_record(self) -> int:
        """Returns the stored best score, 0 when nothing was saved yet."""
        self.cur.execute("SELECT best FROM Records WHERE id = 1")
        row = self.cur.fetchone()
        return int(row[0]) if row else 0

    def save_record(self, score: int):
        """Overwrites the best score. Callers only save when it was beaten."""
        self.cur.execute(
            "INSERT INTO Records (id, best) VALUES (1, ?) "
            "ON CONFLICT(id) DO UPDATE SET best = excluded.best", (int(score),))
        self.conn.commit()
        log.debug("Saved record %d to %s", score, self.db_file)

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        self.cur.execute("SELECT value FROM Settings WHERE key = ?", (key,))
        row = self.cur.fetchone()
        return row[0] if row else default

    def set_setting(self, key: str, value: str):
        self.cur.execute(
            "INSERT INTO Settings (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value", (key, value))
        self.conn.commit()

    def close(self):
        self.conn.close()
