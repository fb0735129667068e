"""
SQLite persistence for earths, countries and the per-earth log.

Values are stored as codec JSON documents, so decoding stays lenient towards
rows written by older versions. The earth log uses the bucket pattern: each
row holds up to MAX_ENTRIES_PER_BUCKET messages.
"""

import json
import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

import codec
from climate import Earth
from country import Country

logger = logging.getLogger(__name__)

MAX_ENTRIES_PER_BUCKET = 128


class StateStore:
    """SQLite-backed store for simulation state"""

    def __init__(self, db_path: str = "save_the_world.db"):
        self.db_path = db_path
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_db(self):
        """Initialize SQLite database with schema"""
        conn = self._connect()
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS earths (
                earth_id TEXT PRIMARY KEY,
                document TEXT,
                updated TEXT
            )
        """)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS countries (
                earth_id TEXT,
                country_code TEXT,
                document TEXT,
                updated TEXT,
                PRIMARY KEY (earth_id, country_code)
            )
        """)
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS earth_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                earth_id TEXT,
                entries TEXT,
                entry_count INTEGER,
                start_date TEXT,
                end_date TEXT
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_log_lookup
            ON earth_logs(earth_id, id)
        """)
        conn.commit()
        conn.close()

    # ------------------------------------------------------------------ #
    # Earths
    # ------------------------------------------------------------------ #
    def save_earth(self, earth_id: str, earth: Earth):
        conn = self._connect()
        conn.execute(
            "INSERT OR REPLACE INTO earths (earth_id, document, updated) VALUES (?, ?, ?)",
            (earth_id, codec.dumps("earth", earth), datetime.now().isoformat())
        )
        conn.commit()
        conn.close()

    def load_earth(self, earth_id: str) -> Optional[Earth]:
        conn = self._connect()
        row = conn.execute("SELECT document FROM earths WHERE earth_id = ?", (earth_id,)).fetchone()
        conn.close()
        if row is None:
            return None
        return codec.loads("earth", row[0])

    # ------------------------------------------------------------------ #
    # Countries
    # ------------------------------------------------------------------ #
    def save_country(self, earth_id: str, country: Country):
        self.save_countries(earth_id, [country])

    def save_countries(self, earth_id: str, countries: List[Country]):
        now = datetime.now().isoformat()
        conn = self._connect()
        conn.executemany(
            "INSERT OR REPLACE INTO countries (earth_id, country_code, document, updated) VALUES (?, ?, ?, ?)",
            [(earth_id, c.country_code, codec.dumps("country", c), now) for c in countries]
        )
        conn.commit()
        conn.close()

    def load_country(self, earth_id: str, country_code: str) -> Optional[Country]:
        conn = self._connect()
        row = conn.execute(
            "SELECT document FROM countries WHERE earth_id = ? AND country_code = ?",
            (earth_id, country_code)
        ).fetchone()
        conn.close()
        if row is None:
            return None
        return codec.loads("country", row[0])

    def load_countries(self, earth_id: str) -> List[Country]:
        conn = self._connect()
        rows = conn.execute(
            "SELECT document FROM countries WHERE earth_id = ? ORDER BY country_code",
            (earth_id,)
        ).fetchall()
        conn.close()
        return [codec.loads("country", row[0]) for row in rows]

    # ------------------------------------------------------------------ #
    # Earth log
    # ------------------------------------------------------------------ #
    def log_message(self, earth_id: str, message: str):
        """Append a message to the earth's newest log bucket, opening a new bucket when it is full"""
        now = datetime.now().isoformat()
        conn = self._connect()
        cursor = conn.cursor()
        row = cursor.execute(
            "SELECT id, entries, entry_count FROM earth_logs WHERE earth_id = ? ORDER BY id DESC LIMIT 1",
            (earth_id,)
        ).fetchone()

        if row is not None and row[2] < MAX_ENTRIES_PER_BUCKET:
            bucket_id, entries, count = row
            entries = json.loads(entries)
            entries.append(message)
            cursor.execute(
                "UPDATE earth_logs SET entries = ?, entry_count = ?, end_date = ? WHERE id = ?",
                (json.dumps(entries), count + 1, now, bucket_id)
            )
        else:
            cursor.execute(
                "INSERT INTO earth_logs (earth_id, entries, entry_count, start_date, end_date) VALUES (?, ?, ?, ?, ?)",
                (earth_id, json.dumps([message]), 1, now, now)
            )
        conn.commit()
        conn.close()

    def last_log_messages(self, earth_id: str, max_entries: int = 20) -> List[str]:
        """Latest log messages for an earth, newest first.

        Only the last two buckets are read, so at most
        MAX_ENTRIES_PER_BUCKET + 1 messages are guaranteed to be available.
        """
        if max_entries > MAX_ENTRIES_PER_BUCKET:
            logger.warning(f"Requested {max_entries} log entries, more than the {MAX_ENTRIES_PER_BUCKET} "
                           f"stored per bucket. Fewer entries might be returned.")

        conn = self._connect()
        rows = conn.execute(
            "SELECT entries FROM earth_logs WHERE earth_id = ? ORDER BY id DESC LIMIT 2",
            (earth_id,)
        ).fetchall()
        conn.close()

        if not rows:
            logger.info(f"No log entries found for earth {earth_id}")
            return []

        entries = []
        for (bucket,) in reversed(rows):
            entries.extend(json.loads(bucket))
        return list(reversed(entries))[:max_entries]

    def log_bucket_count(self, earth_id: str) -> int:
        conn = self._connect()
        (count,) = conn.execute("SELECT COUNT(*) FROM earth_logs WHERE earth_id = ?", (earth_id,)).fetchone()
        conn.close()
        return count
