from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from .errors import CorruptPersistedState
from .models import SessionRecord
from .schemas import SessionCollection, SessionDetail

logger = logging.getLogger(__name__)

SESSIONS_KEY = "ssx_sessions_v1"

_KV_DDL = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def _ensure_pragmas(connection: sqlite3.Connection) -> None:
    connection.execute("PRAGMA journal_mode = WAL;")


class SQLiteKeyValueStore:
    """Device-local key/value byte store backed by a single SQLite table."""

    def __init__(self, db_path: str) -> None:
        path = Path(db_path)
        if not path.is_absolute():
            path = Path.cwd() / path
        if path.suffix != ".db":
            path = path.with_suffix(".db")
        self._db_path = str(path)

    @property
    def db_path(self) -> str:
        return self._db_path

    def init(self) -> None:
        """Create the schema, moving an unreadable database file aside first."""
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._create_schema()
        except sqlite3.DatabaseError as exc:
            backup = self._quarantine()
            logger.warning("Database %s is unreadable (%s); moved it to %s", self._db_path, exc, backup)
            self._create_schema()
        logger.info("Key/value store initialised at %s", self._db_path)

    def _create_schema(self) -> None:
        with sqlite3.connect(self._db_path) as connection:
            _ensure_pragmas(connection)
            connection.execute(_KV_DDL)
            connection.commit()

    def _quarantine(self) -> Path:
        path = Path(self._db_path)
        backup = path.with_suffix(".corrupt.db")
        path.replace(backup)
        for suffix in ("-wal", "-shm"):
            Path(f"{self._db_path}{suffix}").unlink(missing_ok=True)
        return backup

    def get(self, key: str) -> Optional[bytes]:
        with sqlite3.connect(self._db_path) as connection:
            _ensure_pragmas(connection)
            row = connection.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        value = row[0]
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def put(self, key: str, value: bytes) -> None:
        """Replace the value stored under ``key`` in a single transaction."""
        with sqlite3.connect(self._db_path) as connection:
            _ensure_pragmas(connection)
            connection.execute(
                "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, sqlite3.Binary(value), _utc_now_str()),
            )
            connection.commit()


class SessionPersistence:
    """Serialises the whole session collection under one fixed key."""

    def __init__(self, kv: SQLiteKeyValueStore, key: str = SESSIONS_KEY) -> None:
        self._kv = kv
        self._key = key

    def load(self) -> list[SessionRecord]:
        raw = self._kv.get(self._key)
        if not raw:
            return []
        try:
            details = SessionCollection.validate_json(raw)
        except ValidationError as exc:
            raise CorruptPersistedState(f"Stored value under {self._key!r} is malformed") from exc
        return [detail.to_record() for detail in details]

    def save(self, sessions: Sequence[SessionRecord]) -> None:
        payload = SessionCollection.dump_json([SessionDetail.from_record(session) for session in sessions])
        self._kv.put(self._key, payload)


def _utc_now_str() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()
