"""Session management package providing SQLite-backed persistence of chat sessions."""

from .persistence import SessionPersistence, SQLiteKeyValueStore
from .store import SessionStore

__all__ = ["SQLiteKeyValueStore", "SessionPersistence", "SessionStore"]
