from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from .errors import CorruptPersistedState, NoActiveSession
from .models import MessageRecord, Role, SessionRecord, StoreState
from .persistence import SessionPersistence
from .title import PLACEHOLDER_TITLE, derive_title

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the session list and the active session id.

    Every mutation replaces the state snapshot and writes the full collection
    back to persistence before returning.
    """

    def __init__(self, persistence: SessionPersistence) -> None:
        self._persistence = persistence
        self._state = StoreState()
        self._lock = threading.RLock()

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def active_session(self) -> Optional[SessionRecord]:
        return self._state.active

    def initialize(self) -> StoreState:
        with self._lock:
            try:
                loaded = self._persistence.load()
            except CorruptPersistedState as exc:
                logger.warning("Discarding unreadable session data: %s", exc)
                loaded = []

            if not loaded:
                session = _new_session()
                self._commit(StoreState(sessions=(session,), active_id=session.id))
                logger.info("Started fresh session store with session %s", session.id)
                return self._state

            sessions = tuple(replace(session, title=derive_title(session.messages)) for session in loaded)
            self._state = StoreState(sessions=sessions, active_id=sessions[0].id)
            logger.info("Loaded %d session(s); active session %s", len(sessions), sessions[0].id)
            return self._state

    def create_session(self) -> SessionRecord:
        with self._lock:
            session = _new_session()
            self._commit(StoreState(sessions=(session, *self._state.sessions), active_id=session.id))
        logger.info("Created session %s", session.id)
        return session

    def set_active(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            session = self._state.find(session_id)
            if session is None:
                logger.debug("Ignoring selection of unknown session %s", session_id)
                return None
            self._state = replace(self._state, active_id=session.id)
            return session

    def append_message(self, session_id: Optional[str], role: Role, content: str) -> MessageRecord:
        with self._lock:
            session = self._state.find(session_id)
            if session is None:
                raise NoActiveSession(session_id)

            timestamp = _utc_now()
            if session.messages and session.messages[-1].timestamp > timestamp:
                timestamp = session.messages[-1].timestamp
            message = MessageRecord(id=_new_id("msg"), role=Role(role), content=content, timestamp=timestamp)

            messages = (*session.messages, message)
            updated = replace(session, messages=messages, title=derive_title(messages))
            sessions = tuple(updated if item.id == session.id else item for item in self._state.sessions)
            self._commit(replace(self._state, sessions=sessions))
        logger.debug("Appended %s message %s to session %s", message.role.value, message.id, session.id)
        return message

    def _commit(self, state: StoreState) -> None:
        self._persistence.save(state.sessions)
        self._state = state


def _new_session() -> SessionRecord:
    return SessionRecord(id=_new_id("sess"), title=PLACEHOLDER_TITLE, messages=(), created_at=_utc_now())


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
