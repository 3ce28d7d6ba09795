from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class MessageRecord:
    id: str
    role: Role
    content: str
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class SessionRecord:
    id: str
    title: str
    messages: tuple[MessageRecord, ...]
    created_at: datetime


@dataclass(frozen=True, slots=True)
class StoreState:
    """Snapshot of every session plus the id of the active one."""

    sessions: tuple[SessionRecord, ...] = ()
    active_id: Optional[str] = None

    def find(self, session_id: Optional[str]) -> Optional[SessionRecord]:
        if session_id is None:
            return None
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    @property
    def active(self) -> Optional[SessionRecord]:
        return self.find(self.active_id)
