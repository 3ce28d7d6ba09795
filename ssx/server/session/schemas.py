from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AwareDatetime, BaseModel, Field, TypeAdapter

from .models import MessageRecord, Role, SessionRecord


class SessionMessage(BaseModel):
    id: str
    role: Role
    content: str
    timestamp: AwareDatetime

    @classmethod
    def from_record(cls, record: MessageRecord) -> "SessionMessage":
        return cls(id=record.id, role=record.role, content=record.content, timestamp=record.timestamp)

    def to_record(self) -> MessageRecord:
        return MessageRecord(id=self.id, role=self.role, content=self.content, timestamp=self.timestamp)


class SessionSummary(BaseModel):
    id: str
    title: str
    created_at: datetime
    message_count: int = 0


class SessionDetail(BaseModel):
    id: str
    title: str
    created_at: AwareDatetime
    messages: list[SessionMessage] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionDetail":
        return cls(
            id=record.id,
            title=record.title,
            created_at=record.created_at,
            messages=[SessionMessage.from_record(message) for message in record.messages],
        )

    def to_record(self) -> SessionRecord:
        return SessionRecord(
            id=self.id,
            title=self.title,
            created_at=self.created_at,
            messages=tuple(message.to_record() for message in self.messages),
        )


# Persisted value stored under the sessions key.
SessionCollection = TypeAdapter(list[SessionDetail])


class SessionListResponse(BaseModel):
    sessions: list[SessionSummary]
    active_session_id: Optional[str] = None
    options: list[str] = Field(default_factory=list)


class SessionCreateResponse(BaseModel):
    session: SessionDetail


class CurrentSessionResponse(BaseModel):
    session: Optional[SessionDetail] = None
    options: list[str] = Field(default_factory=list)
