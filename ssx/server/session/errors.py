from __future__ import annotations


class CorruptPersistedState(ValueError):
    """Stored session collection could not be decoded."""


class NoActiveSession(LookupError):
    """A message was appended to a session id that does not resolve."""

    def __init__(self, session_id: str | None) -> None:
        super().__init__(f"Session {session_id!r} not found")
        self.session_id = session_id
