from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from ssx.server.session.models import MessageRecord, Role, SessionRecord
from ssx.server.session.store import SessionStore

from .catalog import LANDING_SUGGESTIONS, get_module, run_instrument_prompt
from .dispatcher import dispatch

logger = logging.getLogger(__name__)

EXECUTE_MARKER = "✅ (Execute) "
EXECUTE_STUB_NOTICE = "\n\n(Stub) In v2, this would trigger instrument runs + audit logging."

DEFAULT_REPLY_DELAY = 0.2


class Mode(str, Enum):
    DRAFT = "Draft"
    EXECUTE = "Execute"


def apply_mode(text: str, mode: Mode) -> str:
    if Mode(mode) is Mode.EXECUTE:
        return f"{EXECUTE_MARKER}{text}{EXECUTE_STUB_NOTICE}"
    return text


class ConversationController:
    """Runs user turns against the session store and the intent dispatcher.

    Turns are serialised through a single lock, so each assistant reply lands
    directly after its own user message even when turns are submitted while an
    earlier reply is still pending.
    """

    def __init__(self, store: SessionStore, *, reply_delay: float = DEFAULT_REPLY_DELAY) -> None:
        self._store = store
        self._reply_delay = max(0.0, reply_delay)
        self._options: list[str] = []
        self._draft = ""
        self._turn_lock = asyncio.Lock()
        self._pending: set[asyncio.Future] = set()

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def reply_delay(self) -> float:
        return self._reply_delay

    @property
    def draft(self) -> str:
        return self._draft

    def update_draft(self, text: str) -> None:
        self._draft = text

    def current_options(self) -> list[str]:
        return list(self._options)

    def current_session(self) -> Optional[SessionRecord]:
        return self._store.active_session

    def landing_suggestions(self) -> list[str]:
        return list(LANDING_SUGGESTIONS)

    def new_session(self) -> SessionRecord:
        session = self._store.create_session()
        self._options = []
        self._draft = ""
        return session

    def select_session(self, session_id: str) -> Optional[SessionRecord]:
        return self._store.set_active(session_id)

    async def submit_turn(self, text: str, mode: Mode = Mode.DRAFT) -> Optional[MessageRecord]:
        """Record a user turn and, after the reply delay, the assistant's answer.

        Returns the assistant message, or ``None`` when the text is blank or no
        session is active. Cancelling the caller does not cancel the turn: once
        submitted, the user message and its reply are both recorded.
        """
        cleaned = text.strip()
        if not cleaned:
            return None

        turn = asyncio.ensure_future(self._run_turn(cleaned, Mode(mode)))
        self._pending.add(turn)
        turn.add_done_callback(self._finish_turn)
        return await asyncio.shield(turn)

    async def join(self) -> None:
        """Wait for every turn still in flight, including ones whose caller went away."""
        if self._pending:
            await asyncio.wait(set(self._pending))

    async def _run_turn(self, cleaned: str, mode: Mode) -> Optional[MessageRecord]:
        async with self._turn_lock:
            session_id = self._store.state.active_id
            if self._store.state.find(session_id) is None:
                logger.debug("Dropping turn: no active session")
                return None

            await asyncio.to_thread(self._store.append_message, session_id, Role.USER, cleaned)
            self._draft = ""
            self._options = []

            result = dispatch(cleaned)
            reply = apply_mode(result.text, mode)
            logger.debug("Dispatching %s turn for session %s", mode.value, session_id)

            await asyncio.sleep(self._reply_delay)

            message = await asyncio.to_thread(self._store.append_message, session_id, Role.ASSISTANT, reply)
            self._options = list(result.options)
            return message

    def _finish_turn(self, turn: asyncio.Future) -> None:
        self._pending.discard(turn)
        if not turn.cancelled() and turn.exception() is not None:
            logger.error("Turn failed", exc_info=turn.exception())

    async def run_module(self, module_id: str, mode: Mode = Mode.DRAFT) -> Optional[MessageRecord]:
        module = get_module(module_id)
        logger.info("Running instrument %s", module.id)
        return await self.submit_turn(run_instrument_prompt(module), mode)
