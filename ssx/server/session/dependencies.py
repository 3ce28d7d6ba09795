from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends

from ssx.config.loader import get_int_env, get_str_env
from ssx.server.assistant.controller import ConversationController

from .persistence import SessionPersistence, SQLiteKeyValueStore
from .store import SessionStore

logger = logging.getLogger(__name__)

_CONTROLLER: Optional[ConversationController] = None


def build_controller(db_path: str, *, reply_delay: float) -> ConversationController:
    kv = SQLiteKeyValueStore(db_path)
    kv.init()
    store = SessionStore(SessionPersistence(kv))
    store.initialize()
    return ConversationController(store, reply_delay=reply_delay)


def initialise_controller() -> ConversationController:
    """Create the shared controller (and its session store) using configuration."""
    global _CONTROLLER
    if _CONTROLLER is not None:
        return _CONTROLLER

    db_path = get_str_env("SSX_STORE_PATH", "ssx.db")
    reply_delay = get_int_env("SSX_REPLY_DELAY_MS", 200) / 1000
    controller = build_controller(db_path, reply_delay=reply_delay)
    _CONTROLLER = controller
    logger.info(
        "Initialised conversation controller with store %s (reply delay %.3fs)",
        db_path,
        controller.reply_delay,
    )
    return controller


def set_controller(controller: Optional[ConversationController]) -> None:
    global _CONTROLLER
    _CONTROLLER = controller


def get_controller(_: ConversationController = Depends(initialise_controller)) -> ConversationController:
    if _CONTROLLER is None:
        raise RuntimeError("Conversation controller has not been initialised")
    return _CONTROLLER
