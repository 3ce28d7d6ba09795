from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, status

from ssx.server.assistant.controller import ConversationController

from .dependencies import get_controller
from .models import SessionRecord
from .schemas import (
    CurrentSessionResponse,
    SessionCreateResponse,
    SessionDetail,
    SessionListResponse,
    SessionSummary,
)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    controller: ConversationController = Depends(get_controller),
) -> SessionListResponse:
    return _to_list(controller)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SessionCreateResponse)
async def create_session(
    controller: ConversationController = Depends(get_controller),
) -> SessionCreateResponse:
    session = await asyncio.to_thread(controller.new_session)
    return SessionCreateResponse(session=SessionDetail.from_record(session))


@router.get("/current", response_model=CurrentSessionResponse)
async def get_current_session(
    controller: ConversationController = Depends(get_controller),
) -> CurrentSessionResponse:
    return to_current(controller)


@router.post("/{session_id}/select", response_model=SessionListResponse)
async def select_session(
    session_id: str,
    controller: ConversationController = Depends(get_controller),
) -> SessionListResponse:
    controller.select_session(session_id)
    return _to_list(controller)


def to_current(controller: ConversationController) -> CurrentSessionResponse:
    session = controller.current_session()
    return CurrentSessionResponse(
        session=SessionDetail.from_record(session) if session is not None else None,
        options=controller.current_options(),
    )


def _to_summary(record: SessionRecord) -> SessionSummary:
    return SessionSummary(
        id=record.id,
        title=record.title,
        created_at=record.created_at,
        message_count=len(record.messages),
    )


def _to_list(controller: ConversationController) -> SessionListResponse:
    state = controller.store.state
    return SessionListResponse(
        sessions=[_to_summary(record) for record in state.sessions],
        active_session_id=state.active_id,
        options=controller.current_options(),
    )
