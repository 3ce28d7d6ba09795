from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ssx.server.session.dependencies import get_controller
from ssx.server.session.router import to_current
from ssx.server.session.schemas import CurrentSessionResponse

from .catalog import UnknownModule, filter_by_text
from .controller import ConversationController
from .schemas import (
    InstrumentGroup,
    InstrumentListResponse,
    InstrumentSchema,
    RunInstrumentRequest,
    SuggestionsResponse,
    TurnRequest,
)

router = APIRouter(prefix="/api", tags=["assistant"])


@router.post("/turns", response_model=CurrentSessionResponse)
async def submit_turn(
    payload: TurnRequest,
    controller: ConversationController = Depends(get_controller),
) -> CurrentSessionResponse:
    await controller.submit_turn(payload.text, payload.mode)
    return to_current(controller)


@router.get("/suggestions", response_model=SuggestionsResponse)
async def list_suggestions(
    controller: ConversationController = Depends(get_controller),
) -> SuggestionsResponse:
    return SuggestionsResponse(suggestions=controller.landing_suggestions())


@router.get("/instruments", response_model=InstrumentListResponse)
async def list_instruments(
    q: str = Query(default="", description="Case-insensitive filter over name, group and description."),
) -> InstrumentListResponse:
    groups = [
        InstrumentGroup(group=group, instruments=[InstrumentSchema.from_module(module) for module in modules])
        for group, modules in filter_by_text(q)
    ]
    return InstrumentListResponse(groups=groups)


@router.post("/instruments/{module_id}/run", response_model=CurrentSessionResponse)
async def run_instrument(
    module_id: str,
    payload: RunInstrumentRequest | None = None,
    controller: ConversationController = Depends(get_controller),
) -> CurrentSessionResponse:
    mode = payload.mode if payload is not None else RunInstrumentRequest().mode
    try:
        await controller.run_module(module_id, mode)
    except UnknownModule as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Instrument not found") from exc
    return to_current(controller)
