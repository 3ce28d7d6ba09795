from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .catalog import Module, ModuleGroup, ModuleStatus
from .controller import Mode


class TurnRequest(BaseModel):
    text: str = Field(..., description="User text for this turn.")
    mode: Mode = Field(default=Mode.DRAFT, description="Draft passes replies through; Execute marks them as run.")

    @field_validator("text")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()


class RunInstrumentRequest(BaseModel):
    mode: Mode = Mode.DRAFT


class InstrumentSchema(BaseModel):
    id: str
    name: str
    group: ModuleGroup
    status: ModuleStatus
    description: str

    @classmethod
    def from_module(cls, module: Module) -> "InstrumentSchema":
        return cls(
            id=module.id,
            name=module.name,
            group=module.group,
            status=module.status,
            description=module.description,
        )


class InstrumentGroup(BaseModel):
    group: ModuleGroup
    instruments: list[InstrumentSchema]


class InstrumentListResponse(BaseModel):
    groups: list[InstrumentGroup]


class SuggestionsResponse(BaseModel):
    suggestions: list[str]
