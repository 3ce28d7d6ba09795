from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class ModuleGroup(str, Enum):
    START = "Start / Intake"
    CONTEXT = "Context & Knowledge"
    POLICY = "Policy & Guardrails"
    EXECUTION = "Execution"
    ASSURANCE = "Assurance"
    AUDIT = "Audit & Reporting"


class ModuleStatus(str, Enum):
    CONFIGURED = "Configured"
    NEEDS_SETUP = "Needs setup"
    BLOCKED = "Blocked"


class UnknownModule(LookupError):
    def __init__(self, module_id: str) -> None:
        super().__init__(f"Instrument {module_id!r} not found")
        self.module_id = module_id


@dataclass(frozen=True, slots=True)
class Module:
    id: str
    name: str
    group: ModuleGroup
    status: ModuleStatus
    description: str

    def matches(self, lowered_query: str) -> bool:
        return (
            lowered_query in self.name.lower()
            or lowered_query in self.group.value.lower()
            or lowered_query in self.description.lower()
        )


MODULES: tuple[Module, ...] = (
    Module("intake", "Use case intake", ModuleGroup.START, ModuleStatus.CONFIGURED,
           "Capture objective, user, constraints, and success criteria."),
    Module("sensitivity", "Purpose & sensitivity", ModuleGroup.START, ModuleStatus.CONFIGURED,
           "Collect purpose, data sensitivity, region, and environment."),
    Module("context_builder", "Context builder", ModuleGroup.CONTEXT, ModuleStatus.CONFIGURED,
           "Assemble context from selected sources and user inputs."),
    Module("source_picker", "Retrieval / sources", ModuleGroup.CONTEXT, ModuleStatus.NEEDS_SETUP,
           "Pick sources (docs/APIs) and set caps (top-k, chunk limit)."),
    Module("pdp", "Policy decision", ModuleGroup.POLICY, ModuleStatus.CONFIGURED,
           "Evaluate allow/deny + constraints based on attributes."),
    Module("serving_paths", "Allowed serving paths", ModuleGroup.POLICY, ModuleStatus.NEEDS_SETUP,
           "Route to approved tools/APIs based on policy outcome."),
    Module("workflow", "Workflow runner", ModuleGroup.EXECUTION, ModuleStatus.CONFIGURED,
           "Run a workflow: plan → execute → verify → summarize."),
    Module("hitl", "Human approval", ModuleGroup.EXECUTION, ModuleStatus.CONFIGURED,
           "Escalate to a human for approval before proceeding."),
    Module("eval", "Evaluation checks", ModuleGroup.ASSURANCE, ModuleStatus.NEEDS_SETUP,
           "Score response quality, coverage, and risks. Store results."),
    Module("explain", "Explainability view", ModuleGroup.ASSURANCE, ModuleStatus.CONFIGURED,
           "Show rationale, assumptions, and evidence blocks."),
    Module("audit", "Audit log viewer", ModuleGroup.AUDIT, ModuleStatus.CONFIGURED,
           "Trace inputs → decisions → actions → outputs for a session."),
    Module("telemetry", "Metrics / telemetry", ModuleGroup.AUDIT, ModuleStatus.NEEDS_SETUP,
           "Track latency, costs, outcomes, and policy decisions over time."),
)

LANDING_SUGGESTIONS: tuple[str, ...] = (
    "Help me think through a team restructure",
    "I have a tough feedback conversation coming up",
    "Should we build or buy this capability?",
    "Help me design an instrument-led conversational UI",
)


def get_module(module_id: str) -> Module:
    for module in MODULES:
        if module.id == module_id:
            return module
    raise UnknownModule(module_id)


def group_modules(modules: Iterable[Module]) -> list[tuple[ModuleGroup, list[Module]]]:
    """Bucket modules by group, keeping groups in first-seen order."""
    grouped: dict[ModuleGroup, list[Module]] = {}
    for module in modules:
        grouped.setdefault(module.group, []).append(module)
    return list(grouped.items())


def filter_by_text(query: str) -> list[tuple[ModuleGroup, list[Module]]]:
    lowered = query.strip().lower()
    if not lowered:
        return group_modules(MODULES)
    return group_modules(module for module in MODULES if module.matches(lowered))


def run_instrument_prompt(module: Module) -> str:
    return f"Run instrument: {module.name}"
