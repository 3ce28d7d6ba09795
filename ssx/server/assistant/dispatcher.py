"""Rule-based intent dispatcher.

Stands in for a real orchestration backend: user text is lower-cased and
checked against an ordered list of substring rules, and the first rule that
matches supplies a canned reply and four follow-up options. Text that matches
nothing gets the fallback reply, so every input produces a response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class DispatchResult:
    text: str
    options: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class IntentRule:
    name: str
    result: DispatchResult
    all_of: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()

    def matches(self, lowered: str) -> bool:
        if self.all_of and not all(trigger in lowered for trigger in self.all_of):
            return False
        if self.any_of and not any(trigger in lowered for trigger in self.any_of):
            return False
        return bool(self.all_of or self.any_of)


RULES: tuple[IntentRule, ...] = (
    IntentRule(
        name="build_vs_buy",
        all_of=("build", "buy"),
        result=DispatchResult(
            text=(
                "Let’s do a quick build-vs-buy decision in 6 steps: (1) capability scope, "
                "(2) integration complexity, (3) compliance + audit needs, (4) time-to-value, "
                "(5) TCO, (6) strategic differentiation. Which capability are we deciding on?"
            ),
            options=("Define capability scope", "List integration points", "Estimate TCO", "Run policy decision"),
        ),
    ),
    IntentRule(
        name="instrument_led_ui",
        any_of=("instrument", "conversational ui", "instruments"),
        result=DispatchResult(
            text=(
                "SSx works best when chat is the surface and instruments are the control plane. "
                "We’ll: (1) intake goal, (2) choose instruments, (3) collect required attributes, "
                "(4) run policy/constraints, (5) execute, (6) audit. Want the left-panel module "
                "taxonomy and the first 10 option chips?"
            ),
            options=("Generate module taxonomy", "Draft option chips", "Create workflow", "Show audit trace"),
        ),
    ),
    IntentRule(
        name="team_restructure",
        any_of=("restructure", "team"),
        result=DispatchResult(
            text=(
                "To restructure well, anchor on outcomes and interfaces. What’s the goal (cost, speed, "
                "quality, ownership clarity), and what are the 3–5 core domains/products the team supports?"
            ),
            options=("Clarify goals", "List domains/products", "Map current org", "Propose target org"),
        ),
    ),
    IntentRule(
        name="feedback_script",
        any_of=("feedback", "conversation"),
        result=DispatchResult(
            text=(
                "Tell me the situation in 2–3 lines: what happened, impact, and the change you want. "
                "I’ll turn it into a clear, respectful script with two phrasing options."
            ),
            options=("Give 2–3 line summary", "Draft short script", "Draft longer script", "Add follow-up plan"),
        ),
    ),
)

FALLBACK = DispatchResult(
    text=(
        "Got it. To move this forward SSx-style, pick one: intake the goal, choose instruments, "
        "or jump straight to an execution plan. What do you want first?"
    ),
    options=("Use case intake", "Pick instruments", "Create workflow", "Run policy decision"),
)


def match_rule(text: str) -> Optional[IntentRule]:
    lowered = text.lower()
    for rule in RULES:
        if rule.matches(lowered):
            return rule
    return None


def dispatch(text: str) -> DispatchResult:
    rule = match_rule(text)
    return rule.result if rule is not None else FALLBACK
