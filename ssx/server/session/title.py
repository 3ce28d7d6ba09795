from __future__ import annotations

from typing import Iterable

from .models import MessageRecord, Role

PLACEHOLDER_TITLE = "New chat"

_MAX_TITLE_LENGTH = 32
_ELLIPSIS = "…"


def derive_title(messages: Iterable[MessageRecord]) -> str:
    """Title a session after its first user message, or the placeholder if there is none."""
    for message in messages:
        if message.role is not Role.USER:
            continue
        cleaned = message.content.strip()
        if not cleaned:
            return PLACEHOLDER_TITLE
        return _truncate_to_limit(cleaned)
    return PLACEHOLDER_TITLE


def _truncate_to_limit(text: str) -> str:
    if len(text) <= _MAX_TITLE_LENGTH:
        return text
    return f"{text[:_MAX_TITLE_LENGTH]}{_ELLIPSIS}"
