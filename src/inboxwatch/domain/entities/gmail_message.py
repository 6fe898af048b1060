from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class BodyPart:
    # One node of the MIME part tree; data is still web-safe base64
    mime_type: str
    data: Optional[str] = None
    filename: str = ""
    parts: tuple["BodyPart", ...] = ()


@dataclass(frozen=True)
class MessageSummary:
    message_id: str
    label_ids: Optional[tuple[str, ...]] = None  # snapshot from the history entry


@dataclass(frozen=True)
class FullMessage:
    message_id: str
    label_ids: tuple[str, ...]
    subject: str
    snippet: str
    payload: Optional[BodyPart] = None


@dataclass(frozen=True)
class HistoryDelta:
    added: list[MessageSummary] = field(default_factory=list)
    end_cursor: Optional[str] = None
