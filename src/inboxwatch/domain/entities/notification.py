from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Notification:
    mailbox: str
    notified_cursor: Optional[str] = None


@dataclass(frozen=True)
class MatchRecord:
    prefix: str
    token: str
    label_ids: tuple[str, ...]
    message_id: str = ""

    @property
    def marker(self) -> str:
        """Prefix and token as they appeared in the body."""
        return f"{self.prefix}{self.token}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "message_id": self.message_id,
            "marker": self.marker,
            "token": self.token,
            "labels": list(self.label_ids),
        }


@dataclass(frozen=True)
class MessageOutcome:
    message_id: str
    subject: str = ""
    match: Optional[MatchRecord] = None
    flags: tuple[str, ...] = ()
    error: Optional[str] = None


@dataclass
class NotificationResult:
    """Outcome of one processed notification (ephemeral, logged)."""

    mailbox: str
    start_cursor: Optional[str]
    end_cursor: Optional[str] = None
    outcomes: list[MessageOutcome] = field(default_factory=list)

    @property
    def matches(self) -> list[MatchRecord]:
        return [o.match for o in self.outcomes if o.match is not None]

    @property
    def failures(self) -> list[MessageOutcome]:
        return [o for o in self.outcomes if o.error is not None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "mailbox": self.mailbox,
            "start_cursor": self.start_cursor,
            "end_cursor": self.end_cursor,
            "matches": [m.to_dict() for m in self.matches],
            "flagged": {o.message_id: list(o.flags) for o in self.outcomes if o.flags},
            "failures": {o.message_id: o.error for o in self.failures},
        }
