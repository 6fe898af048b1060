from __future__ import annotations
from typing import Protocol

from inboxwatch.domain.entities.gmail_message import FullMessage, HistoryDelta


class MailboxSource(Protocol):
    async def fetch_delta(self, mailbox: str, start_cursor: str) -> HistoryDelta: ...
    async def resolve(self, mailbox: str, message_id: str) -> FullMessage: ...
