from __future__ import annotations
from typing import Optional, Protocol


class CursorStore(Protocol):
    # mailbox id -> last committed history cursor
    def load(self, mailbox: str) -> Optional[str]: ...
    def save(self, mailbox: str, cursor: str) -> None: ...
    def delete(self, mailbox: str) -> bool: ...
    def snapshot(self) -> dict[str, str]: ...
