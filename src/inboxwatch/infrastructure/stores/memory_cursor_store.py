"""Process-local history cursor table keyed by mailbox."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from inboxwatch.application.ports.cursor_store import CursorStore


class InMemoryCursorStore(CursorStore):
    """Mailbox -> last committed historyId. Entries live for the process lifetime."""

    def __init__(self) -> None:
        self._cursors: dict[str, str] = {}

    def load(self, mailbox: str) -> Optional[str]:
        cursor = self._cursors.get(mailbox)
        if cursor is None:
            logger.debug(f"No cursor stored for {mailbox}")
        return cursor

    def save(self, mailbox: str, cursor: str) -> None:
        self._cursors[mailbox] = cursor
        logger.info(f"Updated last processed historyId for {mailbox} to {cursor}")

    def delete(self, mailbox: str) -> bool:
        removed = self._cursors.pop(mailbox, None) is not None
        if removed:
            logger.info(f"Dropped cursor for {mailbox}; next notification bootstraps")
        return removed

    def snapshot(self) -> dict[str, str]:
        return dict(self._cursors)


# Singleton instance
_store: InMemoryCursorStore | None = None


def get_cursor_store() -> InMemoryCursorStore:
    """Get or create the process cursor store."""
    global _store
    if _store is None:
        _store = InMemoryCursorStore()
    return _store
