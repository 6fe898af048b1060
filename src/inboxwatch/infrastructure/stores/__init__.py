"""Store implementations."""

from inboxwatch.infrastructure.stores.memory_credential_store import (
    InMemoryCredentialStore,
    get_credential_store,
)
from inboxwatch.infrastructure.stores.memory_cursor_store import (
    InMemoryCursorStore,
    get_cursor_store,
)

__all__ = [
    "InMemoryCredentialStore",
    "InMemoryCursorStore",
    "get_credential_store",
    "get_cursor_store",
]
