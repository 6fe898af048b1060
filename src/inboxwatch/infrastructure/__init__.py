# src/inboxwatch/infrastructure/__init__.py
"""Infrastructure layer - Gmail adapters, stores, HTTP surface and configuration."""

from inboxwatch.infrastructure.settings import Settings, get_settings


# Stores and wiring import the application layer (lazy import to avoid circular deps)
def get_credential_store():
    """Get the process credential store (lazy import)."""
    from inboxwatch.infrastructure.stores.memory_credential_store import get_credential_store as _get
    return _get()


def get_cursor_store():
    """Get the process cursor store (lazy import)."""
    from inboxwatch.infrastructure.stores.memory_cursor_store import get_cursor_store as _get
    return _get()


def build_notification_use_case(*args, **kwargs):
    """Wire the notification use case from settings (lazy import)."""
    from inboxwatch.infrastructure.wiring import build_notification_use_case as _build
    return _build(*args, **kwargs)


__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Stores
    "get_credential_store",
    "get_cursor_store",
    # Wiring
    "build_notification_use_case",
]
