"""Process-local credential store (no persistence)."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from inboxwatch.application.ports.credential_store import CredentialPair, CredentialStore


class InMemoryCredentialStore(CredentialStore):
    """Holds the current OAuth access and refresh tokens in memory."""

    def __init__(self, access_token: Optional[str] = None, refresh_token: Optional[str] = None):
        self._access_token = access_token
        self._refresh_token = refresh_token

    def get(self) -> CredentialPair:
        return CredentialPair(access_token=self._access_token, refresh_token=self._refresh_token)

    def set_access_token(self, token: Optional[str]) -> None:
        self._access_token = token

    def set_refresh_token(self, token: Optional[str]) -> None:
        self._refresh_token = token

    def clear(self) -> None:
        self._access_token = None
        self._refresh_token = None
        logger.warning("Cleared stored credentials; re-authorization required")


# Singleton instance
_store: InMemoryCredentialStore | None = None


def get_credential_store() -> InMemoryCredentialStore:
    """Get or create the process credential store."""
    global _store
    if _store is None:
        _store = InMemoryCredentialStore()
    return _store
