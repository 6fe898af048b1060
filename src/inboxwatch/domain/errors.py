"""Error taxonomy for notification processing."""

from __future__ import annotations


class InboxwatchError(Exception):
    """Base class for all processing errors."""


class DecodeError(InboxwatchError):
    """Inbound push envelope could not be decoded."""


class MissingMailbox(InboxwatchError):
    """Decoded notification carries no mailbox identifier."""


class CredentialError(InboxwatchError):
    """Credential subsystem exhausted; external re-authorization required."""


class NoRefreshCredential(CredentialError):
    """No refresh credential is held, so no refresh can be attempted."""


class RefreshFailed(CredentialError):
    """Identity provider rejected the refresh or could not be reached."""


class NoCredential(CredentialError):
    """No usable access credential could be obtained for an API call."""


class ApiError(InboxwatchError):
    """Non-success response from the mailbox API."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail[:200]}" if detail else f"HTTP {status_code}")

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class DeltaFetchError(InboxwatchError):
    """History (delta) fetch failed; the cursor must not advance."""

    def __init__(self, message: str, *, cursor_expired: bool = False) -> None:
        self.cursor_expired = cursor_expired
        super().__init__(message)


class MessageFetchError(InboxwatchError):
    """A single message could not be resolved."""

    def __init__(self, message_id: str, reason: str) -> None:
        self.message_id = message_id
        super().__init__(f"Failed to fetch message {message_id}: {reason}")
