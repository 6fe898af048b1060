"""Domain entities and errors."""

from inboxwatch.domain.entities.gmail_message import (
    BodyPart,
    FullMessage,
    HistoryDelta,
    MessageSummary,
)
from inboxwatch.domain.entities.notification import (
    MatchRecord,
    MessageOutcome,
    Notification,
    NotificationResult,
)
from inboxwatch.domain.errors import (
    ApiError,
    CredentialError,
    DecodeError,
    DeltaFetchError,
    InboxwatchError,
    MessageFetchError,
    MissingMailbox,
    NoCredential,
    NoRefreshCredential,
    RefreshFailed,
)

__all__ = [
    "BodyPart",
    "FullMessage",
    "HistoryDelta",
    "MessageSummary",
    "MatchRecord",
    "MessageOutcome",
    "Notification",
    "NotificationResult",
    "InboxwatchError",
    "DecodeError",
    "MissingMailbox",
    "CredentialError",
    "NoCredential",
    "NoRefreshCredential",
    "RefreshFailed",
    "ApiError",
    "DeltaFetchError",
    "MessageFetchError",
]
