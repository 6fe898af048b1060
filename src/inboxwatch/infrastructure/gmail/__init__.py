"""Gmail REST adapters: token refresh, authorized calls, history and message reads."""

from inboxwatch.infrastructure.gmail.api import ApiRequest, ResilientApiCaller
from inboxwatch.infrastructure.gmail.auth import GoogleTokenRefresher
from inboxwatch.infrastructure.gmail.client import GmailMailboxSource

__all__ = [
    "ApiRequest",
    "GmailMailboxSource",
    "GoogleTokenRefresher",
    "ResilientApiCaller",
]
