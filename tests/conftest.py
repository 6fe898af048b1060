"""Shared fixtures and Gmail payload builders."""

from __future__ import annotations

import base64
import json
from typing import Any

import pytest

from inboxwatch.domain.entities.gmail_message import FullMessage, HistoryDelta
from inboxwatch.domain.errors import MessageFetchError
from inboxwatch.infrastructure.stores import InMemoryCredentialStore, InMemoryCursorStore

MARKER_UUID = "1a2b3c4d-1a2b-1a2b-1a2b-1a2b3c4d5e6f"


def b64url(text: str) -> str:
    """Gmail-style web-safe base64 without padding."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def push_body(email: str | None, history_id: Any) -> bytes:
    payload: dict[str, Any] = {"historyId": history_id}
    if email is not None:
        payload["emailAddress"] = email
    data = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")
    return json.dumps({"message": {"data": data, "messageId": "1"}, "subscription": "s"}).encode()


def gmail_message(message_id: str, body_text: str | None, labels=("INBOX",), subject="Hello") -> dict:
    """A multipart/mixed message with text/plain nested under multipart/alternative."""
    alternative: dict[str, Any] = {"mimeType": "multipart/alternative", "parts": []}
    if body_text is not None:
        alternative["parts"].append({"mimeType": "text/plain", "body": {"data": b64url(body_text)}})
    alternative["parts"].append({"mimeType": "text/html", "body": {"data": b64url("<p>html</p>")}})
    return {
        "id": message_id,
        "labelIds": list(labels),
        "snippet": (body_text or "")[:40],
        "payload": {
            "mimeType": "multipart/mixed",
            "headers": [{"name": "Subject", "value": subject}],
            "parts": [alternative],
        },
    }


class FakeMailboxSource:
    """In-memory MailboxSource: deltas are consumed in order, messages looked up by id."""

    def __init__(self, deltas: list[HistoryDelta], messages: dict[str, FullMessage | Exception]):
        self.deltas = list(deltas)
        self.messages = messages
        self.fetch_calls: list[tuple[str, str]] = []
        self.resolve_calls: list[str] = []

    async def fetch_delta(self, mailbox: str, start_cursor: str) -> HistoryDelta:
        self.fetch_calls.append((mailbox, start_cursor))
        delta = self.deltas.pop(0) if len(self.deltas) > 1 else self.deltas[0]
        if isinstance(delta, Exception):
            raise delta
        return delta

    async def resolve(self, mailbox: str, message_id: str) -> FullMessage:
        self.resolve_calls.append(message_id)
        found = self.messages.get(message_id)
        if found is None:
            raise MessageFetchError(message_id, "HTTP 404: Not Found")
        if isinstance(found, Exception):
            raise found
        return found


@pytest.fixture
def cursor_store() -> InMemoryCursorStore:
    return InMemoryCursorStore()


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore(access_token="old-access", refresh_token="refresh-1")
