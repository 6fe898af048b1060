"""Map Gmail API JSON into domain entities."""

from __future__ import annotations

from typing import Any, Optional

from inboxwatch.domain.entities.gmail_message import (
    BodyPart,
    FullMessage,
    HistoryDelta,
    MessageSummary,
)

NO_SUBJECT = "No Subject"


def to_body_part(raw: dict[str, Any]) -> BodyPart:
    body = raw.get("body") or {}
    return BodyPart(
        mime_type=raw.get("mimeType", ""),
        data=body.get("data") or None,
        filename=raw.get("filename", "") or "",
        parts=tuple(to_body_part(p) for p in raw.get("parts") or []),
    )


def subject_from_headers(headers: list[dict[str, Any]]) -> str:
    for header in headers:
        if str(header.get("name", "")).lower() == "subject":
            return header.get("value", "") or NO_SUBJECT
    return NO_SUBJECT


def to_full_message(raw: dict[str, Any]) -> FullMessage:
    payload = raw.get("payload")
    return FullMessage(
        message_id=raw["id"],
        label_ids=tuple(raw.get("labelIds") or ()),
        subject=subject_from_headers((payload or {}).get("headers") or []),
        snippet=raw.get("snippet", "") or "",
        payload=to_body_part(payload) if payload else None,
    )


def added_messages(history_page: dict[str, Any]) -> list[MessageSummary]:
    """Flatten messagesAdded entries, keeping service order and duplicates."""
    out: list[MessageSummary] = []
    for record in history_page.get("history") or []:
        for added in record.get("messagesAdded") or []:
            message = added.get("message") or {}
            message_id = message.get("id")
            if not message_id:
                continue
            labels = message.get("labelIds")
            out.append(
                MessageSummary(
                    message_id=message_id,
                    label_ids=tuple(labels) if labels is not None else None,
                )
            )
    return out


def to_history_delta(pages: list[dict[str, Any]]) -> HistoryDelta:
    added: list[MessageSummary] = []
    end_cursor: Optional[str] = None
    for page in pages:
        added.extend(added_messages(page))
        if page.get("historyId") is not None:
            end_cursor = str(page["historyId"])
    return HistoryDelta(added=added, end_cursor=end_cursor)
