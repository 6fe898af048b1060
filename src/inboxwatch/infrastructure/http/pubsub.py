from __future__ import annotations
import base64
import binascii
import json
from typing import Any

from inboxwatch.domain.entities.notification import Notification
from inboxwatch.domain.errors import DecodeError


def decode_push_envelope(body: bytes | str | dict[str, Any]) -> Notification:
    """Decode a Pub/Sub push body into a Gmail notification.

    Envelope: {"message": {"data": base64(JSON {"emailAddress", "historyId"})}}.
    A missing emailAddress is left for the caller to reject.
    """
    if isinstance(body, dict):
        envelope = body
    else:
        try:
            envelope = json.loads(body or b"{}")
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"Push body is not JSON: {e}") from e

    message = envelope.get("message") if isinstance(envelope, dict) else None
    data = message.get("data") if isinstance(message, dict) else None
    if not data or not isinstance(data, str):
        raise DecodeError("No message.data in Pub/Sub push")

    try:
        padded = data.replace("-", "+").replace("_", "/") + "=" * (-len(data) % 4)
        payload = json.loads(base64.b64decode(padded).decode("utf-8"))
    except (binascii.Error, ValueError, UnicodeDecodeError) as e:
        raise DecodeError(f"Error decoding Pub/Sub payload: {e}") from e

    if not isinstance(payload, dict):
        raise DecodeError("Pub/Sub payload is not a JSON object")

    history_id = payload.get("historyId")
    return Notification(
        mailbox=str(payload.get("emailAddress") or "").strip(),
        notified_cursor=str(history_id) if history_id not in (None, "") else None,
    )
