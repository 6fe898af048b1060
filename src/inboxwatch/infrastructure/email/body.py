from __future__ import annotations
import base64
import binascii
from typing import Iterator, Optional

from loguru import logger

from inboxwatch.domain.entities.gmail_message import BodyPart

PLAIN_TEXT = "text/plain"


def decode_web_safe(data: str) -> str:
    # Gmail omits padding; accept the standard alphabet too
    normalized = data.replace("+", "-").replace("/", "_")
    normalized += "=" * (-len(normalized) % 4)
    return base64.urlsafe_b64decode(normalized).decode("utf-8", errors="replace")


def iter_parts(root: BodyPart) -> Iterator[BodyPart]:
    """Depth-first pre-order walk over a part tree, root included."""
    stack = [root]
    while stack:
        part = stack.pop()
        yield part
        stack.extend(reversed(part.parts))


def extract_plain_text(root: Optional[BodyPart]) -> Optional[str]:
    # First text/plain part carrying inline data wins
    if root is None:
        return None
    for part in iter_parts(root):
        if part.mime_type != PLAIN_TEXT or not part.data:
            continue
        try:
            return decode_web_safe(part.data)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"First text/plain part could not be decoded: {e}")
            return None
    return None
