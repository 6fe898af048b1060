"""Marker token extraction from decoded message text."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from loguru import logger

from inboxwatch.domain.entities.notification import MatchRecord

DEFAULT_PREFIX = "spam-test-"

# Token ends at the first run of whitespace, commas or periods
_BOUNDARY = re.compile(r"[\s,.]+")
_UUID = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def extract_marker(
    text: str,
    label_ids: Iterable[str] = (),
    prefix: str = DEFAULT_PREFIX,
    message_id: str = "",
) -> Optional[MatchRecord]:
    """Find ``prefix`` followed by a UUID-shaped token in ``text``.

    Only the first occurrence of the prefix is inspected. A prefix followed
    by anything other than a well-formed 8-4-4-4-12 hex identifier is a
    non-match, not an error.
    """
    index = text.find(prefix)
    if index == -1:
        logger.debug(f"Prefix '{prefix}' not found in body")
        return None

    rest = text[index + len(prefix):]
    candidate = _BOUNDARY.split(rest, maxsplit=1)[0]

    if not _UUID.match(candidate):
        logger.info(f"Found prefix '{prefix}', but '{candidate}' doesn't look like a UUID")
        return None

    logger.info(f"Match in body: prefix '{prefix}' with UUID {candidate}")
    return MatchRecord(
        prefix=prefix,
        token=candidate,
        label_ids=tuple(label_ids),
        message_id=message_id,
    )
