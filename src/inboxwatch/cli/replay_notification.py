"""One-shot processing of a Gmail push notification outside the web server."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

import httpx
from loguru import logger

from inboxwatch.domain.entities.notification import Notification
from inboxwatch.domain.errors import InboxwatchError
from inboxwatch.infrastructure import (
    build_notification_use_case,
    get_credential_store,
    get_cursor_store,
    get_settings,
)
from inboxwatch.infrastructure.http.pubsub import decode_push_envelope
from inboxwatch.infrastructure.wiring import configure_logging, seed_credentials


def _read_notification(args: argparse.Namespace) -> Notification:
    if args.envelope:
        if args.envelope == "-":
            raw = sys.stdin.read()
        else:
            with open(args.envelope, "r", encoding="utf-8") as f:
                raw = f.read()
        return decode_push_envelope(raw)
    return Notification(mailbox=args.mailbox or "", notified_cursor=args.cursor)


async def _run(notification: Notification) -> dict:
    settings = get_settings()
    credentials = get_credential_store()
    seed_credentials(credentials, settings)

    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
        uc = build_notification_use_case(settings, http, credentials, get_cursor_store())
        result = await uc.run(notification)
    return result.to_dict()


def main() -> int:
    parser = argparse.ArgumentParser(description="Process one Gmail push notification")
    parser.add_argument("envelope", nargs="?", help="Pub/Sub push body JSON file ('-' for stdin)")
    parser.add_argument("--mailbox", help="Mailbox address (instead of an envelope)")
    parser.add_argument("--cursor", help="historyId to start from (instead of an envelope)")
    args = parser.parse_args()

    if not args.envelope and not args.mailbox:
        parser.error("either an envelope file or --mailbox is required")

    configure_logging(get_settings().log_level)

    try:
        notification = _read_notification(args)
        report = asyncio.run(_run(notification))
    except (InboxwatchError, OSError) as e:
        logger.error(f"Notification processing failed: {e}")
        return 1

    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
