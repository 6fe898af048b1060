"""Process Gmail push notifications: history delta -> marker matches -> cursor commit."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Iterable

from loguru import logger

from inboxwatch.application.markers import DEFAULT_PREFIX, extract_marker
from inboxwatch.application.ports.cursor_store import CursorStore
from inboxwatch.application.ports.mailbox_source import MailboxSource
from inboxwatch.domain.entities.gmail_message import MessageSummary
from inboxwatch.domain.entities.notification import (
    MessageOutcome,
    Notification,
    NotificationResult,
)
from inboxwatch.domain.errors import (
    CredentialError,
    DeltaFetchError,
    MessageFetchError,
    MissingMailbox,
)
from inboxwatch.infrastructure.email.body import extract_plain_text


class ProcessNotificationUseCase:
    """Handle one decoded mailbox-change notification.

    Flow:
    1. Validate mailbox, pick the start cursor (stored cursor wins,
       the notified cursor only bootstraps an unseen mailbox)
    2. Fetch the messageAdded delta since that cursor
    3. Per added message: resolve, extract text/plain body, look for the
       marker, flag alert labels. Failures here are isolated per message
    4. Commit the delta's end cursor
    5. Report the batch

    Failures in 1-2 (and credential exhaustion anywhere) abort without
    touching the cursor, so the next notification retries the same delta.
    Notifications for the same mailbox are serialized.
    """

    def __init__(
        self,
        source: MailboxSource,
        cursors: CursorStore,
        marker_prefix: str = DEFAULT_PREFIX,
        alert_labels: Iterable[str] = ("SPAM", "TRASH"),
    ) -> None:
        self.source = source
        self.cursors = cursors
        self.marker_prefix = marker_prefix
        self.alert_labels = tuple(alert_labels)
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def run(self, notification: Notification) -> NotificationResult:
        mailbox = notification.mailbox
        if not mailbox:
            raise MissingMailbox("No emailAddress in notification payload")

        async with self._locks[mailbox]:
            return await self._run_locked(mailbox, notification.notified_cursor)

    async def _run_locked(self, mailbox: str, notified_cursor: str | None) -> NotificationResult:
        start_cursor = self.cursors.load(mailbox) or notified_cursor
        if not start_cursor:
            raise DeltaFetchError(f"No stored or notified historyId for {mailbox}")

        logger.info(f"Processing for {mailbox}, starting from historyId: {start_cursor}")
        delta = await self.source.fetch_delta(mailbox, start_cursor)

        result = NotificationResult(mailbox=mailbox, start_cursor=start_cursor)
        seen: set[str] = set()
        for summary in delta.added:
            if summary.message_id in seen:
                logger.debug(f"Message {summary.message_id} listed twice in delta, skipping repeat")
                continue
            seen.add(summary.message_id)
            result.outcomes.append(await self._process_message(mailbox, summary))

        if delta.end_cursor:
            self.cursors.save(mailbox, delta.end_cursor)
            result.end_cursor = delta.end_cursor
        else:
            logger.warning(f"history.list for {mailbox} returned no historyId; cursor unchanged")

        self._report(result)
        return result

    async def _process_message(self, mailbox: str, summary: MessageSummary) -> MessageOutcome:
        initial = ", ".join(summary.label_ids) if summary.label_ids else "N/A"
        logger.info(f"Found new message {summary.message_id}, initial labels from history: {initial}")

        try:
            message = await self.source.resolve(mailbox, summary.message_id)
        except CredentialError:
            raise
        except MessageFetchError as e:
            logger.error(str(e))
            return MessageOutcome(message_id=summary.message_id, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error resolving message {summary.message_id}")
            return MessageOutcome(message_id=summary.message_id, error=repr(e))

        logger.info(f"  Subject: {message.subject}")
        logger.info(f"  Snippet: {message.snippet}")
        logger.info(f"  Final labels: {', '.join(message.label_ids)}")

        match = None
        text = extract_plain_text(message.payload)
        if text:
            match = extract_marker(
                text,
                label_ids=message.label_ids,
                prefix=self.marker_prefix,
                message_id=message.message_id,
            )
        else:
            logger.info("  No plain text body found or body data was empty")

        flags = tuple(label for label in self.alert_labels if label in message.label_ids)
        for label in flags:
            logger.warning(f"  ALERT: Message {message.message_id} is in {label}")

        return MessageOutcome(
            message_id=message.message_id,
            subject=message.subject,
            match=match,
            flags=flags,
        )

    def _report(self, result: NotificationResult) -> None:
        logger.bind(**result.to_dict()).info(
            f"Finished notification for {result.mailbox}: "
            f"{len(result.outcomes)} message(s), {len(result.matches)} match(es), "
            f"{len(result.failures)} failure(s), cursor {result.start_cursor} -> {result.end_cursor}"
        )
