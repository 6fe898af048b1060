from __future__ import annotations
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from inboxwatch.application.ports.mailbox_source import MailboxSource
from inboxwatch.domain.entities.gmail_message import FullMessage, HistoryDelta
from inboxwatch.domain.errors import ApiError, DeltaFetchError, MessageFetchError
from inboxwatch.infrastructure.gmail.api import ApiRequest, ResilientApiCaller
from inboxwatch.infrastructure.gmail.mapper import to_full_message, to_history_delta
from inboxwatch.infrastructure.settings import DEFAULT_MESSAGE_FIELDS

GMAIL_API_BASE_URL = "https://gmail.googleapis.com/gmail/v1"


class GmailMailboxSource(MailboxSource):
    def __init__(
        self,
        caller: ResilientApiCaller,
        base_url: str = GMAIL_API_BASE_URL,
        message_fields: str = DEFAULT_MESSAGE_FIELDS,
    ) -> None:
        self.caller = caller
        self.base_url = base_url.rstrip("/")
        self.message_fields = message_fields

    def _user_url(self, mailbox: str) -> str:
        return f"{self.base_url}/users/{quote(mailbox, safe='@')}"

    async def fetch_delta(self, mailbox: str, start_cursor: str) -> HistoryDelta:
        """List messageAdded history since ``start_cursor``, following pagination.

        A 404 means the start cursor is too old or unknown; that is reported as
        an expired cursor rather than as an empty delta.
        """
        url = f"{self._user_url(mailbox)}/history"
        pages: list[dict[str, Any]] = []
        page_token = None

        while True:
            params = {"startHistoryId": start_cursor, "historyTypes": "messageAdded"}
            if page_token:
                params["pageToken"] = page_token
            try:
                response = await self.caller.call(ApiRequest("GET", url, params))
                page = response.json()
            except ApiError as e:
                if e.status_code == 404:
                    raise DeltaFetchError(
                        f"History ID {start_cursor} is too old or unknown for {mailbox}",
                        cursor_expired=True,
                    ) from e
                raise DeltaFetchError(f"history.list failed for {mailbox}: {e}") from e
            except (httpx.HTTPError, ValueError) as e:
                raise DeltaFetchError(f"history.list failed for {mailbox}: {e!r}") from e

            pages.append(page)
            page_token = page.get("nextPageToken")
            if not page_token:
                break

        delta = to_history_delta(pages)
        if not delta.added:
            logger.info(f"No new history entries found for {mailbox}")
        else:
            logger.debug(f"history.list returned {len(delta.added)} added messages over {len(pages)} page(s)")
        return delta

    async def resolve(self, mailbox: str, message_id: str) -> FullMessage:
        url = f"{self._user_url(mailbox)}/messages/{quote(message_id, safe='')}"
        try:
            response = await self.caller.call(ApiRequest("GET", url, {"fields": self.message_fields}))
            return to_full_message(response.json())
        except (ApiError, httpx.HTTPError, ValueError, KeyError) as e:
            raise MessageFetchError(message_id, str(e) or type(e).__name__) from e
