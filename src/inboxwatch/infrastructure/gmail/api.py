"""Authorized Gmail API calls with a single refresh-and-retry on 401."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx
from loguru import logger

from inboxwatch.application.ports.credential_store import CredentialStore
from inboxwatch.domain.errors import ApiError, CredentialError, NoCredential
from inboxwatch.infrastructure.gmail.auth import GoogleTokenRefresher


@dataclass(frozen=True)
class ApiRequest:
    method: str
    url: str
    params: Mapping[str, Any] = field(default_factory=dict)


class ResilientApiCaller:
    """
    Wraps every mailbox API call.

    Guarantees at most one token refresh and at most one retried request per
    call. Non-401 failures propagate without touching credentials.
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        http: httpx.AsyncClient,
        store: CredentialStore,
        refresher: GoogleTokenRefresher,
    ) -> None:
        self.http = http
        self.store = store
        self.refresher = refresher

    async def call(self, request: ApiRequest) -> httpx.Response:
        refreshed = False
        if not self.store.get().access_token:
            logger.info("No current access token, trying to refresh...")
            try:
                await self.refresher.refresh()
            except CredentialError as e:
                raise NoCredential("Failed to obtain access token after refresh attempt") from e
            refreshed = True

        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            response = await self._send(request)
            if response.status_code != 401:
                break

            # Never reuse a token the service has rejected
            self.store.set_access_token(None)
            if refreshed or attempt == self.MAX_ATTEMPTS:
                logger.error(f"{request.method} {request.url} still unauthorized after token refresh")
                break

            logger.info("Received 401, attempting token refresh and retry...")
            await self.refresher.refresh()
            refreshed = True

        if response.is_error:
            raise ApiError(response.status_code, response.text)
        return response

    async def _send(self, request: ApiRequest) -> httpx.Response:
        token = self.store.get().access_token
        if not token:
            raise NoCredential("No access token held")
        return await self.http.request(
            request.method,
            request.url,
            params=dict(request.params),
            headers={"Authorization": f"Bearer {token}"},
        )
