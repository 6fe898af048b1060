from __future__ import annotations

import httpx
from loguru import logger

from inboxwatch.application.ports.credential_store import CredentialStore
from inboxwatch.domain.errors import NoRefreshCredential, RefreshFailed

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


class GoogleTokenRefresher:
    """
    Exchanges the held refresh token for a new access token.
    No retries here; callers decide whether to retry the outer operation.
    """

    def __init__(
        self,
        store: CredentialStore,
        http: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        token_url: str = GOOGLE_TOKEN_URL,
    ) -> None:
        self.store = store
        self.http = http
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url

    async def refresh(self) -> str:
        """Return a fresh access token, rotating the refresh token if one is issued."""
        refresh_token = self.store.get().refresh_token
        if not refresh_token:
            logger.error("No refresh token available to refresh access token")
            raise NoRefreshCredential("No refresh token held")

        logger.info("Attempting to refresh access token...")
        try:
            response = await self.http.post(
                self.token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "refresh_token": refresh_token,
                    "grant_type": "refresh_token",
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
            token_data = response.json()
            access_token = token_data["access_token"]
        except httpx.HTTPStatusError as e:
            logger.error(f"Error refreshing access token: HTTP {e.response.status_code} {e.response.text[:200]}")
            self.store.clear()
            raise RefreshFailed(f"Token endpoint returned {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"Error refreshing access token: {e!r}")
            self.store.clear()
            raise RefreshFailed(str(e) or type(e).__name__) from e

        self.store.set_access_token(access_token)
        logger.info("Access token refreshed successfully")

        # Google only sometimes rotates the refresh token
        if token_data.get("refresh_token"):
            self.store.set_refresh_token(token_data["refresh_token"])
            logger.info("Received and stored a new refresh token")

        return access_token
