"""Tests for the OAuth refresh-token exchange."""

import httpx
import pytest

from inboxwatch.domain.errors import NoRefreshCredential, RefreshFailed
from inboxwatch.infrastructure.gmail.auth import GoogleTokenRefresher
from inboxwatch.infrastructure.stores import InMemoryCredentialStore

TOKEN_URL = "https://oauth2.example.test/token"


def _refresher(store, handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleTokenRefresher(store, http, client_id="cid", client_secret="csecret", token_url=TOKEN_URL)


@pytest.mark.asyncio
async def test_refresh_stores_new_access_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"access_token": "new-access", "expires_in": 3599})

    store = InMemoryCredentialStore(access_token=None, refresh_token="refresh-1")
    token = await _refresher(store, handler).refresh()

    assert token == "new-access"
    assert store.get().access_token == "new-access"
    assert store.get().refresh_token == "refresh-1"
    assert len(seen) == 1
    body = seen[0].content
    assert b"grant_type=refresh_token" in body
    assert b"refresh_token=refresh-1" in body
    assert b"client_id=cid" in body
    assert seen[0].headers["content-type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_refresh_rotates_refresh_token_when_issued():
    def handler(request):
        return httpx.Response(200, json={"access_token": "a2", "refresh_token": "refresh-2"})

    store = InMemoryCredentialStore(refresh_token="refresh-1")
    await _refresher(store, handler).refresh()
    assert store.get().refresh_token == "refresh-2"


@pytest.mark.asyncio
async def test_no_refresh_token_makes_no_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"access_token": "x"})

    with pytest.raises(NoRefreshCredential):
        await _refresher(InMemoryCredentialStore(), handler).refresh()
    assert calls == []


@pytest.mark.asyncio
async def test_provider_rejection_clears_both_tokens():
    def handler(request):
        return httpx.Response(400, json={"error": "invalid_grant"})

    store = InMemoryCredentialStore(access_token="stale", refresh_token="revoked")
    with pytest.raises(RefreshFailed):
        await _refresher(store, handler).refresh()
    assert store.get().access_token is None
    assert store.get().refresh_token is None


@pytest.mark.asyncio
async def test_network_failure_clears_both_tokens():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = InMemoryCredentialStore(access_token="stale", refresh_token="refresh-1")
    with pytest.raises(RefreshFailed):
        await _refresher(store, handler).refresh()
    assert store.get().refresh_token is None
