"""Assemble the Gmail pipeline from settings."""

from __future__ import annotations

import sys

import httpx
from loguru import logger

from inboxwatch.application.ports.credential_store import CredentialStore
from inboxwatch.application.ports.cursor_store import CursorStore
from inboxwatch.application.use_cases.process_notification import ProcessNotificationUseCase
from inboxwatch.infrastructure.gmail import GmailMailboxSource, GoogleTokenRefresher, ResilientApiCaller
from inboxwatch.infrastructure.settings import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)


def seed_credentials(store: CredentialStore, settings: Settings) -> None:
    """Load tokens handed over by the out-of-band consent flow."""
    if settings.google_access_token:
        store.set_access_token(settings.google_access_token.get_secret_value())
    if settings.google_refresh_token:
        store.set_refresh_token(settings.google_refresh_token.get_secret_value())
        logger.info("Seeded refresh token from settings")
    if not store.get().refresh_token:
        logger.warning("No refresh token configured; deliver one via POST /internal/credentials")


def build_notification_use_case(
    settings: Settings,
    http: httpx.AsyncClient,
    credentials: CredentialStore,
    cursors: CursorStore,
) -> ProcessNotificationUseCase:
    refresher = GoogleTokenRefresher(
        store=credentials,
        http=http,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret.get_secret_value(),
        token_url=settings.google_token_url,
    )
    caller = ResilientApiCaller(http=http, store=credentials, refresher=refresher)
    source = GmailMailboxSource(
        caller,
        base_url=settings.gmail_api_base_url,
        message_fields=settings.gmail_message_fields,
    )
    return ProcessNotificationUseCase(
        source=source,
        cursors=cursors,
        marker_prefix=settings.marker_prefix,
        alert_labels=settings.alert_labels,
    )
