"""Gmail push endpoint: acknowledge Pub/Sub immediately, process in the background."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from inboxwatch.application.use_cases.process_notification import ProcessNotificationUseCase
from inboxwatch.domain.errors import (
    CredentialError,
    DecodeError,
    DeltaFetchError,
    MissingMailbox,
)
from inboxwatch.infrastructure.http.pubsub import decode_push_envelope


router = APIRouter()


# ============================================================================
# Background Task
# ============================================================================


async def process_push(use_case: ProcessNotificationUseCase, body: bytes) -> None:
    """Decode and process one push delivery. Never raises."""
    try:
        notification = decode_push_envelope(body)
        logger.info(f"Decoded Pub/Sub payload: {notification}")
        await use_case.run(notification)
    except (DecodeError, MissingMailbox) as e:
        logger.error(f"Dropping push notification: {e}")
    except CredentialError as e:
        logger.error(f"Credentials exhausted, re-authorization required: {e}")
    except DeltaFetchError as e:
        if e.cursor_expired:
            logger.error(f"{e}. Resync with DELETE /internal/cursors/{{mailbox}}")
        else:
            logger.error(f"Delta fetch failed, cursor not advanced: {e}")
    except Exception as e:
        logger.exception(f"Critical error processing webhook batch: {e}")


# ============================================================================
# Endpoint
# ============================================================================


@router.post("/webhook/gmail", response_class=PlainTextResponse)
async def gmail_webhook(request: Request, background_tasks: BackgroundTasks) -> str:
    """
    Receive a Gmail watch notification pushed by Pub/Sub.

    Always answers 200 "OK" before any processing so the push subscription
    never sees a processing failure; duplicate deliveries are expected.
    """
    logger.info("Gmail webhook received (Pub/Sub notification)")
    body = await request.body()
    background_tasks.add_task(process_push, request.app.state.notification_use_case, body)
    return "OK"
