"""
Operational routes: health, credential hand-off and cursor resynchronisation.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Header, HTTPException, Request
from loguru import logger
from pydantic import BaseModel, Field

from inboxwatch.infrastructure import get_settings

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    has_access_token: bool
    has_refresh_token: bool
    tracked_mailboxes: int


class CredentialsRequest(BaseModel):
    """Tokens delivered by the out-of-band OAuth consent flow."""

    access_token: str | None = Field(None, description="Short-lived bearer token")
    refresh_token: str | None = Field(None, description="Long-lived refresh token")


# ============================================================================
# Helpers
# ============================================================================


def _require_internal_secret(provided: str) -> None:
    expected = get_settings().internal_api_secret.get_secret_value()
    if not expected or provided != expected:
        logger.warning("Internal endpoint unauthorized attempt")
        raise HTTPException(status_code=401, detail="Unauthorized")


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness plus credential and cursor status."""
    credentials = request.app.state.credentials.get()
    return HealthResponse(
        status="healthy" if credentials.refresh_token or credentials.access_token else "needs_authorization",
        timestamp=datetime.now(timezone.utc).isoformat(),
        has_access_token=bool(credentials.access_token),
        has_refresh_token=bool(credentials.refresh_token),
        tracked_mailboxes=len(request.app.state.cursors.snapshot()),
    )


@router.post("/internal/credentials")
async def set_credentials(
    payload: CredentialsRequest,
    request: Request,
    x_internal_secret: str = Header(default="", alias="x-internal-secret"),
) -> dict:
    """Deliver tokens into the credential store (boundary of the consent flow)."""
    _require_internal_secret(x_internal_secret)
    if not payload.access_token and not payload.refresh_token:
        raise HTTPException(status_code=422, detail="access_token or refresh_token required")

    store = request.app.state.credentials
    if payload.access_token:
        store.set_access_token(payload.access_token)
    if payload.refresh_token:
        # Only replace the refresh token when a new one is provided
        store.set_refresh_token(payload.refresh_token)
    logger.info(
        f"Credentials delivered (access={'yes' if payload.access_token else 'no'}, "
        f"refresh={'yes' if payload.refresh_token else 'no'})"
    )
    return {"status": "stored"}


@router.get("/internal/cursors")
async def list_cursors(
    request: Request,
    x_internal_secret: str = Header(default="", alias="x-internal-secret"),
) -> dict[str, str]:
    """Dump the mailbox -> historyId table."""
    _require_internal_secret(x_internal_secret)
    return request.app.state.cursors.snapshot()


@router.delete("/internal/cursors/{mailbox}")
async def reset_cursor(
    mailbox: str,
    request: Request,
    x_internal_secret: str = Header(default="", alias="x-internal-secret"),
) -> dict:
    """Drop a mailbox cursor so the next notification bootstraps from its own historyId."""
    _require_internal_secret(x_internal_secret)
    if not request.app.state.cursors.delete(mailbox):
        raise HTTPException(status_code=404, detail=f"No cursor stored for {mailbox}")
    return {"status": "reset", "mailbox": mailbox}
