"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from loguru import logger

from inboxwatch.infrastructure import (
    build_notification_use_case,
    get_credential_store,
    get_cursor_store,
    get_settings,
)
from inboxwatch.infrastructure.wiring import configure_logging, seed_credentials


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    credentials = get_credential_store()
    cursors = get_cursor_store()
    seed_credentials(credentials, settings)

    http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    app.state.credentials = credentials
    app.state.cursors = cursors
    app.state.notification_use_case = build_notification_use_case(settings, http, credentials, cursors)

    yield

    # Cleanup on shutdown
    logger.info("Shutting down...")
    await http.aclose()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Gmail push consumer with incremental history sync and marker detection",
        lifespan=lifespan,
    )

    # Register routes
    from inboxwatch.api.routes import router
    from inboxwatch.infrastructure.http.gmail_webhook import router as gmail_router

    app.include_router(router)
    app.include_router(gmail_router)

    return app


# Create app instance
app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
