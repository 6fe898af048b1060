"""Application layer - marker detection and notification processing."""

from inboxwatch.application.markers import extract_marker
from inboxwatch.application.use_cases.process_notification import ProcessNotificationUseCase

__all__ = [
    "ProcessNotificationUseCase",
    "extract_marker",
]
