"""Inboxwatch - Gmail push-notification consumer with incremental history sync."""

__version__ = "0.1.0"
