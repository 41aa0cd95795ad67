"""Adapters connecting the find & replace feature to infrastructure."""

from .content_store import HttpContentStoreGateway
from .notifier import LoggingNotifier

__all__ = ["HttpContentStoreGateway", "LoggingNotifier"]
