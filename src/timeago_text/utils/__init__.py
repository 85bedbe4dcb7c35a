"""Utility functions and helpers."""

from .config import LoggingSettings, MessagesSettings, Settings, get_config
from .exceptions import MessageBundleError, MessageBundleNotFound, TimeagoTextError

__all__ = [
    "LoggingSettings",
    "MessagesSettings",
    "Settings",
    "get_config",
    "MessageBundleError",
    "MessageBundleNotFound",
    "TimeagoTextError",
]
