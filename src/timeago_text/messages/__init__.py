"""Localized message templates."""

from .store import (
    DEFAULT_LOCALE,
    Messages,
    MessagesBuilder,
    available_locales,
    build_messages,
    default_messages,
    load_bundle,
    reset_default_messages,
)

__all__ = [
    "DEFAULT_LOCALE",
    "Messages",
    "MessagesBuilder",
    "available_locales",
    "build_messages",
    "default_messages",
    "load_bundle",
    "reset_default_messages",
]
