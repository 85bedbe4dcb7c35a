"""Custom exceptions for timeago-text"""

from typing import Optional


class TimeagoTextError(Exception):
    """Base class for errors raised by timeago-text"""


class MessageBundleNotFound(TimeagoTextError):
    """Raised when no message bundle exists for a locale"""

    def __init__(self, locale: str, searched: Optional[list] = None):
        """Initialize MessageBundleNotFound

        Args:
            locale: Normalized locale tag that was requested
            searched: Locations that were checked for the bundle
        """
        super().__init__(f"No message bundle for locale '{locale}'")
        self.locale = locale
        self.searched = searched or []


class MessageBundleError(TimeagoTextError):
    """Raised when a message bundle exists but cannot be used"""

    def __init__(self, locale: str, reason: str):
        super().__init__(f"Invalid message bundle for locale '{locale}': {reason}")
        self.locale = locale
        self.reason = reason
