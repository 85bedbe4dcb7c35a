"""timeago-text - localized "time ago" phrases"""

from timeago_text.core.formatter import elapsed_minutes, format_time_ago
from timeago_text.core.periods import PERIODS, Period, classify
from timeago_text.core.renderer import render
from timeago_text.messages.store import (
    Messages,
    MessagesBuilder,
    build_messages,
    default_messages,
)
from timeago_text.utils.exceptions import TimeagoTextError

__version__ = "0.1.0"

__all__ = [
    "format_time_ago",
    "elapsed_minutes",
    "classify",
    "render",
    "Period",
    "PERIODS",
    "Messages",
    "MessagesBuilder",
    "build_messages",
    "default_messages",
    "TimeagoTextError",
]
