"""Period classification and phrase rendering - the heart of timeago-text."""

from timeago_text.core.formatter import current_millis, elapsed_minutes, format_time_ago
from timeago_text.core.periods import PERIODS, Period, classify
from timeago_text.core.renderer import render

__all__ = [
    "PERIODS",
    "Period",
    "classify",
    "current_millis",
    "elapsed_minutes",
    "format_time_ago",
    "render",
]
