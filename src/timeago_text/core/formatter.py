"""Public "time ago" entry points."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Callable, Optional, Union

from timeago_text.core.periods import classify, round_half_up
from timeago_text.core.renderer import render
from timeago_text.messages.store import Messages, default_messages

Instant = Union[int, float, datetime]
Clock = Callable[[], Union[int, float]]

MILLIS_PER_MINUTE = 60000


def current_millis() -> int:
    """Return the current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def to_millis(instant: Instant) -> float:
    """Convert an instant to milliseconds since the epoch."""
    if isinstance(instant, datetime):
        return instant.timestamp() * 1000
    return float(instant)


def elapsed_minutes(instant: Instant, now_ms: Union[int, float]) -> int:
    """Signed whole minutes from instant to now; negative when instant is ahead."""
    return round_half_up((now_ms - to_millis(instant)) / MILLIS_PER_MINUTE)


def format_time_ago(
    instant: Instant,
    messages: Optional[Messages] = None,
    *,
    clock: Optional[Clock] = None,
) -> str:
    """Return the localized phrase describing how long ago ``instant`` was.

    Args:
        instant: Epoch milliseconds or a datetime
        messages: Template store; defaults to the configured default store
        clock: Zero-argument callable returning "now" in epoch milliseconds

    Returns:
        The phrase, e.g. "about an hour ago" or "in 3 days"
    """
    now_ms = (clock or current_millis)()
    distance = elapsed_minutes(instant, now_ms)
    if messages is None:
        messages = default_messages()
    return render(classify(distance), distance, messages)
