"""Shared fixtures for timeago-text tests."""

import os

import pytest

from timeago_text.messages.store import build_messages, reset_default_messages
from timeago_text.utils.config import get_config

# 2023-11-14T22:13:20Z
NOW_MS = 1_700_000_000_000
MINUTE_MS = 60_000


def minutes_ago(minutes):
    """Instant that lies ``minutes`` before NOW_MS (negative = in the future)."""
    return NOW_MS - minutes * MINUTE_MS


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from user configuration and cached stores."""
    for name in ("TIMEAGO_TEXT_CONFIG_FILE", "TIMEAGO_TEXT_LOCALE", "TIMEAGO_TEXT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("TIMEAGO_TEXT__"):
            monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    reset_default_messages()
    yield
    get_config.cache_clear()
    reset_default_messages()


@pytest.fixture
def clock():
    return lambda: NOW_MS


@pytest.fixture
def english():
    return build_messages("en")
