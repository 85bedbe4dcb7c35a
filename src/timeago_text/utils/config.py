"""Settings for timeago-text, read from YAML and the environment.

Precedence, lowest first: the packaged ``config.yaml``, the file named by
``TIMEAGO_TEXT_CONFIG_FILE``, then ``TIMEAGO_TEXT__<SECTION>__<KEY>``
variables (and the short aliases below). Variables from a ``.env`` file are
loaded on import. Unknown sections and keys are ignored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

CONFIG_ENV_VAR = "TIMEAGO_TEXT_CONFIG_FILE"
DEFAULT_CONFIG_NAME = "config.yaml"
ENV_PREFIX = "TIMEAGO_TEXT__"
PACKAGE_ROOT = "timeago_text"

ENVIRONMENT_ALIASES: dict[str, tuple[str, str]] = {
    "TIMEAGO_TEXT_LOCALE": ("messages", "locale"),
    "TIMEAGO_TEXT_LOG_LEVEL": ("logging", "level"),
}


@dataclass(frozen=True)
class MessagesSettings:
    locale: str = "en"
    fallback_locale: str = "en"
    search_path: tuple[str, ...] = ()


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "WARNING"
    log_dir: Optional[Path] = None


@dataclass(frozen=True)
class Settings:
    messages: MessagesSettings = field(default_factory=MessagesSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


SECTIONS: dict[str, type] = {
    "messages": MessagesSettings,
    "logging": LoggingSettings,
}
KNOWN_KEYS: set[tuple[str, str]] = {
    (section, name)
    for section, settings_type in SECTIONS.items()
    for name in settings_type.__dataclass_fields__
}


def _read_yaml(handle: Any) -> dict[str, Any]:
    data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError("configuration must be a YAML mapping")
    return data


def _file_sources(path_override: str | Path | None) -> list[dict[str, Any]]:
    config_resource = resources.files(PACKAGE_ROOT).joinpath(DEFAULT_CONFIG_NAME)
    with config_resource.open("r", encoding="utf-8") as handle:
        sources = [_read_yaml(handle)]
    if path_override:
        config_path = Path(path_override).expanduser().resolve()
        with config_path.open("r", encoding="utf-8") as handle:
            sources.append(_read_yaml(handle))
    return sources


def _coerce_env_value(raw_value: str) -> Any:
    try:
        return yaml.safe_load(raw_value)
    except yaml.YAMLError:
        return raw_value


def _env_key_path(key: str) -> tuple[str, ...] | None:
    if key in ENVIRONMENT_ALIASES:
        return ENVIRONMENT_ALIASES[key]
    if not key.startswith(ENV_PREFIX):
        return None
    return tuple(part.lower() for part in key[len(ENV_PREFIX) :].split("__") if part)


def _collect_values(path_override: str | Path | None) -> dict[tuple[str, str], Any]:
    """Flatten every source into ``(section, key) -> value``, later sources winning."""
    values: dict[tuple[str, str], Any] = {}
    for source in _file_sources(path_override):
        for section in SECTIONS:
            for name, value in (source.get(section) or {}).items():
                if (section, name) in KNOWN_KEYS:
                    values[(section, name)] = value

    for env_key, raw_value in os.environ.items():
        path = _env_key_path(env_key)
        if path in KNOWN_KEYS:
            values[path] = _coerce_env_value(raw_value)
    return values


def _as_search_path(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, (str, Path)):
        value = [value]
    return tuple(str(Path(str(entry)).expanduser()) for entry in value)


def _build_settings(values: dict[tuple[str, str], Any]) -> Settings:
    log_dir = values.get(("logging", "log_dir"))
    return Settings(
        messages=MessagesSettings(
            locale=str(values.get(("messages", "locale")) or MessagesSettings.locale),
            fallback_locale=str(values.get(("messages", "fallback_locale")) or MessagesSettings.fallback_locale),
            search_path=_as_search_path(values.get(("messages", "search_path"))),
        ),
        logging=LoggingSettings(
            level=str(values.get(("logging", "level")) or LoggingSettings.level),
            log_dir=Path(str(log_dir)).expanduser() if log_dir else None,
        ),
    )


@lru_cache(maxsize=4)
def get_config(config_path: str | Path | None = None) -> Settings:
    """Load settings, applying the override file and environment variables."""
    path_override = config_path or os.environ.get(CONFIG_ENV_VAR)
    return _build_settings(_collect_values(path_override))


__all__ = ["LoggingSettings", "MessagesSettings", "Settings", "get_config"]
