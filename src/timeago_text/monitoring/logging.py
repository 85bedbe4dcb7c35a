"""Structured logging for timeago-text.

Events are structlog event dicts (``messages.bundle.loaded``) routed through
the standard ``timeago_text`` logger. Handlers are attached when the first
event is emitted, using ``logging.level`` and ``logging.log_dir`` from the
settings at that moment, so importing the package never reads configuration.
The host application's root logger is not touched.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml
from rich.console import Console
from rich.logging import RichHandler

from timeago_text.utils.config import LoggingSettings, get_config

__all__ = [
    "PACKAGE_LOGGER",
    "configure_logging",
    "get_logger",
]

PACKAGE_LOGGER = "timeago_text"

_CONFIGURED = False
_STRUCTLOG_READY = False
_lock = threading.Lock()

# Keys the console handler already shows on its own
_CONSOLE_HIDDEN = ("timestamp", "level", "logger")


def _shared_processors() -> list[Any]:
    return [
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        structlog.processors.format_exc_info,
    ]


def _render_console(logger: Any, name: str, event_dict: Dict[str, Any]) -> str:
    """Render ``event key=value ...``; RichHandler adds time and level."""
    event = event_dict.pop("event", "")
    pairs = " ".join(
        f"{key}={value!r}" if isinstance(value, str) and " " in value else f"{key}={value}"
        for key, value in sorted(event_dict.items())
        if key not in _CONSOLE_HIDDEN and not key.startswith("_")
    )
    return f"{event} {pairs}" if pairs else str(event)


def _console_handler(level: str) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True, soft_wrap=True),
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_render_console,
            foreign_pre_chain=_shared_processors(),
        )
    )
    return handler


def _file_handler(level: str, directory: Path | str) -> logging.Handler:
    path = Path(directory).expanduser().resolve()
    path.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path / f"{datetime.now():%Y%m%d}.log", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_shared_processors(),
        )
    )
    return handler


def configure_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path | str] = None,
) -> None:
    """Attach console (+ optional JSONL file) handlers once per process."""
    global _CONFIGURED
    with _lock:
        if _CONFIGURED:
            return

        try:
            settings = get_config().logging
        except (OSError, ValueError, yaml.YAMLError):
            settings = LoggingSettings()
        resolved_level = str(level or settings.level).upper()
        directory = log_dir or settings.log_dir

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(resolved_level)
        package_logger.propagate = False
        package_logger.addHandler(_console_handler(resolved_level))
        if directory:
            package_logger.addHandler(_file_handler(resolved_level, directory))

        _CONFIGURED = True


def _configure_on_first_event(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    if not _CONFIGURED:
        configure_logging()
    return event_dict


def get_logger(name: Optional[str] = None, **context: Any) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the given name and context."""
    global _STRUCTLOG_READY
    if not _STRUCTLOG_READY:
        structlog.configure(
            processors=[_configure_on_first_event] + _shared_processors() + [
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        _STRUCTLOG_READY = True
    base = structlog.get_logger(name or PACKAGE_LOGGER)
    if context:
        return base.bind(**context)
    return base
