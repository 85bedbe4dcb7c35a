"""Locale-scoped message template stores.

Bundles live as ``<locale>.yaml`` files, either packaged under
``timeago_text/messages/locales`` or in extra directories supplied through the
``messages.search_path`` setting. A bundle is a nested mapping whose leaves
are templates; nesting is flattened into dotted keys (``x_days.past``).

A :class:`Messages` store is immutable once built. Lookups of unknown keys
return the key itself, and substitution failures return the raw template.
"""

from __future__ import annotations

import threading
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence

import yaml

from timeago_text.monitoring.logging import get_logger
from timeago_text.utils.config import get_config
from timeago_text.utils.exceptions import MessageBundleError, MessageBundleNotFound

logger = get_logger(__name__)

DEFAULT_LOCALE = "en"
BUNDLE_SUFFIX = ".yaml"

_default_lock = threading.Lock()
_default_messages: Optional["Messages"] = None


class Messages:
    """Read-only mapping from template key to message template."""

    def __init__(self, templates: Mapping[str, str], locale: str = DEFAULT_LOCALE):
        self._templates = MappingProxyType(dict(templates))
        self.locale = locale

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"Messages(locale={self.locale!r}, keys={len(self._templates)})"

    def keys(self) -> Iterable[str]:
        return self._templates.keys()

    def get(self, key: str) -> str:
        """Return the template for key, or the key itself when it is missing."""
        template = self._templates.get(key)
        if template is None:
            logger.debug("messages.key.missing", key=key, locale=self.locale)
            return key
        return template

    def format(self, key: str, *args: Any) -> str:
        """Return the template for key with args substituted positionally."""
        template = self.get(key)
        try:
            return template.format(*args)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            logger.debug("messages.format.failed", key=key, locale=self.locale, error=str(exc))
            return template


def normalize_locale(tag: str) -> str:
    """Normalize a language tag such as ``zh-tw`` or ``pt_BR`` to ``zh_TW``/``pt_BR``."""
    parts = [part for part in tag.strip().replace("-", "_").split("_") if part]
    if not parts:
        return ""
    language = parts[0].lower()
    if len(parts) == 1:
        return language
    return "_".join([language] + [part.upper() for part in parts[1:]])


def locale_candidates(tag: str) -> list[str]:
    """Return lookup candidates from most to least specific (``pt_BR`` -> ``pt``)."""
    normalized = normalize_locale(tag)
    if not normalized:
        return []
    parts = normalized.split("_")
    return ["_".join(parts[:size]) for size in range(len(parts), 0, -1)]


def _flatten(tree: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in tree.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, dotted))
        elif value is not None:
            flat[dotted] = str(value)
    return flat


def _read_bundle(locale: str, source: Any) -> Mapping[str, str]:
    try:
        with source.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as exc:
        raise MessageBundleError(locale, str(exc)) from exc
    if not isinstance(data, Mapping):
        raise MessageBundleError(locale, "top level must be a mapping")
    return MappingProxyType(_flatten(data))


def _bundle_sources(locale: str, search_path: Sequence[str]) -> list[Any]:
    file_name = f"{locale}{BUNDLE_SUFFIX}"
    sources: list[Any] = [Path(directory).expanduser() / file_name for directory in search_path]
    sources.append(resources.files(__package__).joinpath("locales").joinpath(file_name))
    return sources


@lru_cache(maxsize=64)
def load_bundle(locale: str, search_path: tuple[str, ...] = ()) -> Mapping[str, str]:
    """Load the flattened templates for exactly one locale.

    Raises:
        MessageBundleNotFound: no bundle file exists for the locale
        MessageBundleError: the bundle file is unreadable or not a YAML mapping
    """
    normalized = normalize_locale(locale)
    sources = _bundle_sources(normalized, search_path) if normalized else []
    for source in sources:
        if source.is_file():
            templates = _read_bundle(normalized, source)
            logger.debug("messages.bundle.loaded", locale=normalized, source=str(source), keys=len(templates))
            return templates
    raise MessageBundleNotFound(normalized or locale, [str(source) for source in sources])


def available_locales(search_path: Sequence[str] = ()) -> list[str]:
    """List locales with a bundle in the search path or the packaged locales."""
    found: set[str] = set()
    for directory in search_path:
        path = Path(directory).expanduser()
        if path.is_dir():
            found.update(item.stem for item in path.glob(f"*{BUNDLE_SUFFIX}"))
    packaged = resources.files(__package__).joinpath("locales")
    found.update(
        item.name[: -len(BUNDLE_SUFFIX)]
        for item in packaged.iterdir()
        if item.name.endswith(BUNDLE_SUFFIX)
    )
    return sorted(found)


def _resolve_templates(tag: str, search_path: tuple[str, ...]) -> tuple[Optional[str], dict[str, str]]:
    """Merge a locale's bundles, general first so regional entries win."""
    merged: dict[str, str] = {}
    resolved: Optional[str] = None
    for candidate in reversed(locale_candidates(tag)):
        try:
            merged.update(load_bundle(candidate, search_path))
        except MessageBundleNotFound:
            continue
        except MessageBundleError as exc:
            logger.warning("messages.bundle.invalid", locale=candidate, reason=exc.reason)
            continue
        resolved = candidate
    return resolved, merged


def build_messages(
    locale: Optional[str] = None,
    fallback_locale: Optional[str] = None,
    templates: Optional[Mapping[str, str]] = None,
    search_path: Optional[Iterable[str]] = None,
) -> Messages:
    """Build a store bound to a locale.

    Keys missing from ``locale`` come from ``fallback_locale``; an unsupported
    locale silently uses the fallback bundle. ``templates`` entries override
    everything loaded from files.
    """
    settings = get_config().messages
    requested = locale or settings.locale or DEFAULT_LOCALE
    fallback = fallback_locale or settings.fallback_locale or DEFAULT_LOCALE
    if search_path is None:
        search_path = settings.search_path or ()
    if isinstance(search_path, (str, Path)):
        search_path = [search_path]
    paths = tuple(str(entry) for entry in search_path)

    fallback_resolved, merged = _resolve_templates(fallback, paths)
    if fallback_resolved is None and normalize_locale(fallback) != DEFAULT_LOCALE:
        logger.warning("messages.fallback.unavailable", locale=fallback, using=DEFAULT_LOCALE)
        fallback_resolved, merged = _resolve_templates(DEFAULT_LOCALE, paths)

    resolved, overlay = _resolve_templates(requested, paths)
    if resolved is None:
        logger.debug("messages.locale.fallback", locale=requested, fallback=fallback_resolved)
    merged.update(overlay)

    if templates:
        merged.update(templates)
    return Messages(merged, locale=resolved or fallback_resolved or normalize_locale(requested))


class MessagesBuilder:
    """Fluent construction of a :class:`Messages` store.

    Example::

        messages = MessagesBuilder.start().with_locale("es").build()
    """

    def __init__(self) -> None:
        self._locale: Optional[str] = None
        self._fallback: Optional[str] = None
        self._templates: dict[str, str] = {}
        self._search_path: Optional[list[str]] = None

    @classmethod
    def start(cls) -> "MessagesBuilder":
        return cls()

    def default_locale(self) -> "MessagesBuilder":
        self._locale = None
        return self

    def with_locale(self, locale: str) -> "MessagesBuilder":
        self._locale = locale
        return self

    def with_fallback(self, locale: str) -> "MessagesBuilder":
        self._fallback = locale
        return self

    def with_templates(self, templates: Mapping[str, str]) -> "MessagesBuilder":
        self._templates.update(templates)
        return self

    def with_search_path(self, *directories: str | Path) -> "MessagesBuilder":
        self._search_path = [str(directory) for directory in directories]
        return self

    def build(self) -> Messages:
        return build_messages(
            locale=self._locale,
            fallback_locale=self._fallback,
            templates=self._templates,
            search_path=self._search_path,
        )


def default_messages() -> Messages:
    """Return the process-wide store built from configuration, creating it once."""
    global _default_messages
    if _default_messages is None:
        with _default_lock:
            if _default_messages is None:
                _default_messages = build_messages()
    return _default_messages


def reset_default_messages() -> None:
    """Drop the cached default store and loaded bundles."""
    global _default_messages
    with _default_lock:
        _default_messages = None
    load_bundle.cache_clear()
