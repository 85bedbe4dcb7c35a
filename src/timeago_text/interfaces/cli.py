"""Command line interface: print the phrase for a timestamp."""

from __future__ import annotations

import argparse
import math
import sys
from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console

from timeago_text.core.formatter import Instant, format_time_ago, to_millis
from timeago_text.messages.store import available_locales, build_messages

console = Console()


def parse_instant(value: str) -> Instant:
    """Accept epoch milliseconds or an ISO-8601 datetime."""
    try:
        number = float(value)
    except ValueError:
        pass
    else:
        if not math.isfinite(number):
            raise argparse.ArgumentTypeError(f"'{value}' is not a finite number of milliseconds")
        return number
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"'{value}' is neither epoch milliseconds nor an ISO-8601 datetime"
        ) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeago-text",
        description="Describe a timestamp as a localized 'time ago' phrase.",
    )
    parser.add_argument("instant", nargs="?", type=parse_instant,
                        help="Epoch milliseconds or ISO-8601 datetime")
    parser.add_argument("--locale", "-l", help="Locale tag, e.g. es or pt-BR (default from config)")
    parser.add_argument("--fallback", help="Locale used for missing templates")
    parser.add_argument("--now", type=parse_instant,
                        help="Treat this instant as 'now' instead of the system clock")
    parser.add_argument("--list-locales", action="store_true", help="List bundled locales and exit")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_locales:
        for locale in available_locales():
            console.print(locale)
        return 0

    if args.instant is None:
        parser.error("the following arguments are required: instant")

    clock = None
    if args.now is not None:
        now_ms = to_millis(args.now)
        clock = lambda: now_ms  # noqa: E731

    messages = build_messages(locale=args.locale, fallback_locale=args.fallback)
    console.print(format_time_ago(args.instant, messages, clock=clock), markup=False, highlight=False)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
