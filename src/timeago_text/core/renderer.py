"""Turn a classified period into the final phrase."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from timeago_text.core import periods as p
from timeago_text.messages.store import Messages


@dataclass(frozen=True)
class CountRule:
    """How a counting period derives the number it shows.

    ``singular_key`` replaces the plural phrase when the count is 1.
    ``rollover`` maps one specific count to a fixed phrase (24 hours -> one day).
    """

    divisor: int = 1
    singular_key: Optional[str] = None
    rollover: Optional[tuple[int, str]] = None

    def count(self, distance_minutes: int) -> int:
        return abs(p.round_half_up(distance_minutes / self.divisor))


COUNT_RULES: dict[str, CountRule] = {
    p.X_MINUTES_PAST.name: CountRule(),
    p.X_HOURS_PAST.name: CountRule(p.MINUTES_PER_HOUR, p.ABOUT_AN_HOUR_PAST.key),
    p.X_DAYS_PAST.name: CountRule(p.MINUTES_PER_DAY, p.ONE_DAY_PAST.key),
    p.X_WEEKS_PAST.name: CountRule(p.MINUTES_PER_WEEK, p.ONE_WEEK_PAST.key),
    p.X_MONTHS_PAST.name: CountRule(p.MINUTES_PER_MONTH, p.ABOUT_A_MONTH_PAST.key),
    p.X_YEARS_PAST.name: CountRule(p.MINUTES_PER_YEAR),
    p.X_MINUTES_FUTURE.name: CountRule(),
    p.X_HOURS_FUTURE.name: CountRule(
        p.MINUTES_PER_HOUR,
        p.ABOUT_AN_HOUR_FUTURE.key,
        rollover=(24, p.ONE_DAY_FUTURE.key),
    ),
    p.X_DAYS_FUTURE.name: CountRule(p.MINUTES_PER_DAY, p.ONE_DAY_FUTURE.key),
    p.X_MONTHS_FUTURE.name: CountRule(
        p.MINUTES_PER_MONTH,
        p.ABOUT_A_MONTH_FUTURE.key,
        rollover=(12, p.ABOUT_A_YEAR_FUTURE.key),
    ),
    p.X_YEARS_FUTURE.name: CountRule(p.MINUTES_PER_YEAR),
}


def render(period: Optional[p.Period], distance_minutes: int, messages: Messages) -> str:
    """Render the phrase for a period, or an empty string when there is none."""
    if period is None:
        return ""

    rule = COUNT_RULES.get(period.name)
    if rule is None:
        return messages.get(period.key)

    count = rule.count(distance_minutes)
    if rule.rollover is not None and count == rule.rollover[0]:
        return messages.get(rule.rollover[1])
    if count == 1 and rule.singular_key is not None:
        return messages.get(rule.singular_key)
    return messages.format(period.key, count)
