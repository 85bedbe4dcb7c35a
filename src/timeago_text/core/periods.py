"""Time-distance periods and the classifier that picks one.

Each period pairs a template key with a predicate over the signed distance in
minutes (positive = past, negative = future). ``PERIODS`` is evaluated in
order and the first match wins, so the open-ended year periods come after all
bounded ones.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1440
MINUTES_PER_WEEK = 10080
MINUTES_PER_MONTH = 43200
MINUTES_PER_YEAR = 525600


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity (-1.5 -> -1)."""
    return math.floor(value + 0.5)


def _between(low: int, high: int) -> Callable[[int], bool]:
    return lambda distance: low <= distance <= high


@dataclass(frozen=True)
class Period:
    """A named bucket of distances sharing one phrase."""

    name: str
    key: str
    matches: Callable[[int], bool]

    @property
    def is_future(self) -> bool:
        return self.key.endswith(".future")


NOW = Period("NOW", "now", lambda distance: distance == 0)

ONE_MINUTE_PAST = Period("ONE_MINUTE_PAST", "one_minute.past", lambda distance: distance == 1)
X_MINUTES_PAST = Period("X_MINUTES_PAST", "x_minutes.past", _between(2, 44))
ABOUT_AN_HOUR_PAST = Period("ABOUT_AN_HOUR_PAST", "about_an_hour.past", _between(45, 89))
X_HOURS_PAST = Period("X_HOURS_PAST", "x_hours.past", _between(90, 1439))
ONE_DAY_PAST = Period("ONE_DAY_PAST", "one_day.past", _between(1440, 2519))
X_DAYS_PAST = Period("X_DAYS_PAST", "x_days.past", _between(2520, 10079))
ONE_WEEK_PAST = Period("ONE_WEEK_PAST", "one_week.past", _between(10080, 20159))
X_WEEKS_PAST = Period("X_WEEKS_PAST", "x_weeks.past", _between(20160, 43199))
ABOUT_A_MONTH_PAST = Period("ABOUT_A_MONTH_PAST", "about_a_month.past", _between(43200, 86399))
X_MONTHS_PAST = Period("X_MONTHS_PAST", "x_months.past", _between(86400, 525599))
ABOUT_A_YEAR_PAST = Period("ABOUT_A_YEAR_PAST", "about_a_year.past", _between(525600, 655199))
OVER_A_YEAR_PAST = Period("OVER_A_YEAR_PAST", "over_a_year.past", _between(655200, 914399))
ALMOST_TWO_YEARS_PAST = Period("ALMOST_TWO_YEARS_PAST", "almost_two_years.past", _between(914400, 1051199))
X_YEARS_PAST = Period(
    "X_YEARS_PAST",
    "x_years.past",
    lambda distance: round_half_up(distance / MINUTES_PER_YEAR) > 1,
)

# No week periods on the future side: -2520..-43199 all render as days.
ONE_MINUTE_FUTURE = Period("ONE_MINUTE_FUTURE", "one_minute.future", lambda distance: distance == -1)
X_MINUTES_FUTURE = Period("X_MINUTES_FUTURE", "x_minutes.future", _between(-44, -2))
ABOUT_AN_HOUR_FUTURE = Period("ABOUT_AN_HOUR_FUTURE", "about_an_hour.future", _between(-89, -45))
X_HOURS_FUTURE = Period("X_HOURS_FUTURE", "x_hours.future", _between(-1439, -90))
ONE_DAY_FUTURE = Period("ONE_DAY_FUTURE", "one_day.future", _between(-2519, -1440))
X_DAYS_FUTURE = Period("X_DAYS_FUTURE", "x_days.future", _between(-43199, -2520))
ABOUT_A_MONTH_FUTURE = Period("ABOUT_A_MONTH_FUTURE", "about_a_month.future", _between(-86399, -43200))
X_MONTHS_FUTURE = Period("X_MONTHS_FUTURE", "x_months.future", _between(-525599, -86400))
ABOUT_A_YEAR_FUTURE = Period("ABOUT_A_YEAR_FUTURE", "about_a_year.future", _between(-655199, -525600))
OVER_A_YEAR_FUTURE = Period("OVER_A_YEAR_FUTURE", "over_a_year.future", _between(-914399, -655200))
ALMOST_TWO_YEARS_FUTURE = Period("ALMOST_TWO_YEARS_FUTURE", "almost_two_years.future", _between(-1051199, -914400))
X_YEARS_FUTURE = Period(
    "X_YEARS_FUTURE",
    "x_years.future",
    lambda distance: round_half_up(distance / MINUTES_PER_YEAR) < -1,
)

PERIODS: tuple[Period, ...] = (
    NOW,
    ONE_MINUTE_PAST,
    X_MINUTES_PAST,
    ABOUT_AN_HOUR_PAST,
    X_HOURS_PAST,
    ONE_DAY_PAST,
    X_DAYS_PAST,
    ONE_WEEK_PAST,
    X_WEEKS_PAST,
    ABOUT_A_MONTH_PAST,
    X_MONTHS_PAST,
    ABOUT_A_YEAR_PAST,
    OVER_A_YEAR_PAST,
    ALMOST_TWO_YEARS_PAST,
    X_YEARS_PAST,
    ONE_MINUTE_FUTURE,
    X_MINUTES_FUTURE,
    ABOUT_AN_HOUR_FUTURE,
    X_HOURS_FUTURE,
    ONE_DAY_FUTURE,
    X_DAYS_FUTURE,
    ABOUT_A_MONTH_FUTURE,
    X_MONTHS_FUTURE,
    ABOUT_A_YEAR_FUTURE,
    OVER_A_YEAR_FUTURE,
    ALMOST_TWO_YEARS_FUTURE,
    X_YEARS_FUTURE,
)

PERIODS_BY_NAME: dict[str, Period] = {period.name: period for period in PERIODS}


def classify(distance_minutes: int) -> Optional[Period]:
    """Return the first period whose range contains the distance."""
    for period in PERIODS:
        if period.matches(distance_minutes):
            return period
    return None
