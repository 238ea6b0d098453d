"""Calendar arithmetic used to lay out contract periods."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

ONE_DAY = timedelta(days=1)


def add_years(start: date, years: int) -> date:
    """Advance ``start`` by whole calendar years.

    The year field is incremented, so period boundaries stay on the same
    month/day across leap years. Feb 29 lands on Mar 1 when the target
    year has no leap day.
    """
    target_year = start.year + years
    if start.month == 2 and start.day == 29 and not calendar.isleap(target_year):
        return date(target_year, 3, 1)
    return start.replace(year=target_year)


def day_before(value: date) -> date:
    return value - ONE_DAY


def day_after(value: date) -> date:
    return value + ONE_DAY


def fits_calendar(start: date, years: int) -> bool:
    """True when ``start`` advanced by ``years`` is still a representable date."""
    return start.year + years <= date.max.year
