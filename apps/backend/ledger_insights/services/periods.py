"""Resolution of report period tokens into concrete date ranges."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from ledger_insights.config import settings
from ledger_insights.logger import get_logger

logger = get_logger(__name__)

# Custom periods up to this many days are charted per day, up to
# WEEKLY_MAX_DAYS per week, and per month beyond that.
DAILY_MAX_DAYS = 31
WEEKLY_MAX_DAYS = 186


class InvalidPeriodError(ValueError):
    """Raised when a custom period request has missing or inverted bounds."""

    pass


class PeriodToken(str, Enum):
    """Named periods accepted by every report."""

    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    LAST_3_MONTHS = "last-3-months"
    LAST_6_MONTHS = "last-6-months"
    YEAR_TO_DATE = "year-to-date"
    LAST_YEAR = "last-year"
    ALL_TIME = "all-time"
    CUSTOM = "custom"


class Granularity(str, Enum):
    """Time-series bucket size."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class Period:
    """Inclusive date range with a display label."""

    start_date: date
    end_date: date
    label: str

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end_date - self.start_date).days + 1

    def as_dict(self) -> dict[str, object]:
        return {
            "start_date": self.start_date,
            "end_date": self.end_date,
            "label": self.label,
        }


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    return value.replace(day=calendar.monthrange(value.year, value.month)[1])


def add_months(value: date, months: int) -> date:
    year = value.year + (value.month - 1 + months) // 12
    month = (value.month - 1 + months) % 12 + 1
    day = min(value.day, month_end(date(year, month, 1)).day)
    return date(year, month, day)


def month_difference(start: date, end: date) -> int:
    """Count calendar months touched by ``start..end`` (both included)."""
    return (end.year - start.year) * 12 + end.month - start.month + 1


def day_count(period: Period) -> int:
    return max(0, period.days)


def month_label(value: date) -> str:
    return f"{calendar.month_name[value.month]} {value.year}"


def _short_day(value: date) -> str:
    return f"{calendar.month_abbr[value.month]} {value.day}, {value.year}"


def _range_label(start: date, end: date) -> str:
    return f"{_short_day(start)} - {_short_day(end)}"


def resolve(token: str | None, now: date) -> Period:
    """Resolve a named period relative to ``now``.

    Unrecognized tokens, and ``custom`` without bounds, resolve like
    ``this-month``.
    """
    today = _as_date(now)
    try:
        kind = PeriodToken(token)
    except ValueError:
        logger.debug("Unknown period token, using this-month", token=token)
        kind = PeriodToken.THIS_MONTH

    if kind in (PeriodToken.LAST_3_MONTHS, PeriodToken.LAST_6_MONTHS):
        months = 3 if kind == PeriodToken.LAST_3_MONTHS else 6
        start = add_months(month_start(today), -months)
        return Period(start, today, f"{calendar.month_name[start.month]} - {month_label(today)}")
    if kind == PeriodToken.LAST_MONTH:
        start = add_months(month_start(today), -1)
        return Period(start, month_end(start), month_label(start))
    if kind == PeriodToken.YEAR_TO_DATE:
        return Period(date(today.year, 1, 1), today, f"Jan - {month_label(today)}")
    if kind == PeriodToken.LAST_YEAR:
        year = today.year - 1
        return Period(date(year, 1, 1), date(year, 12, 31), str(year))
    if kind == PeriodToken.ALL_TIME:
        return Period(settings.all_time_start, today, "All Time")

    return Period(month_start(today), month_end(today), month_label(today))


def custom(start_date: date, end_date: date) -> Period:
    """Build a period from explicit caller-supplied bounds."""
    if start_date > end_date:
        raise InvalidPeriodError("start_date must not be after end_date")
    return Period(start_date, end_date, _range_label(start_date, end_date))


def resolve_request(
    token: str | None,
    now: date,
    start_date: date | None = None,
    end_date: date | None = None,
) -> Period:
    """Resolve the period of a report request.

    Explicit bounds are only honoured for ``custom``, where both are required.
    """
    if token == PeriodToken.CUSTOM.value:
        if start_date is None or end_date is None:
            raise InvalidPeriodError("start_date and end_date are required for a custom period")
        return custom(start_date, end_date)
    return resolve(token, now)


def previous(period: Period) -> Period:
    """Return the period of identical length that ends the day before ``period``.

    The range is clipped at ``date.min``. When no day precedes ``period`` the
    result is empty (its ``start_date`` is after its ``end_date``).
    """
    if period.start_date == date.min:
        start, end = date.min + timedelta(days=1), date.min
        return Period(start, end, _range_label(start, end))

    span = period.end_date - period.start_date
    end = period.start_date - timedelta(days=1)
    try:
        start = end - span
    except OverflowError:
        start = date.min
    return Period(start, end, _range_label(start, end))


def select_granularity(token: str | None, period: Period) -> Granularity:
    """Pick the chart granularity for a period."""
    if token in (PeriodToken.LAST_3_MONTHS.value, PeriodToken.LAST_6_MONTHS.value):
        return Granularity.WEEK
    if token == PeriodToken.CUSTOM.value:
        if period.days <= DAILY_MAX_DAYS:
            return Granularity.DAY
        if period.days <= WEEKLY_MAX_DAYS:
            return Granularity.WEEK
        return Granularity.MONTH
    if token in (PeriodToken.YEAR_TO_DATE.value, PeriodToken.LAST_YEAR.value, PeriodToken.ALL_TIME.value):
        return Granularity.MONTH
    # this-month, last-month and the unknown-token fallback are single months
    return Granularity.DAY
