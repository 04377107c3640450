"""Gap-filled income/expense time series."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from ledger_insights.services.gateway import TransactionRow
from ledger_insights.services.metrics import quantize_money
from ledger_insights.services.periods import (
    Granularity,
    Period,
    month_difference,
    month_end,
    month_start,
)


@dataclass
class Bucket:
    label: str
    start: date
    end: date
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")


def week_label(value: date) -> str:
    """Label a week bucket by its first day: ``YYYY-MM-W<ISO week>``."""
    return f"{value.year:04d}-{value.month:02d}-W{value.isocalendar()[1]}"


def _iter_buckets(period: Period, granularity: Granularity) -> list[Bucket]:
    buckets: list[Bucket] = []
    cursor = period.start_date
    end = period.end_date

    while cursor <= end:
        if granularity == Granularity.DAY:
            bucket = Bucket(label=cursor.isoformat(), start=cursor, end=cursor)
        elif granularity == Granularity.WEEK:
            last = end if (end - cursor).days < 7 else cursor + timedelta(days=6)
            bucket = Bucket(label=week_label(cursor), start=cursor, end=last)
        else:
            label = f"{cursor.year:04d}-{cursor.month:02d}"
            bucket = Bucket(label=label, start=cursor, end=min(month_end(cursor), end))
        buckets.append(bucket)
        # stepping past date.max would overflow
        if bucket.end >= end:
            break
        cursor = bucket.end + timedelta(days=1)

    return buckets


def _bucket_index(value: date, period: Period, granularity: Granularity) -> int:
    if granularity == Granularity.DAY:
        return (value - period.start_date).days
    if granularity == Granularity.WEEK:
        return (value - period.start_date).days // 7
    return month_difference(period.start_date, value) - 1


def build_series(
    period: Period,
    granularity: Granularity | str,
    rows: Iterable[TransactionRow],
) -> list[Bucket]:
    """Fold transactions into one bucket per time unit of ``period``.

    Every bucket is present even without activity. Rows dated outside the
    period are ignored. An inverted period yields an empty series.
    """
    granularity = Granularity(granularity)
    buckets = _iter_buckets(period, granularity)

    for row in rows:
        if row.date < period.start_date or row.date > period.end_date:
            continue
        bucket = buckets[_bucket_index(row.date, period, granularity)]
        if row.amount > 0:
            bucket.income += row.amount
        elif row.amount < 0:
            bucket.expenses += -row.amount

    return buckets


def series_payload(buckets: list[Bucket]) -> dict[str, list]:
    """Parallel ``labels``/``income``/``expenses`` lists for charting."""
    return {
        "labels": [bucket.label for bucket in buckets],
        "income": [quantize_money(bucket.income) for bucket in buckets],
        "expenses": [quantize_money(bucket.expenses) for bucket in buckets],
    }


def split_totals(rows: Iterable[TransactionRow]) -> tuple[Decimal, Decimal]:
    """Return ``(income, expenses)`` magnitudes over ``rows``."""
    income = Decimal("0")
    expenses = Decimal("0")
    for row in rows:
        if row.amount > 0:
            income += row.amount
        elif row.amount < 0:
            expenses += -row.amount
    return income, expenses


def daily_expenses(rows: Iterable[TransactionRow]) -> list[Decimal]:
    """Expense magnitude per day that has any transaction, in date order."""
    per_day: dict[date, Decimal] = {}
    for row in rows:
        total = per_day.setdefault(row.date, Decimal("0"))
        if row.amount < 0:
            per_day[row.date] = total - row.amount
    return [per_day[day] for day in sorted(per_day)]


def monthly_expenses(rows: Iterable[TransactionRow]) -> dict[date, Decimal]:
    """Expense magnitude per calendar month that has any transaction.

    Keys are month starts.
    """
    per_month: dict[date, Decimal] = {}
    for row in rows:
        key = month_start(row.date)
        total = per_month.setdefault(key, Decimal("0"))
        if row.amount < 0:
            per_month[key] = total - row.amount
    return per_month
