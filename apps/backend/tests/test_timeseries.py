"""Tests for the gap-filled time series."""

from datetime import date, timedelta
from decimal import Decimal

from ledger_insights.services.periods import Granularity, Period, custom, resolve
from ledger_insights.services.timeseries import (
    build_series,
    daily_expenses,
    monthly_expenses,
    series_payload,
    split_totals,
    week_label,
)
from tests.factories import TransactionRowFactory

NOW = date(2025, 3, 15)


def test_daily_series_fills_every_day() -> None:
    period = resolve("this-month", NOW)
    rows = [
        TransactionRowFactory.build(date=date(2025, 3, 5), amount=Decimal("1000")),
        TransactionRowFactory.build(date=date(2025, 3, 10), amount=Decimal("-400")),
    ]

    buckets = build_series(period, Granularity.DAY, rows)

    assert len(buckets) == 31
    by_label = {bucket.label: bucket for bucket in buckets}
    assert by_label["2025-03-05"].income == Decimal("1000")
    assert by_label["2025-03-10"].expenses == Decimal("400")
    others = [b for b in buckets if b.label not in ("2025-03-05", "2025-03-10")]
    assert all(b.income == 0 and b.expenses == 0 for b in others)


def test_weekly_series_uses_iso_week_of_bucket_start() -> None:
    period = resolve("last-3-months", NOW)
    rows = [TransactionRowFactory.build(date=NOW, amount=Decimal("-25.50"))]

    buckets = build_series(period, Granularity.WEEK, rows)

    assert len(buckets) == 15
    assert buckets[0].label == "2024-12-W48"
    assert buckets[1].label == "2024-12-W49"
    assert buckets[-1].label == "2025-03-W10"
    assert buckets[-1].start == date(2025, 3, 9)
    assert buckets[-1].end == NOW
    assert buckets[-1].expenses == Decimal("25.50")


def test_weekly_series_keeps_partial_trailing_week() -> None:
    period = custom(date(2025, 1, 1), date(2025, 1, 10))
    rows = [TransactionRowFactory.build(date=date(2025, 1, 9), amount=Decimal("12"))]

    buckets = build_series(period, "week", rows)

    assert [(b.start, b.end) for b in buckets] == [
        (date(2025, 1, 1), date(2025, 1, 7)),
        (date(2025, 1, 8), date(2025, 1, 10)),
    ]
    assert buckets[1].income == Decimal("12")


def test_monthly_series_is_calendar_aligned() -> None:
    period = custom(date(2025, 1, 20), date(2025, 3, 5))
    rows = [
        TransactionRowFactory.build(date=date(2025, 1, 25), amount=Decimal("-5")),
        TransactionRowFactory.build(date=date(2025, 3, 1), amount=Decimal("7")),
    ]

    buckets = build_series(period, Granularity.MONTH, rows)

    assert [b.label for b in buckets] == ["2025-01", "2025-02", "2025-03"]
    assert buckets[0].start == date(2025, 1, 20)
    assert buckets[1].start == date(2025, 2, 1)
    assert buckets[1].end == date(2025, 2, 28)
    assert buckets[2].end == date(2025, 3, 5)
    assert buckets[0].expenses == Decimal("5")
    assert buckets[2].income == Decimal("7")


def test_inverted_period_yields_empty_series() -> None:
    period = Period(date(2025, 3, 10), date(2025, 3, 1), "inverted")
    assert build_series(period, Granularity.DAY, []) == []


def test_rows_outside_period_are_ignored() -> None:
    period = resolve("this-month", NOW)
    rows = [TransactionRowFactory.build(date=date(2025, 4, 1), amount=Decimal("-99"))]

    buckets = build_series(period, Granularity.DAY, rows)

    assert sum(b.expenses for b in buckets) == 0


def test_series_preserves_totals_for_every_granularity() -> None:
    period = resolve("year-to-date", NOW)
    rows = [
        TransactionRowFactory.build(date=period.start_date + timedelta(days=offset), amount=Decimal(amount))
        for offset, amount in [(0, "100.10"), (3, "-20.05"), (40, "-3.33"), (70, "55"), (73, "-1")]
    ]
    income, expenses = split_totals(rows)

    for granularity in Granularity:
        buckets = build_series(period, granularity, rows)
        assert sum(b.income for b in buckets) == income
        assert sum(b.expenses for b in buckets) == expenses


def test_series_payload_has_parallel_lists() -> None:
    period = custom(date(2025, 3, 1), date(2025, 3, 2))
    rows = [TransactionRowFactory.build(date=date(2025, 3, 2), amount=Decimal("-3.5"))]

    payload = series_payload(build_series(period, Granularity.DAY, rows))

    assert payload == {
        "labels": ["2025-03-01", "2025-03-02"],
        "income": [Decimal("0.00"), Decimal("0.00")],
        "expenses": [Decimal("0.00"), Decimal("3.50")],
    }


def test_week_label_format() -> None:
    assert week_label(date(2025, 1, 1)) == "2025-01-W1"


def test_daily_expenses_counts_active_days_only() -> None:
    rows = [
        TransactionRowFactory.build(date=date(2025, 3, 2), amount=Decimal("-10")),
        TransactionRowFactory.build(date=date(2025, 3, 1), amount=Decimal("50")),
        TransactionRowFactory.build(date=date(2025, 3, 2), amount=Decimal("-5")),
    ]

    assert daily_expenses(rows) == [Decimal("0"), Decimal("15")]


def test_monthly_expenses_keys_on_month_start() -> None:
    rows = [
        TransactionRowFactory.build(date=date(2025, 2, 14), amount=Decimal("-10")),
        TransactionRowFactory.build(date=date(2025, 2, 20), amount=Decimal("-2")),
    ]

    assert monthly_expenses(rows) == {date(2025, 2, 1): Decimal("12")}


def test_series_reaching_latest_date() -> None:
    period = custom(date(9999, 12, 20), date.max)
    rows = [TransactionRowFactory.build(date=date.max, amount=Decimal("-1"))]

    days = build_series(period, Granularity.DAY, rows)
    weeks = build_series(period, Granularity.WEEK, rows)
    months = build_series(period, Granularity.MONTH, rows)

    assert len(days) == 12
    assert [(b.start, b.end) for b in weeks] == [
        (date(9999, 12, 20), date(9999, 12, 26)),
        (date(9999, 12, 27), date.max),
    ]
    assert [b.label for b in months] == ["9999-12"]
    assert days[-1].expenses == weeks[-1].expenses == months[0].expenses == Decimal("1")
