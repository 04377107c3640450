"""Tests for period resolution."""

from datetime import date, datetime, timedelta

import pytest

from ledger_insights.services.periods import (
    Granularity,
    InvalidPeriodError,
    Period,
    custom,
    day_count,
    month_difference,
    month_end,
    previous,
    resolve,
    resolve_request,
    select_granularity,
)

NOW = date(2025, 3, 15)


@pytest.mark.parametrize(
    ("token", "start", "end", "label"),
    [
        ("this-month", date(2025, 3, 1), date(2025, 3, 31), "March 2025"),
        ("last-month", date(2025, 2, 1), date(2025, 2, 28), "February 2025"),
        ("last-3-months", date(2024, 12, 1), NOW, "December - March 2025"),
        ("last-6-months", date(2024, 9, 1), NOW, "September - March 2025"),
        ("year-to-date", date(2025, 1, 1), NOW, "Jan - March 2025"),
        ("last-year", date(2024, 1, 1), date(2024, 12, 31), "2024"),
        ("all-time", date(2000, 1, 1), NOW, "All Time"),
    ],
)
def test_resolve_named_tokens(token, start, end, label) -> None:
    period = resolve(token, NOW)
    assert period == Period(start, end, label)


def test_resolve_is_deterministic() -> None:
    assert resolve("last-6-months", NOW) == resolve("last-6-months", NOW)


@pytest.mark.parametrize("token", ["foo", "", None, "custom"])
def test_unknown_tokens_fall_back_to_this_month(token) -> None:
    assert resolve(token, NOW) == resolve("this-month", NOW)


def test_resolve_accepts_datetime_now() -> None:
    assert resolve("this-month", datetime(2025, 3, 15, 23, 59)) == resolve("this-month", NOW)


def test_last_month_crosses_year_boundary() -> None:
    period = resolve("last-month", date(2025, 1, 10))
    assert period.start_date == date(2024, 12, 1)
    assert period.end_date == date(2024, 12, 31)
    assert period.label == "December 2024"


def test_last_month_handles_leap_february() -> None:
    period = resolve("last-month", date(2024, 3, 31))
    assert period.start_date == date(2024, 2, 1)
    assert period.end_date == date(2024, 2, 29)


def test_custom_period_label() -> None:
    period = custom(date(2025, 3, 1), date(2025, 3, 31))
    assert period.label == "Mar 1, 2025 - Mar 31, 2025"


def test_resolve_request_custom_uses_bounds() -> None:
    period = resolve_request("custom", NOW, date(2025, 1, 10), date(2025, 2, 5))
    assert period.start_date == date(2025, 1, 10)
    assert period.end_date == date(2025, 2, 5)


@pytest.mark.parametrize(
    ("start", "end"),
    [(None, None), (date(2025, 1, 1), None), (None, date(2025, 1, 1))],
)
def test_resolve_request_custom_requires_both_bounds(start, end) -> None:
    with pytest.raises(InvalidPeriodError):
        resolve_request("custom", NOW, start, end)


def test_resolve_request_rejects_inverted_bounds() -> None:
    with pytest.raises(InvalidPeriodError):
        resolve_request("custom", NOW, date(2025, 3, 2), date(2025, 3, 1))


def test_resolve_request_named_token_ignores_bounds() -> None:
    period = resolve_request("last-year", NOW, date(2025, 3, 2), date(2025, 3, 1))
    assert period == resolve("last-year", NOW)


def test_previous_period_has_identical_length() -> None:
    current = resolve("this-month", NOW)
    prior = previous(current)

    assert prior.end_date == date(2025, 2, 28)
    assert prior.start_date == date(2025, 1, 29)
    assert prior.days == current.days == 31
    assert prior.label == "Jan 29, 2025 - Feb 28, 2025"


def test_previous_of_single_day() -> None:
    prior = previous(custom(NOW, NOW))
    assert prior.start_date == prior.end_date == NOW - timedelta(days=1)


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("this-month", Granularity.DAY),
        ("last-month", Granularity.DAY),
        ("last-3-months", Granularity.WEEK),
        ("last-6-months", Granularity.WEEK),
        ("year-to-date", Granularity.MONTH),
        ("last-year", Granularity.MONTH),
        ("all-time", Granularity.MONTH),
        ("foo", Granularity.DAY),
    ],
)
def test_select_granularity_for_named_tokens(token, expected) -> None:
    assert select_granularity(token, resolve(token, NOW)) == expected


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        (1, Granularity.DAY),
        (31, Granularity.DAY),
        (32, Granularity.WEEK),
        (186, Granularity.WEEK),
        (187, Granularity.MONTH),
    ],
)
def test_select_granularity_for_custom_length(days, expected) -> None:
    start = date(2025, 1, 1)
    period = custom(start, start + timedelta(days=days - 1))
    assert select_granularity("custom", period) == expected


def test_month_difference_counts_touched_months() -> None:
    assert month_difference(date(2024, 12, 1), date(2025, 3, 15)) == 4
    assert month_difference(date(2025, 3, 1), date(2025, 3, 31)) == 1


def test_day_count_is_inclusive() -> None:
    assert day_count(resolve("last-year", NOW)) == 366


def test_previous_is_clipped_at_earliest_date() -> None:
    prior = previous(custom(date(1, 1, 5), date(1, 1, 31)))

    assert prior.start_date == date.min
    assert prior.end_date == date(1, 1, 4)


def test_previous_of_period_starting_at_earliest_date_is_empty() -> None:
    prior = previous(custom(date.min, date(1, 1, 31)))

    assert prior.start_date > prior.end_date
    assert day_count(prior) == 0


def test_month_end_of_last_representable_month() -> None:
    assert month_end(date(9999, 12, 5)) == date.max
