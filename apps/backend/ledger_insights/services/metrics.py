"""Financial metrics computed from already-aggregated totals.

Everything here is pure ``Decimal`` arithmetic over scalars that the
aggregators produced; no function looks at individual transactions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Health score weights: savings 40, expense ratio 30, volatility 15,
# disposable income 15.
SAVINGS_POINTS = Decimal("40")
EXPENSE_POINTS = Decimal("30")
VOLATILITY_POINTS = Decimal("15")
DISPOSABLE_POINTS = Decimal("15")

SAVINGS_TARGET = Decimal("20")
BUDGET_CHANGE_LIMIT = Decimal("10")


Number = Decimal | int | float


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(amount: Number) -> Decimal:
    return _to_decimal(amount).quantize(Decimal("0.01"))


def round_percentage(value: Number) -> Decimal:
    """Round a percentage half-up to one decimal place."""
    return _to_decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def round_whole(value: Number) -> int:
    return int(_to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def share(part: Number, total: Number) -> Decimal:
    """``part`` as a percentage of ``total``; zero when ``total`` is not positive."""
    total = _to_decimal(total)
    if total <= 0:
        return ZERO
    return _to_decimal(part) / total * HUNDRED


def savings_rate(income: Number, net: Number) -> Decimal:
    return share(net, income)


def expense_to_income_ratio(income: Number, expenses: Number) -> Decimal:
    return share(expenses, income)


def income_to_expense_ratio(income: Number, expenses: Number) -> Decimal:
    expenses = _to_decimal(expenses)
    if expenses <= 0:
        return ZERO
    return _to_decimal(income) / expenses


def percentage_change(current: Number, previous: Number) -> Decimal:
    """Relative change from ``previous`` to ``current`` in percent.

    A period with nothing to compare against reports no change.
    """
    previous = _to_decimal(previous)
    if previous <= 0:
        return ZERO
    return (_to_decimal(current) - previous) / previous * HUNDRED


def daily_average(total: Number, days: int) -> Decimal:
    return _to_decimal(total) / max(1, days)


def average_monthly(total: Number, months: int) -> Decimal:
    return _to_decimal(total) / max(1, months)


def volatility(series: Sequence[Number]) -> Decimal:
    """Coefficient of variation of ``series`` in percent.

    Uses the population standard deviation. Returns zero for fewer than two
    points or a zero mean.
    """
    if len(series) < 2:
        return ZERO
    values = [_to_decimal(value) for value in series]
    mean = sum(values, ZERO) / len(values)
    if mean == 0:
        return ZERO
    variance = sum(((value - mean) ** 2 for value in values), ZERO) / len(values)
    return variance.sqrt() / mean * HUNDRED


def financial_health_score(
    savings: Number,
    expense_ratio: Number,
    spending_volatility: Number,
    disposable_income: Number,
) -> int:
    """Weighted 0-100 score of overall financial health."""
    savings = _to_decimal(savings)
    expense_ratio = _to_decimal(expense_ratio)
    spending_volatility = _to_decimal(spending_volatility)
    disposable_income = _to_decimal(disposable_income)

    score = min(SAVINGS_POINTS, savings * 2)
    score += max(ZERO, EXPENSE_POINTS - expense_ratio * Decimal("0.3"))
    score += max(ZERO, VOLATILITY_POINTS - spending_volatility * Decimal("0.5"))
    if disposable_income > 0:
        score += DISPOSABLE_POINTS
    else:
        score += max(ZERO, DISPOSABLE_POINTS + disposable_income / 1000)

    return min(100, max(0, round_whole(score)))


def health_description(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs attention"


def budget_status(monthly_change: Number) -> str:
    if _to_decimal(monthly_change) < BUDGET_CHANGE_LIMIT:
        return "On track"
    return "Needs attention"


@dataclass(frozen=True)
class Recommendations:
    should_increase_savings: bool
    should_improve_income_outflow: bool
    should_budget: bool
    should_diversify_income: bool
    should_invest: bool

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


def recommendations(
    savings: Number,
    disposable_income: Number,
    monthly_change: Number,
    income_sources: int,
) -> Recommendations:
    savings = _to_decimal(savings)
    disposable_income = _to_decimal(disposable_income)
    monthly_change = _to_decimal(monthly_change)

    return Recommendations(
        should_increase_savings=savings < SAVINGS_TARGET,
        should_improve_income_outflow=disposable_income <= 0,
        should_budget=monthly_change > BUDGET_CHANGE_LIMIT,
        should_diversify_income=income_sources == 1,
        should_invest=(
            savings >= SAVINGS_TARGET
            and disposable_income > 0
            and monthly_change <= BUDGET_CHANGE_LIMIT
            and income_sources > 1
        ),
    )
