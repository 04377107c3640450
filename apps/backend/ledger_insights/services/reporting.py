"""Report assemblers.

Each assembler resolves the requested period, fetches rows through a
``LedgerGateway`` and composes the aggregation and metric helpers into a
plain dict that the router validates into its response model.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from ledger_insights.config import settings
from ledger_insights.constants.error_ids import ErrorIds
from ledger_insights.logger import get_logger, log_exception, log_timing
from ledger_insights.models import CategoryType, TransactionStatus
from ledger_insights.services import metrics
from ledger_insights.services.aging import AgingBucket, classify
from ledger_insights.services.gateway import GatewayUnavailableError, LedgerGateway, TransactionRow
from ledger_insights.services.metrics import quantize_money, round_percentage, round_whole
from ledger_insights.services.periods import (
    InvalidPeriodError,
    Period,
    PeriodToken,
    day_count,
    month_difference,
    month_label,
    previous,
    resolve_request,
    select_granularity,
)
from ledger_insights.services.rollup import CategoryLine, StatementRow, rollup_by_category, rollup_expenses
from ledger_insights.services.timeseries import (
    build_series,
    daily_expenses,
    monthly_expenses,
    series_payload,
    split_totals,
)

logger = get_logger(__name__)


class ReportError(Exception):
    """Raised when report generation fails."""

    pass


class ReportGenerationError(ReportError):
    """Unexpected failure while computing a report."""

    def __init__(self, report_type: str, period: str | None) -> None:
        self.report_type = report_type
        self.period = period
        super().__init__(f"Failed to generate {report_type} report for period {period!r}")


@dataclass(frozen=True)
class ReportRequest:
    """Period selection shared by every report."""

    period: str | None = PeriodToken.THIS_MONTH.value
    start_date: date | None = None
    end_date: date | None = None
    today: date | None = None

    @property
    def as_of(self) -> date:
        return self.today or date.today()

    def resolve(self) -> Period:
        return resolve_request(self.period, self.as_of, self.start_date, self.end_date)


@contextmanager
def _report_guard(report_type: str, request: ReportRequest | None = None) -> Iterator[None]:
    """Re-raise expected errors unchanged and wrap everything else."""
    try:
        yield
    except (InvalidPeriodError, GatewayUnavailableError, ReportError):
        raise
    except Exception as exc:
        period = request.period if request is not None else None
        log_exception(
            logger,
            exc,
            "Report generation failed",
            error_id=ErrorIds.REPORT_GENERATION_FAILED,
            report_type=report_type,
            period=period,
        )
        raise ReportGenerationError(report_type, period) from exc


async def _fetch_period(gateway: LedgerGateway, owner_id: str, period: Period) -> list[TransactionRow]:
    return await gateway.fetch_transactions(owner_id, period.start_date, period.end_date)


def _category_line(line: CategoryLine) -> dict[str, Any]:
    return {
        "name": line.name,
        "amount": quantize_money(line.amount),
        "percentage": line.percentage,
        "transactions": line.transactions,
    }


def _categorized_count(lines: list[CategoryLine]) -> int:
    return sum(1 for line in lines if line.categorized)


def _statement_row(row: StatementRow) -> dict[str, Any]:
    return {
        "category": row.category,
        "subcategory": row.subcategory,
        "amount": quantize_money(row.amount),
        "percentage": row.percentage,
        "is_direct_parent_entry": row.is_direct_parent_entry,
        "transactions": row.transactions,
    }


def _aging_bucket(bucket: AgingBucket) -> dict[str, Any]:
    return {
        "total": quantize_money(bucket.total),
        "overdue": quantize_money(bucket.overdue),
        "count": bucket.count,
        "overdue_count": bucket.overdue_count,
        "transactions": [asdict(line) for line in bucket.transactions],
    }


def _highest_spending_month(rows: list[TransactionRow], period: Period) -> str:
    per_month = monthly_expenses(rows)
    if not per_month:
        return month_label(period.end_date)
    months = sorted(per_month)
    return month_label(max(months, key=lambda month: per_month[month]))


async def generate_income_statement(
    gateway: LedgerGateway,
    owner_id: str,
    request: ReportRequest,
) -> dict[str, Any]:
    """Income by category and expenses by category/subcategory."""
    with _report_guard("income_statement", request):
        period = request.resolve()
        rows, categories = await asyncio.gather(
            _fetch_period(gateway, owner_id, period),
            gateway.fetch_categories(owner_id),
        )

        income = rollup_by_category(rows, categories, "income")
        expenses = rollup_expenses(rows, categories)
        total_income, total_expenses = split_totals(rows)
        net_income = total_income - total_expenses

        logger.info(
            "Income statement generated",
            owner_id=owner_id,
            period=period.label,
            transactions=len(rows),
        )

        return {
            "income": [
                {"category": line.name, "amount": quantize_money(line.amount), "percentage": line.percentage}
                for line in income
            ],
            "expenses": [_statement_row(row) for row in expenses],
            "totals": {
                "total_income": quantize_money(total_income),
                "total_expenses": quantize_money(total_expenses),
                "net_income": quantize_money(net_income),
                "savings_rate": round_whole(metrics.savings_rate(total_income, net_income)),
            },
            "period_label": period.label,
            "period": period.as_dict(),
        }


async def generate_spending_trends(
    gateway: LedgerGateway,
    owner_id: str,
    request: ReportRequest,
) -> dict[str, Any]:
    """Spending over time, top categories and comparison with the previous period.

    ``fastest_growing_category`` names the largest expense category of the period.
    """
    with _report_guard("spending_trends", request):
        period = request.resolve()
        prior = previous(period)
        rows, previous_rows, categories = await asyncio.gather(
            _fetch_period(gateway, owner_id, period),
            _fetch_period(gateway, owner_id, prior),
            gateway.fetch_categories(owner_id),
        )

        granularity = select_granularity(request.period, period)
        with log_timing("build_series", logger=logger, level="debug", granularity=granularity.value) as ctx:
            buckets = build_series(period, granularity, rows)
            ctx["buckets"] = len(buckets)
        total_income, total_expenses = split_totals(rows)
        _, previous_expenses = split_totals(previous_rows)
        net_savings = total_income - total_expenses
        top_categories = rollup_by_category(rows, categories, "expense")[: settings.top_categories_limit]
        average_monthly = metrics.average_monthly(
            total_expenses, month_difference(period.start_date, period.end_date)
        )

        return {
            "time_series": series_payload(buckets),
            "top_categories": [_category_line(line) for line in top_categories],
            "insights": {
                "fastest_growing_category": top_categories[0].name if top_categories else "None",
                "month_with_highest_spending": _highest_spending_month(rows, period),
                "average_monthly_spending": quantize_money(average_monthly),
                "change_from_previous": round_whole(metrics.percentage_change(total_expenses, previous_expenses)),
            },
            "totals": {
                "total_expenses": quantize_money(total_expenses),
                "total_income": quantize_money(total_income),
                "net_savings": quantize_money(net_savings),
                "savings_rate": round_whole(metrics.savings_rate(total_income, net_savings)),
            },
            "period_label": period.label,
            "period": period.as_dict(),
        }


async def generate_overview(
    gateway: LedgerGateway,
    owner_id: str,
    request: ReportRequest,
) -> dict[str, Any]:
    """Financial health summary for the period."""
    with _report_guard("overview", request):
        period = request.resolve()
        prior = previous(period)
        rows, previous_rows, categories = await asyncio.gather(
            _fetch_period(gateway, owner_id, period),
            _fetch_period(gateway, owner_id, prior),
            gateway.fetch_categories(owner_id),
        )

        total_income, total_expenses = split_totals(rows)
        _, previous_expenses = split_totals(previous_rows)
        net_income = total_income - total_expenses
        income_lines = rollup_by_category(rows, categories, "income")
        expense_lines = rollup_by_category(rows, categories, "expense")

        savings = metrics.savings_rate(total_income, net_income)
        expense_ratio = metrics.expense_to_income_ratio(total_income, total_expenses)
        spending_volatility = metrics.volatility(daily_expenses(rows))
        monthly_change = metrics.percentage_change(total_expenses, previous_expenses)
        score = metrics.financial_health_score(savings, expense_ratio, spending_volatility, net_income)
        income_sources = _categorized_count(income_lines)

        if expense_lines:
            top_category = {"name": expense_lines[0].name, "percentage": expense_lines[0].percentage}
        else:
            top_category = {"name": "N/A", "percentage": round_percentage(0)}

        logger.info(
            "Overview generated",
            owner_id=owner_id,
            period=period.label,
            score=score,
        )

        return {
            "financial_health": {
                "score": score,
                "description": metrics.health_description(score),
                "net_income": quantize_money(net_income),
                "savings_rate": round_percentage(savings),
                "expense_to_income_ratio": round_percentage(expense_ratio),
                "monthly_change": round_percentage(monthly_change),
                "budget_status": metrics.budget_status(monthly_change),
            },
            "income_metrics": {
                "total_income": quantize_money(total_income),
                "income_to_expense_ratio": quantize_money(
                    metrics.income_to_expense_ratio(total_income, total_expenses)
                ),
                "disposable_income": quantize_money(net_income),
                "income_sources": income_sources,
                "primary_source_percentage": income_lines[0].percentage if income_lines else round_percentage(0),
            },
            "spending_metrics": {
                "total_expenses": quantize_money(total_expenses),
                "daily_average": quantize_money(metrics.daily_average(total_expenses, day_count(period))),
                "volatility": round_percentage(spending_volatility),
                "top_category": top_category,
                "categories_count": _categorized_count(expense_lines),
            },
            "time_series": series_payload(build_series(period, select_granularity(request.period, period), rows)),
            "recommendations": metrics.recommendations(
                savings, net_income, monthly_change, income_sources
            ).as_dict(),
            "period": period.as_dict(),
        }


async def generate_categories_report(
    gateway: LedgerGateway,
    owner_id: str,
    request: ReportRequest,
) -> dict[str, Any]:
    with _report_guard("categories", request):
        period = request.resolve()
        rows, categories = await asyncio.gather(
            _fetch_period(gateway, owner_id, period),
            gateway.fetch_categories(owner_id),
        )

        income_lines = rollup_by_category(rows, categories, "income")
        expense_lines = rollup_by_category(rows, categories, "expense")
        total_income, total_expenses = split_totals(rows)

        return {
            "income_categories": [_category_line(line) for line in income_lines],
            "expense_categories": [_category_line(line) for line in expense_lines],
            "summary": {
                "total_income": quantize_money(total_income),
                "total_expenses": quantize_money(total_expenses),
                "income_categories_count": _categorized_count(income_lines),
                "expense_categories_count": _categorized_count(expense_lines),
                "top_income_category": income_lines[0].name if income_lines else "N/A",
                "top_income_percentage": income_lines[0].percentage if income_lines else round_percentage(0),
                "top_expense_category": expense_lines[0].name if expense_lines else "N/A",
                "top_expense_percentage": expense_lines[0].percentage if expense_lines else round_percentage(0),
            },
            "period": period.as_dict(),
        }


async def generate_accounts_report(
    gateway: LedgerGateway,
    owner_id: str,
    request: ReportRequest,
) -> dict[str, Any]:
    """Receivable and payable aging of unpaid transactions in the period."""
    with _report_guard("accounts", request):
        period = request.resolve()
        rows = await gateway.fetch_transactions(
            owner_id,
            period.start_date,
            period.end_date,
            status=TransactionStatus.UNPAID,
        )
        report = classify(rows, request.as_of)

        return {
            "receivable": _aging_bucket(report.receivable),
            "payable": _aging_bucket(report.payable),
            "period_label": period.label,
            "period": period.as_dict(),
        }


async def generate_transaction_summary(
    gateway: LedgerGateway,
    owner_id: str,
    request: ReportRequest,
) -> dict[str, Any]:
    """Totals and status counts computed from raw rows."""
    with _report_guard("transaction_summary", request):
        period = request.resolve()
        rows = await _fetch_period(gateway, owner_id, period)
        total_income, total_expenses = split_totals(rows)
        paid_count = sum(1 for row in rows if row.status == TransactionStatus.PAID)

        return {
            "total_income": quantize_money(total_income),
            "total_expenses": quantize_money(total_expenses),
            "net_balance": quantize_money(total_income - total_expenses),
            "transaction_count": len(rows),
            "paid_count": paid_count,
            "unpaid_count": len(rows) - paid_count,
            "period": period.as_dict(),
        }


async def generate_category_stats(gateway: LedgerGateway, owner_id: str) -> dict[str, Any]:
    with _report_guard("category_stats"):
        categories = await gateway.fetch_categories(owner_id)
        return {
            "total_categories": len(categories),
            "income_categories": sum(1 for category in categories if category.type == CategoryType.INCOME),
            "expense_categories": sum(1 for category in categories if category.type == CategoryType.EXPENSE),
            "parent_categories": sum(1 for category in categories if category.is_parent),
        }
