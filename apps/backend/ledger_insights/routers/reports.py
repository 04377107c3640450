"""Financial reporting API router."""

from __future__ import annotations

from collections.abc import Awaitable
from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from ledger_insights.constants.error_ids import ErrorIds
from ledger_insights.deps import CurrentOwnerId, Gateway
from ledger_insights.logger import get_logger
from ledger_insights.schemas import (
    AccountsReportResponse,
    CategoriesReportResponse,
    CategoryStatsResponse,
    IncomeStatementResponse,
    OverviewResponse,
    SpendingTrendsResponse,
    TransactionSummaryResponse,
)
from ledger_insights.services.gateway import GatewayUnavailableError
from ledger_insights.services.periods import InvalidPeriodError, PeriodToken
from ledger_insights.services.reporting import (
    ReportError,
    ReportRequest,
    generate_accounts_report,
    generate_categories_report,
    generate_category_stats,
    generate_income_statement,
    generate_overview,
    generate_spending_trends,
    generate_transaction_summary,
)
from ledger_insights.utils import raise_bad_request, raise_internal_error, raise_service_unavailable

router = APIRouter(prefix="/reports", tags=["reports"])
logger = get_logger(__name__)


def get_report_request(
    period: str = Query(default=PeriodToken.THIS_MONTH.value),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> ReportRequest:
    return ReportRequest(period=period, start_date=start_date, end_date=end_date)


PeriodRequest = Annotated[ReportRequest, Depends(get_report_request)]


async def _run_report(
    report_name: str,
    pending: Awaitable[dict[str, Any]],
    request: ReportRequest | None = None,
) -> dict[str, Any]:
    period = request.period if request is not None else None
    try:
        return await pending
    except InvalidPeriodError as exc:
        logger.warning(
            f"{report_name} request rejected", error_id=ErrorIds.INVALID_PERIOD, period=period, error=str(exc)
        )
        raise_bad_request(str(exc), cause=exc)
    except GatewayUnavailableError as exc:
        logger.warning(
            f"{report_name} unavailable", error_id=ErrorIds.GATEWAY_UNAVAILABLE, period=period, error=str(exc)
        )
        raise_service_unavailable("Ledger store unavailable", cause=exc)
    except ReportError as exc:
        logger.warning(f"{report_name} generation failed", period=period, error=str(exc))
        raise_internal_error(f"Failed to generate {report_name.lower()}", cause=exc)


@router.get("/overview", response_model=OverviewResponse)
async def overview(
    period_request: PeriodRequest,
    gateway: Gateway,
    owner_id: CurrentOwnerId,
) -> OverviewResponse:
    """Get the financial health overview for a period."""
    report = await _run_report("Overview", generate_overview(gateway, owner_id, period_request), period_request)
    return OverviewResponse(**report)


@router.get("/income-statement", response_model=IncomeStatementResponse)
async def income_statement(
    period_request: PeriodRequest,
    gateway: Gateway,
    owner_id: CurrentOwnerId,
) -> IncomeStatementResponse:
    """Get income and expenses by category for a period."""
    report = await _run_report(
        "Income statement", generate_income_statement(gateway, owner_id, period_request), period_request
    )
    return IncomeStatementResponse(**report)


@router.get("/spending-trends", response_model=SpendingTrendsResponse)
async def spending_trends(
    period_request: PeriodRequest,
    gateway: Gateway,
    owner_id: CurrentOwnerId,
) -> SpendingTrendsResponse:
    report = await _run_report(
        "Spending trends", generate_spending_trends(gateway, owner_id, period_request), period_request
    )
    return SpendingTrendsResponse(**report)


@router.get("/categories", response_model=CategoriesReportResponse)
async def categories(
    period_request: PeriodRequest,
    gateway: Gateway,
    owner_id: CurrentOwnerId,
) -> CategoriesReportResponse:
    report = await _run_report(
        "Categories report", generate_categories_report(gateway, owner_id, period_request), period_request
    )
    return CategoriesReportResponse(**report)


@router.get("/accounts", response_model=AccountsReportResponse)
async def accounts(
    period_request: PeriodRequest,
    gateway: Gateway,
    owner_id: CurrentOwnerId,
) -> AccountsReportResponse:
    """Get receivable and payable aging for unpaid transactions."""
    report = await _run_report(
        "Accounts report", generate_accounts_report(gateway, owner_id, period_request), period_request
    )
    return AccountsReportResponse(**report)


@router.get("/summary", response_model=TransactionSummaryResponse)
async def transaction_summary(
    period_request: PeriodRequest,
    gateway: Gateway,
    owner_id: CurrentOwnerId,
) -> TransactionSummaryResponse:
    report = await _run_report(
        "Transaction summary", generate_transaction_summary(gateway, owner_id, period_request), period_request
    )
    return TransactionSummaryResponse(**report)


@router.get("/category-stats", response_model=CategoryStatsResponse)
async def category_stats(
    gateway: Gateway,
    owner_id: CurrentOwnerId,
) -> CategoryStatsResponse:
    report = await _run_report("Category stats", generate_category_stats(gateway, owner_id))
    return CategoryStatsResponse(**report)
