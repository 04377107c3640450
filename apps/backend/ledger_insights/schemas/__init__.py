"""Pydantic schemas package."""

from ledger_insights.schemas.reporting import (
    AccountsReportResponse,
    CategoriesReportResponse,
    CategoryStatsResponse,
    IncomeStatementResponse,
    OverviewResponse,
    SpendingTrendsResponse,
    TransactionSummaryResponse,
)

__all__ = [
    "AccountsReportResponse",
    "CategoriesReportResponse",
    "CategoryStatsResponse",
    "IncomeStatementResponse",
    "OverviewResponse",
    "SpendingTrendsResponse",
    "TransactionSummaryResponse",
]
