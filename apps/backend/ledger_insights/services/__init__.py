"""Services package."""

from ledger_insights.services.gateway import (
    CategoryRow,
    GatewayUnavailableError,
    LedgerGateway,
    SqlLedgerGateway,
    TransactionRow,
)
from ledger_insights.services.periods import InvalidPeriodError, Period, PeriodToken
from ledger_insights.services.reporting import (
    ReportError,
    ReportGenerationError,
    ReportRequest,
    generate_accounts_report,
    generate_categories_report,
    generate_category_stats,
    generate_income_statement,
    generate_overview,
    generate_spending_trends,
    generate_transaction_summary,
)

__all__ = [
    "CategoryRow",
    "GatewayUnavailableError",
    "InvalidPeriodError",
    "LedgerGateway",
    "Period",
    "PeriodToken",
    "ReportError",
    "ReportGenerationError",
    "ReportRequest",
    "SqlLedgerGateway",
    "TransactionRow",
    "generate_accounts_report",
    "generate_categories_report",
    "generate_category_stats",
    "generate_income_statement",
    "generate_overview",
    "generate_spending_trends",
    "generate_transaction_summary",
]
