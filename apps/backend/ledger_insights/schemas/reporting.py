"""Pydantic schemas for financial reporting endpoints."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from ledger_insights.models import TransactionStatus


class PeriodInfo(BaseModel):
    """Resolved report period."""

    start_date: date
    end_date: date
    label: str


class TimeSeries(BaseModel):
    """Parallel chart series, one entry per bucket."""

    labels: list[str]
    income: list[Decimal]
    expenses: list[Decimal]


class CategoryAmount(BaseModel):
    """Category total with its share of the period total."""

    name: str
    amount: Decimal
    percentage: Decimal
    transactions: int = 0


class IncomeLine(BaseModel):
    category: str
    amount: Decimal
    percentage: Decimal


class ExpenseLine(BaseModel):
    """Expense total for a category/subcategory pair."""

    category: str
    subcategory: str
    amount: Decimal
    percentage: Decimal
    is_direct_parent_entry: bool = False
    transactions: int = 0


class IncomeStatementTotals(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    net_income: Decimal
    savings_rate: int


class IncomeStatementResponse(BaseModel):
    """Income statement response schema."""

    income: list[IncomeLine]
    expenses: list[ExpenseLine]
    totals: IncomeStatementTotals
    period_label: str
    period: PeriodInfo


class SpendingInsights(BaseModel):
    fastest_growing_category: str
    month_with_highest_spending: str
    average_monthly_spending: Decimal
    change_from_previous: int


class SpendingTotals(BaseModel):
    total_expenses: Decimal
    total_income: Decimal
    net_savings: Decimal
    savings_rate: int


class SpendingTrendsResponse(BaseModel):
    """Spending trends response schema."""

    time_series: TimeSeries
    top_categories: list[CategoryAmount]
    insights: SpendingInsights
    totals: SpendingTotals
    period_label: str
    period: PeriodInfo


class FinancialHealth(BaseModel):
    score: int = Field(ge=0, le=100)
    description: str
    net_income: Decimal
    savings_rate: Decimal
    expense_to_income_ratio: Decimal
    monthly_change: Decimal
    budget_status: str


class IncomeMetrics(BaseModel):
    total_income: Decimal
    income_to_expense_ratio: Decimal
    disposable_income: Decimal
    income_sources: int
    primary_source_percentage: Decimal


class TopCategory(BaseModel):
    name: str
    percentage: Decimal


class SpendingMetrics(BaseModel):
    total_expenses: Decimal
    daily_average: Decimal
    volatility: Decimal
    top_category: TopCategory
    categories_count: int


class Recommendations(BaseModel):
    should_increase_savings: bool
    should_improve_income_outflow: bool
    should_budget: bool
    should_diversify_income: bool
    should_invest: bool


class OverviewResponse(BaseModel):
    """Financial overview response schema."""

    financial_health: FinancialHealth
    income_metrics: IncomeMetrics
    spending_metrics: SpendingMetrics
    time_series: TimeSeries
    recommendations: Recommendations
    period: PeriodInfo


class CategoriesSummary(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    income_categories_count: int
    expense_categories_count: int
    top_income_category: str
    top_income_percentage: Decimal
    top_expense_category: str
    top_expense_percentage: Decimal


class CategoriesReportResponse(BaseModel):
    """Categories breakdown response schema."""

    income_categories: list[CategoryAmount]
    expense_categories: list[CategoryAmount]
    summary: CategoriesSummary
    period: PeriodInfo


class AgingTransaction(BaseModel):
    """Unpaid transaction with its due-date status."""

    id: UUID | str
    description: str
    date: date
    due_date: date
    amount: Decimal
    status: TransactionStatus
    is_overdue: bool
    days_overdue: int


class AgingSummary(BaseModel):
    total: Decimal
    overdue: Decimal
    count: int
    overdue_count: int
    transactions: list[AgingTransaction]


class AccountsReportResponse(BaseModel):
    """Receivable/payable aging response schema."""

    receivable: AgingSummary
    payable: AgingSummary
    period_label: str
    period: PeriodInfo


class TransactionSummaryResponse(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    transaction_count: int
    paid_count: int
    unpaid_count: int
    period: PeriodInfo


class CategoryStatsResponse(BaseModel):
    total_categories: int
    income_categories: int
    expense_categories: int
    parent_categories: int
