"""Receivable/payable aging of unpaid transactions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID

from ledger_insights.config import settings
from ledger_insights.models import TransactionStatus
from ledger_insights.services.gateway import TransactionRow


@dataclass(frozen=True)
class AgingLine:
    id: UUID | str
    description: str
    date: date
    due_date: date
    amount: Decimal
    status: TransactionStatus
    is_overdue: bool
    days_overdue: int


@dataclass
class AgingBucket:
    total: Decimal = Decimal("0")
    overdue: Decimal = Decimal("0")
    count: int = 0
    overdue_count: int = 0
    transactions: list[AgingLine] = field(default_factory=list)

    def add(self, line: AgingLine) -> None:
        self.total += line.amount
        self.count += 1
        if line.is_overdue:
            self.overdue += line.amount
            self.overdue_count += 1
        self.transactions.append(line)


@dataclass
class AgingReport:
    receivable: AgingBucket
    payable: AgingBucket


def effective_due_date(row: TransactionRow, due_days: int | None = None) -> date:
    """The row's due date, or its date plus the default payment term."""
    if row.due_date is not None:
        return row.due_date
    if due_days is None:
        due_days = settings.default_due_days
    return row.date + timedelta(days=due_days)


def _line(row: TransactionRow, as_of: date, due_days: int | None) -> AgingLine:
    due = effective_due_date(row, due_days)
    return AgingLine(
        id=row.id,
        description=row.description,
        date=row.date,
        due_date=due,
        amount=abs(row.amount),
        status=row.status,
        is_overdue=due < as_of,
        # positive when overdue, negative days remaining otherwise
        days_overdue=(as_of - due).days,
    )


def classify(
    rows: Iterable[TransactionRow],
    as_of: date,
    due_days: int | None = None,
) -> AgingReport:
    """Split unpaid rows into receivables (income) and payables (expenses).

    Lines within each bucket are ordered newest first.
    """
    ordered = sorted(
        (row for row in rows if row.status == TransactionStatus.UNPAID and row.amount != 0),
        key=lambda row: str(row.id),
    )
    ordered.sort(key=lambda row: row.date, reverse=True)

    report = AgingReport(receivable=AgingBucket(), payable=AgingBucket())
    for row in ordered:
        bucket = report.receivable if row.amount > 0 else report.payable
        bucket.add(_line(row, as_of, due_days))
    return report
