"""Read access to ledger transactions and categories.

Report assemblers only ever talk to a ``LedgerGateway``. Rows come back as
immutable snapshots already scoped to one owner, so nothing downstream filters
by owner or touches the ORM.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ledger_insights.constants.error_ids import ErrorIds
from ledger_insights.logger import async_log_timing, get_logger
from ledger_insights.models import Category, CategoryType, Transaction, TransactionStatus

logger = get_logger(__name__)


class GatewayUnavailableError(Exception):
    """Raised when the ledger store cannot be queried."""

    pass


@dataclass(frozen=True)
class TransactionRow:
    id: UUID | str
    date: date
    amount: Decimal
    status: TransactionStatus = TransactionStatus.PAID
    due_date: date | None = None
    category_id: UUID | str | None = None
    tax_amount: Decimal | None = None
    description: str = ""
    notes: str | None = None

    @classmethod
    def from_model(cls, txn: Transaction) -> TransactionRow:
        return cls(
            id=txn.id,
            date=txn.date,
            amount=Decimal(str(txn.amount)),
            status=txn.status,
            due_date=txn.due_date,
            category_id=txn.category_id,
            tax_amount=Decimal(str(txn.tax_amount)) if txn.tax_amount is not None else None,
            description=txn.description,
            notes=txn.notes,
        )


@dataclass(frozen=True)
class CategoryRow:
    id: UUID | str
    name: str
    type: CategoryType
    is_parent: bool = False
    parent_id: UUID | str | None = None

    @classmethod
    def from_model(cls, category: Category) -> CategoryRow:
        return cls(
            id=category.id,
            name=category.name,
            type=category.type,
            is_parent=category.is_parent,
            parent_id=category.parent_id,
        )


class LedgerGateway(Protocol):
    """Query interface the report assemblers depend on."""

    async def fetch_transactions(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
        *,
        status: TransactionStatus | None = None,
        category_id: UUID | None = None,
    ) -> list[TransactionRow]: ...

    async def fetch_categories(self, owner_id: str) -> list[CategoryRow]: ...


class SqlLedgerGateway:
    """``LedgerGateway`` backed by the ledger tables through SQLAlchemy.

    Each fetch runs in its own session so that independent fetches of one
    report can be awaited concurrently.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def fetch_transactions(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
        *,
        status: TransactionStatus | None = None,
        category_id: UUID | None = None,
    ) -> list[TransactionRow]:
        stmt = (
            select(Transaction)
            .where(Transaction.profile_id == owner_id)
            .where(Transaction.date >= start_date)
            .where(Transaction.date <= end_date)
            .order_by(Transaction.date, Transaction.id)
        )
        if status is not None:
            stmt = stmt.where(Transaction.status == status)
        if category_id is not None:
            stmt = stmt.where(Transaction.category_id == category_id)

        async with async_log_timing(
            "fetch_transactions",
            logger=logger,
            level="debug",
            owner_id=owner_id,
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
        ) as ctx:
            try:
                async with self._session_maker() as session:
                    result = await session.execute(stmt)
                    rows = [TransactionRow.from_model(txn) for txn in result.scalars().all()]
            except (SQLAlchemyError, OSError) as exc:
                logger.error(
                    "Transaction fetch failed",
                    error_id=ErrorIds.GATEWAY_UNAVAILABLE,
                    owner_id=owner_id,
                    error=str(exc),
                )
                raise GatewayUnavailableError(str(exc)) from exc
            ctx["rows"] = len(rows)
        return rows

    async def fetch_categories(self, owner_id: str) -> list[CategoryRow]:
        stmt = select(Category).where(Category.profile_id == owner_id).order_by(Category.name)
        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                return [CategoryRow.from_model(category) for category in result.scalars().all()]
        except (SQLAlchemyError, OSError) as exc:
            logger.error(
                "Category fetch failed",
                error_id=ErrorIds.GATEWAY_UNAVAILABLE,
                owner_id=owner_id,
                error=str(exc),
            )
            raise GatewayUnavailableError(str(exc)) from exc
