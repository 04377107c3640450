"""Ledger transaction model."""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DECIMAL, Date, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_insights.database import Base
from ledger_insights.models.base import ProfileOwnedMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from ledger_insights.models.category import Category


class TransactionStatus(str, enum.Enum):
    """Settlement status of a transaction."""

    PAID = "PAID"
    UNPAID = "UNPAID"


class Transaction(Base, UUIDMixin, ProfileOwnedMixin, TimestampMixin):
    """
    A dated, signed monetary movement.

    Positive amounts are income, negative amounts are expenses. The write path
    rejects zero amounts; this service only ever reads these rows.
    """

    __tablename__ = "transactions"

    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(15, 2), nullable=False)
    tax_amount: Mapped[Decimal | None] = mapped_column(DECIMAL(15, 2), nullable=True)
    status: Mapped[TransactionStatus] = mapped_column(
        Enum(TransactionStatus, name="transaction_status_enum", native_enum=False),
        nullable=False,
        default=TransactionStatus.UNPAID,
    )
    due_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )

    category: Mapped[Category | None] = relationship("Category", back_populates="transactions")

    def __repr__(self) -> str:
        return f"<Transaction {self.date} {self.amount}>"
