"""Category model with a two-level parent/child hierarchy."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledger_insights.database import Base
from ledger_insights.models.base import ProfileOwnedMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from ledger_insights.models.transaction import Transaction


class CategoryType(str, enum.Enum):
    """Category type classification."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Category(Base, UUIDMixin, ProfileOwnedMixin, TimestampMixin):
    """
    Category assigned to ledger transactions.

    A category with ``is_parent`` set may own children and is itself a valid
    assignment target. Children point at their parent through ``parent_id``.
    """

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[CategoryType] = mapped_column(
        Enum(CategoryType, name="category_type_enum", native_enum=False),
        nullable=False,
    )
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), nullable=True, index=True
    )
    is_parent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    parent: Mapped[Category | None] = relationship("Category", remote_side="Category.id", back_populates="children")
    children: Mapped[list[Category]] = relationship("Category", back_populates="parent")
    transactions: Mapped[list[Transaction]] = relationship("Transaction", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category {self.name} ({self.type.value})>"
