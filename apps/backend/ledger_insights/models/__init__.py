"""SQLAlchemy models package."""

from ledger_insights.models.category import Category, CategoryType
from ledger_insights.models.transaction import Transaction, TransactionStatus

__all__ = [
    "Category",
    "CategoryType",
    "Transaction",
    "TransactionStatus",
]
