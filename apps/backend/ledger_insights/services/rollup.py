"""Category rollups over a two-level category hierarchy."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal
from uuid import UUID

from ledger_insights.services.gateway import CategoryRow, TransactionRow
from ledger_insights.services.metrics import round_percentage, share

UNCATEGORIZED = "Uncategorized"
GENERAL = "General"

RollupKind = Literal["income", "expense"]


@dataclass
class StatementRow:
    category: str
    subcategory: str
    amount: Decimal
    percentage: Decimal = Decimal("0")
    is_direct_parent_entry: bool = False
    transactions: int = 0


@dataclass
class CategoryLine:
    name: str
    amount: Decimal
    percentage: Decimal = Decimal("0")
    transactions: int = 0
    # False for the bucket of rows without a known category
    categorized: bool = True


def _root_parent(category: CategoryRow, by_id: Mapping[UUID | str, CategoryRow]) -> CategoryRow | None:
    """Walk ``parent_id`` links up to the top-most ancestor.

    Returns ``None`` for a category without a parent or whose chain is
    broken (unknown id or a cycle).
    """
    seen = {category.id}
    current = category
    while current.parent_id is not None:
        parent = by_id.get(current.parent_id)
        if parent is None or parent.id in seen:
            return None
        seen.add(parent.id)
        current = parent
    if current is category:
        return None
    return current


def _placement(
    category: CategoryRow | None,
    by_id: Mapping[UUID | str, CategoryRow],
) -> tuple[str, str, bool]:
    if category is None:
        return UNCATEGORIZED, UNCATEGORIZED, False
    if category.is_parent:
        return category.name, GENERAL, True
    root = _root_parent(category, by_id)
    if root is not None:
        return root.name, category.name, False
    return category.name, category.name, False


def rollup_expenses(
    rows: Iterable[TransactionRow],
    categories: Iterable[CategoryRow],
) -> list[StatementRow]:
    """Roll expense transactions up into category/subcategory rows.

    A category flagged ``is_parent`` reports its own transactions under
    ``General``. Children, at any depth, report under their top-most
    ancestor. Everything else reports under its own name. Every expense
    lands in exactly one row.
    """
    by_id = {category.id: category for category in categories}
    grouped: dict[tuple[str, str, bool], StatementRow] = {}
    total = Decimal("0")

    for row in rows:
        if row.amount >= 0:
            continue
        magnitude = -row.amount
        total += magnitude
        key = _placement(by_id.get(row.category_id) if row.category_id is not None else None, by_id)
        line = grouped.get(key)
        if line is None:
            category_name, subcategory, direct = key
            line = StatementRow(
                category=category_name,
                subcategory=subcategory,
                amount=Decimal("0"),
                is_direct_parent_entry=direct,
            )
            grouped[key] = line
        line.amount += magnitude
        line.transactions += 1

    result = sorted(
        grouped.values(),
        key=lambda line: (line.category, line.is_direct_parent_entry, line.subcategory),
    )
    for line in result:
        line.percentage = round_percentage(share(line.amount, total))
    return result


def rollup_by_category(
    rows: Iterable[TransactionRow],
    categories: Iterable[CategoryRow],
    kind: RollupKind,
) -> list[CategoryLine]:
    """Flat rollup by category name, largest amount first."""
    if kind not in ("income", "expense"):
        raise ValueError(f"Unsupported rollup kind: {kind}")

    names = {category.id: category.name for category in categories}
    grouped: dict[tuple[str, bool], CategoryLine] = {}
    total = Decimal("0")

    for row in rows:
        if kind == "income" and row.amount <= 0:
            continue
        if kind == "expense" and row.amount >= 0:
            continue
        magnitude = abs(row.amount)
        total += magnitude
        name = names.get(row.category_id) if row.category_id is not None else None
        key = (name if name is not None else UNCATEGORIZED, name is not None)
        line = grouped.get(key)
        if line is None:
            line = CategoryLine(name=key[0], amount=Decimal("0"), categorized=key[1])
            grouped[key] = line
        line.amount += magnitude
        line.transactions += 1

    result = sorted(grouped.values(), key=lambda line: (-line.amount, line.name))
    for line in result:
        line.percentage = round_percentage(share(line.amount, total))
    return result
