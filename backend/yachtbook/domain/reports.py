"""Report value types produced by the generators. Built once, never mutated."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from .period import Period

MONTHS = tuple(range(1, 13))
TOTAL_COLUMN = "TOTAL"

_ZERO = Decimal("0")


# --- Linear reports ---

@dataclass(frozen=True)
class MonthlyBreakdown:
    """Expense amounts of one category, bucketed by calendar month (1..12)."""
    category_name: str
    monthly_amounts: Mapping[int, Decimal]

    def amount_for_month(self, month: int) -> Decimal:
        return self.monthly_amounts.get(month, _ZERO)

    @property
    def total(self) -> Decimal:
        return sum(self.monthly_amounts.values(), _ZERO)


@dataclass(frozen=True)
class MonthlyTotal:
    income: Decimal
    expense: Decimal
    cumulative: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class PeriodReport:
    """
    Income/expense report over a period.

    ``monthly_totals`` always holds all twelve calendar months, each with its
    running balance, whatever the span of the period.
    """

    period: Period
    category_breakdowns: tuple[MonthlyBreakdown, ...]
    monthly_totals: Mapping[int, MonthlyTotal]

    @property
    def total_income(self) -> Decimal:
        return sum((t.income for t in self.monthly_totals.values()), _ZERO)

    @property
    def total_expense(self) -> Decimal:
        return sum((t.expense for t in self.monthly_totals.values()), _ZERO)

    @property
    def net_balance(self) -> Decimal:
        return self.total_income - self.total_expense

    @property
    def grand_total(self) -> Decimal:
        """Sum of every category breakdown, i.e. the total expense."""
        return sum((b.total for b in self.category_breakdowns), _ZERO)

    @property
    def remaining_money(self) -> Decimal:
        return self.total_income - self.grand_total

    def breakdown_for(self, category_name: str) -> MonthlyBreakdown | None:
        for breakdown in self.category_breakdowns:
            if breakdown.category_name == category_name:
                return breakdown
        return None


@dataclass(frozen=True)
class AnnualReport(PeriodReport):
    """PeriodReport over one full calendar year."""

    @property
    def year(self) -> int:
        return self.period.year


@dataclass(frozen=True)
class DashboardSummary:
    period: Period
    total_income: Decimal
    total_expense: Decimal
    income_count: int
    expense_count: int

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense


# --- Expense trees ---

class NodeType(enum.Enum):
    """Tree level a node belongs to."""
    CLASSIFICATION = "CLASSIFICATION"  # level 1
    CATEGORY = "CATEGORY"              # level 2
    ACTOR = "ACTOR"                    # level 3


@dataclass(frozen=True)
class TreeNode:
    """
    One node of the expense tree.

    ``percentage`` is relative to the parent node's amount; level-1 nodes are
    relative to the report's total amount.
    """

    level: int
    type: NodeType
    id: str | None
    name: str
    name_en: str
    amount: Decimal
    percentage: Decimal
    is_technical: bool | None = None
    children: tuple[TreeNode, ...] = ()

    @property
    def child_count(self) -> int:
        return len(self.children)


@dataclass(frozen=True)
class ExpenseTreeReport:
    period: Period
    currency: str
    total_amount: Decimal
    rows: tuple[TreeNode, ...]


@dataclass(frozen=True)
class PivotTreeNode:
    """Expense tree node whose value is spread over month columns plus TOTAL."""
    id: str
    level: int
    type: NodeType
    name: str
    name_en: str
    is_technical: bool | None
    monthly_values: Mapping[str, Decimal]
    children: tuple[PivotTreeNode, ...] = ()

    @property
    def total(self) -> Decimal:
        return self.monthly_values[TOTAL_COLUMN]


@dataclass(frozen=True)
class PivotTreeReport:
    year: int
    currency: str
    columns: tuple[str, ...]
    column_totals: Mapping[str, Decimal]
    rows: tuple[PivotTreeNode, ...]
