from __future__ import annotations
from datetime import date
from decimal import Decimal
from pydantic import BaseModel

from ..domain import (
    AnnualReport,
    DashboardSummary,
    ExpenseTreeReport,
    Period,
    PeriodReport,
    PivotTreeNode,
    PivotTreeReport,
    TreeNode,
)


class PeriodResponse(BaseModel):
    start_date: date
    end_date: date

    @classmethod
    def from_period(cls, period: Period) -> PeriodResponse:
        return cls(start_date=period.start, end_date=period.end)


# --- Linear reports ---

class CategoryMonthlyItem(BaseModel):
    """Expense amounts of one category per month (keys 1..12)."""
    category_name: str
    monthly_amounts: dict[int, Decimal]
    total: Decimal


class MonthlyTotalItem(BaseModel):
    month: int
    income: Decimal
    expense: Decimal
    net: Decimal
    cumulative: Decimal


class PeriodReportResponse(BaseModel):
    period: PeriodResponse
    category_breakdowns: list[CategoryMonthlyItem]
    monthly_totals: list[MonthlyTotalItem]
    total_income: Decimal
    total_expense: Decimal
    grand_total: Decimal
    remaining_money: Decimal
    net_balance: Decimal

    @classmethod
    def from_report(cls, report: PeriodReport) -> PeriodReportResponse:
        return cls(**_linear_fields(report))


class AnnualReportResponse(PeriodReportResponse):
    year: int

    @classmethod
    def from_report(cls, report: AnnualReport) -> AnnualReportResponse:
        return cls(year=report.year, **_linear_fields(report))


def _linear_fields(report: PeriodReport) -> dict:
    return {
        "period": PeriodResponse.from_period(report.period),
        "category_breakdowns": [
            CategoryMonthlyItem(
                category_name=b.category_name,
                monthly_amounts=dict(b.monthly_amounts),
                total=b.total,
            )
            for b in report.category_breakdowns
        ],
        "monthly_totals": [
            MonthlyTotalItem(
                month=month,
                income=t.income,
                expense=t.expense,
                net=t.net,
                cumulative=t.cumulative,
            )
            for month, t in sorted(report.monthly_totals.items())
        ],
        "total_income": report.total_income,
        "total_expense": report.total_expense,
        "grand_total": report.grand_total,
        "remaining_money": report.remaining_money,
        "net_balance": report.net_balance,
    }


class DashboardSummaryResponse(BaseModel):
    period: PeriodResponse
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    income_count: int
    expense_count: int

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> DashboardSummaryResponse:
        return cls(
            period=PeriodResponse.from_period(summary.period),
            total_income=summary.total_income,
            total_expense=summary.total_expense,
            balance=summary.balance,
            income_count=summary.income_count,
            expense_count=summary.expense_count,
        )


# --- Expense tree ---

class TreeNodeResponse(BaseModel):
    level: int
    type: str
    id: str | None
    name: str
    name_en: str
    amount: Decimal
    percentage: Decimal
    is_technical: bool | None = None
    child_count: int
    children: list[TreeNodeResponse]

    @classmethod
    def from_node(cls, node: TreeNode) -> TreeNodeResponse:
        return cls(
            level=node.level,
            type=node.type.value,
            id=node.id,
            name=node.name,
            name_en=node.name_en,
            amount=node.amount,
            percentage=node.percentage,
            is_technical=node.is_technical,
            child_count=node.child_count,
            children=[cls.from_node(child) for child in node.children],
        )


class ExpenseTreeResponse(BaseModel):
    period: PeriodResponse
    currency: str
    total_amount: Decimal
    rows: list[TreeNodeResponse]

    @classmethod
    def from_report(cls, report: ExpenseTreeReport) -> ExpenseTreeResponse:
        return cls(
            period=PeriodResponse.from_period(report.period),
            currency=report.currency,
            total_amount=report.total_amount,
            rows=[TreeNodeResponse.from_node(node) for node in report.rows],
        )


# --- Pivot ---

class PivotTreeNodeResponse(BaseModel):
    id: str
    level: int
    type: str
    name: str
    name_en: str
    is_technical: bool | None = None
    monthly_values: dict[str, Decimal]
    children: list[PivotTreeNodeResponse]

    @classmethod
    def from_node(cls, node: PivotTreeNode) -> PivotTreeNodeResponse:
        return cls(
            id=node.id,
            level=node.level,
            type=node.type.value,
            name=node.name,
            name_en=node.name_en,
            is_technical=node.is_technical,
            monthly_values=dict(node.monthly_values),
            children=[cls.from_node(child) for child in node.children],
        )


class PivotTreeResponse(BaseModel):
    year: int
    currency: str
    columns: list[str]
    column_totals: dict[str, Decimal]
    rows: list[PivotTreeNodeResponse]

    @classmethod
    def from_report(cls, report: PivotTreeReport) -> PivotTreeResponse:
        return cls(
            year=report.year,
            currency=report.currency,
            columns=list(report.columns),
            column_totals=dict(report.column_totals),
            rows=[PivotTreeNodeResponse.from_node(node) for node in report.rows],
        )
