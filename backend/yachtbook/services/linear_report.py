from collections.abc import Mapping, Sequence
from decimal import Decimal
from types import MappingProxyType

from ..domain import (
    MONTHS,
    AnnualReport,
    DashboardSummary,
    EntryKind,
    MonthlyBreakdown,
    MonthlyTotal,
    Period,
    PeriodReport,
    ReportEntry,
)
from ..logging_config import get_logger
from .grouping import ZERO, base_amount_of, group_by

logger = get_logger(__name__)


class LinearReportGenerator:
    """Income/expense reports with per-category monthly breakdowns and running balances."""

    def generate_annual_report(self, entries: Sequence[ReportEntry], year: int) -> AnnualReport:
        period = Period.of_year(year)
        breakdowns, totals = self._build(entries, period)
        return AnnualReport(
            period=period,
            category_breakdowns=breakdowns,
            monthly_totals=totals,
        )

    def generate_period_report(self, entries: Sequence[ReportEntry], period: Period) -> PeriodReport:
        breakdowns, totals = self._build(entries, period)
        return PeriodReport(
            period=period,
            category_breakdowns=breakdowns,
            monthly_totals=totals,
        )

    def generate_summary(self, entries: Sequence[ReportEntry], period: Period) -> DashboardSummary:
        """Income and expense totals and counts for a period."""
        income = [e for e in entries if e.kind == EntryKind.INCOME and period.contains(e.entry_date)]
        expense = [e for e in entries if e.kind == EntryKind.EXPENSE and period.contains(e.entry_date)]
        return DashboardSummary(
            period=period,
            total_income=sum((base_amount_of(e) for e in income), ZERO),
            total_expense=sum((base_amount_of(e) for e in expense), ZERO),
            income_count=len(income),
            expense_count=len(expense),
        )

    def _build(
        self,
        entries: Sequence[ReportEntry],
        period: Period,
    ) -> tuple[tuple[MonthlyBreakdown, ...], Mapping[int, MonthlyTotal]]:
        period_entries = [e for e in entries if period.contains(e.entry_date)]

        breakdowns = self._category_breakdowns(period_entries)
        totals = self._monthly_totals(period_entries)

        logger.debug(
            f"Linear report for {period}: {len(period_entries)} of {len(entries)} entries, "
            f"{len(breakdowns)} expense categories"
        )
        return breakdowns, totals

    @staticmethod
    def _category_breakdowns(entries: list[ReportEntry]) -> tuple[MonthlyBreakdown, ...]:
        expenses = [e for e in entries if e.kind == EntryKind.EXPENSE]

        breakdowns = []
        for name, group in group_by(expenses, lambda e: e.category_name).items():
            amounts = dict.fromkeys(MONTHS, ZERO)
            for entry in group:
                amounts[entry.entry_date.month] += base_amount_of(entry)
            breakdowns.append(MonthlyBreakdown(
                category_name=name,
                monthly_amounts=MappingProxyType(amounts),
            ))

        # Largest categories first; names break ties so output order is stable
        breakdowns.sort(key=lambda b: (-b.total, b.category_name))
        return tuple(breakdowns)

    @staticmethod
    def _monthly_totals(entries: list[ReportEntry]) -> Mapping[int, MonthlyTotal]:
        income = dict.fromkeys(MONTHS, ZERO)
        expense = dict.fromkeys(MONTHS, ZERO)

        for entry in entries:
            month = entry.entry_date.month
            if entry.kind == EntryKind.INCOME:
                income[month] += base_amount_of(entry)
            else:
                expense[month] += base_amount_of(entry)

        totals = {}
        cumulative = Decimal("0")
        for month in MONTHS:
            cumulative += income[month] - expense[month]
            totals[month] = MonthlyTotal(
                income=income[month],
                expense=expense[month],
                cumulative=cumulative,
            )
        return MappingProxyType(totals)
