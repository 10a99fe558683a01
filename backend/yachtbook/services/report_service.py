from datetime import date
from sqlalchemy.orm import Session, joinedload

from ..domain import (
    AnnualReport,
    BaseCurrencyMismatchError,
    DashboardSummary,
    DimensionRecord,
    ExpenseTreeReport,
    Period,
    PeriodReport,
    PivotTreeReport,
    ReportEntry,
)
from ..logging_config import get_logger
from ..models import FinancialEntry, MainCategory, Who
from .linear_report import LinearReportGenerator
from .pivot_report import PivotTableBuilder
from .tree_report import HierarchicalTreeBuilder

logger = get_logger(__name__)


class ReportService:
    """
    Loads ledger entries from the database and runs the report generators.

    Entries for a report are read in one query, so every report is computed
    from a single snapshot. Reference rows are fetched in batches through
    find_main_categories / find_actors, which the tree builders call once each.
    """

    def __init__(self, db: Session, base_currency: str = "EUR"):
        self.db = db
        self.base_currency = base_currency
        self.linear = LinearReportGenerator()
        self.tree = HierarchicalTreeBuilder(self.find_main_categories, self.find_actors)
        self.pivot = PivotTableBuilder(self.find_main_categories, self.find_actors)

    def load_entries(self, start_date: date, end_date: date) -> list[ReportEntry]:
        rows = (
            self.db.query(FinancialEntry)
            .options(joinedload(FinancialEntry.category))
            .filter(FinancialEntry.entry_date >= start_date)
            .filter(FinancialEntry.entry_date <= end_date)
            .order_by(FinancialEntry.entry_date.desc(), FinancialEntry.id.desc())
            .all()
        )
        entries = [row.to_report_entry() for row in rows]
        for entry in entries:
            # Entries still awaiting conversion carry no base amount and fail in the generators
            if entry.base_amount is not None and not entry.base_amount.is_currency(self.base_currency):
                raise BaseCurrencyMismatchError(entry, self.base_currency)
        return entries

    def find_main_categories(self, ids: frozenset[int]) -> dict[int, DimensionRecord]:
        rows = self.db.query(MainCategory).filter(MainCategory.id.in_(ids)).all()
        return {row.id: row.to_record() for row in rows}

    def find_actors(self, ids: frozenset[int]) -> dict[int, DimensionRecord]:
        rows = self.db.query(Who).filter(Who.id.in_(ids)).all()
        return {row.id: row.to_record() for row in rows}

    def annual_report(self, year: int) -> AnnualReport:
        period = Period.of_year(year)
        entries = self.load_entries(period.start, period.end)
        logger.info(f"Generating annual report for {year} from {len(entries)} entries")
        return self.linear.generate_annual_report(entries, year)

    def period_report(self, period: Period) -> PeriodReport:
        entries = self.load_entries(period.start, period.end)
        logger.info(f"Generating period report for {period} from {len(entries)} entries")
        return self.linear.generate_period_report(entries, period)

    def dashboard_summary(self, period: Period) -> DashboardSummary:
        entries = self.load_entries(period.start, period.end)
        return self.linear.generate_summary(entries, period)

    def expense_tree(self, period: Period) -> ExpenseTreeReport:
        entries = self.load_entries(period.start, period.end)
        logger.info(f"Generating expense tree for {period} from {len(entries)} entries")
        return self.tree.build(entries, period, self.base_currency)

    def pivot_report(self, year: int) -> PivotTreeReport:
        period = Period.of_year(year)
        entries = self.load_entries(period.start, period.end)
        logger.info(f"Generating pivot report for {year} from {len(entries)} entries")
        return self.pivot.build(entries, year, self.base_currency)
