from .exceptions import (
    YachtbookError,
    MoneyError,
    InvalidCurrencyError,
    NegativeAmountError,
    CurrencyMismatchError,
    InvalidExchangeRateError,
    DivisionByZeroError,
    PeriodError,
    InvalidPeriodError,
    ReportInputError,
    MissingBaseAmountError,
    BaseCurrencyMismatchError,
)
from .currency import CurrencyRegistry
from .money import Money
from .period import Period, PeriodType
from .entry import (
    EntryKind,
    ReportEntry,
    DimensionRecord,
    DimensionLookup,
    Present,
    Absent,
    ABSENT,
    GroupKey,
    group_key,
)
from .reports import (
    MONTHS,
    TOTAL_COLUMN,
    MonthlyBreakdown,
    MonthlyTotal,
    PeriodReport,
    AnnualReport,
    DashboardSummary,
    NodeType,
    TreeNode,
    ExpenseTreeReport,
    PivotTreeNode,
    PivotTreeReport,
)

__all__ = [
    "YachtbookError",
    "MoneyError",
    "InvalidCurrencyError",
    "NegativeAmountError",
    "CurrencyMismatchError",
    "InvalidExchangeRateError",
    "DivisionByZeroError",
    "PeriodError",
    "InvalidPeriodError",
    "ReportInputError",
    "MissingBaseAmountError",
    "BaseCurrencyMismatchError",
    "CurrencyRegistry",
    "Money",
    "Period",
    "PeriodType",
    "EntryKind",
    "ReportEntry",
    "DimensionRecord",
    "DimensionLookup",
    "Present",
    "Absent",
    "ABSENT",
    "GroupKey",
    "group_key",
    "MONTHS",
    "TOTAL_COLUMN",
    "MonthlyBreakdown",
    "MonthlyTotal",
    "PeriodReport",
    "AnnualReport",
    "DashboardSummary",
    "NodeType",
    "TreeNode",
    "ExpenseTreeReport",
    "PivotTreeNode",
    "PivotTreeReport",
]
