from .report import (
    PeriodResponse,
    CategoryMonthlyItem,
    MonthlyTotalItem,
    PeriodReportResponse,
    AnnualReportResponse,
    DashboardSummaryResponse,
    TreeNodeResponse,
    ExpenseTreeResponse,
    PivotTreeNodeResponse,
    PivotTreeResponse,
)

__all__ = [
    "PeriodResponse",
    "CategoryMonthlyItem",
    "MonthlyTotalItem",
    "PeriodReportResponse",
    "AnnualReportResponse",
    "DashboardSummaryResponse",
    "TreeNodeResponse",
    "ExpenseTreeResponse",
    "PivotTreeNodeResponse",
    "PivotTreeResponse",
]
