from .linear_report import LinearReportGenerator
from .tree_report import HierarchicalTreeBuilder
from .pivot_report import PivotTableBuilder, pivot_columns
from .report_service import ReportService

__all__ = [
    "LinearReportGenerator",
    "HierarchicalTreeBuilder",
    "PivotTableBuilder",
    "pivot_columns",
    "ReportService",
]
