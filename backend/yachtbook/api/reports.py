from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..domain import Period, PeriodError, PeriodType
from ..schemas import (
    AnnualReportResponse,
    DashboardSummaryResponse,
    ExpenseTreeResponse,
    PeriodReportResponse,
    PivotTreeResponse,
)
from ..services.report_service import ReportService

router = APIRouter()


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db, base_currency=get_settings().base_currency)


def _period(start_date: date, end_date: date) -> Period:
    try:
        return Period(start_date, end_date)
    except PeriodError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/annual/{year}", response_model=AnnualReportResponse)
def annual_report(
    year: int = Path(..., ge=1, le=9999),
    service: ReportService = Depends(get_report_service),
):
    """Income/expense report for a calendar year."""
    report = service.annual_report(year)
    return AnnualReportResponse.from_report(report)


@router.get("/period", response_model=PeriodReportResponse)
def period_report(
    start_date: date = Query(...),
    end_date: date = Query(...),
    service: ReportService = Depends(get_report_service),
):
    """Income/expense report for an arbitrary date range."""
    report = service.period_report(_period(start_date, end_date))
    return PeriodReportResponse.from_report(report)


@router.get("/period/{period_type}/{value}", response_model=PeriodReportResponse)
def parsed_period_report(
    period_type: PeriodType,
    value: str,
    service: ReportService = Depends(get_report_service),
):
    """Income/expense report for ``/YEAR/2024`` or ``/MONTH/2024-03``."""
    try:
        period = Period.parse(value, period_type)
    except PeriodError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PeriodReportResponse.from_report(service.period_report(period))


@router.get("/summary", response_model=DashboardSummaryResponse)
def dashboard_summary(
    start_date: date = Query(...),
    end_date: date = Query(...),
    service: ReportService = Depends(get_report_service),
):
    summary = service.dashboard_summary(_period(start_date, end_date))
    return DashboardSummaryResponse.from_summary(summary)


@router.get("/expense-tree", response_model=ExpenseTreeResponse)
def expense_tree(
    start_date: date = Query(...),
    end_date: date = Query(...),
    service: ReportService = Depends(get_report_service),
):
    """Classification -> category -> who expense tree with percentages."""
    report = service.expense_tree(_period(start_date, end_date))
    return ExpenseTreeResponse.from_report(report)


@router.get("/pivot/{year}", response_model=PivotTreeResponse)
def pivot_report(
    year: int = Path(..., ge=1, le=9999),
    service: ReportService = Depends(get_report_service),
):
    """Expense tree for a year with one column per month."""
    report = service.pivot_report(year)
    return PivotTreeResponse.from_report(report)
