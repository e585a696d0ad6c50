"""Reporting API endpoints

On-demand summaries over a day or trailing window, stock by category, and
the persisted daily report snapshots together with their manual trigger.
Access is restricted to administrators through the permission table."""
import datetime
import logging
from fastapi import APIRouter, Depends, Query, status
from typing import Annotated, List, Optional

from ..auth.authorization import authorize
from ...core.errors import DuplicateReport, ServerFault
from .schemas import (
    DailyReportResponse,
    ExpensesReportResponse,
    ReportWindowQuery,
    SalesReportResponse,
    StockReportResponse,
    SummaryReportResponse,
)
from . import service as report_service
from .job import ReportJobStatus, generate_daily_report

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    dependencies=[Depends(authorize)],
    responses={404: {"description": "Not found"}},
)


@router.get("/summary", response_model=SummaryReportResponse)
async def get_summary_report(query: Annotated[ReportWindowQuery, Query()]):
    return await report_service.generate_summary_report(query)


@router.get("/sales", response_model=SalesReportResponse)
async def get_sales_report(query: Annotated[ReportWindowQuery, Query()]):
    return await report_service.generate_sales_report(query)


@router.get("/expenses", response_model=ExpensesReportResponse)
async def get_expenses_report(query: Annotated[ReportWindowQuery, Query()]):
    return await report_service.generate_expenses_report(query)


@router.get("/stock", response_model=StockReportResponse)
async def get_stock_report():
    return await report_service.generate_stock_report()


@router.get("/daily", response_model=List[DailyReportResponse])
async def list_daily_reports(limit: int = Query(31, ge=1, le=366)):
    return await report_service.list_daily_reports(limit)


@router.get("/daily/{report_date}", response_model=DailyReportResponse)
async def get_daily_report(report_date: datetime.date):
    return await report_service.get_daily_report(report_date)


@router.post("/daily", response_model=DailyReportResponse, status_code=status.HTTP_201_CREATED)
async def trigger_daily_report(
    report_date: Optional[datetime.date] = Query(None, alias="date", description="Day to report (default: today)"),
):
    result = await generate_daily_report(report_date)
    if result.status == ReportJobStatus.SKIPPED:
        raise DuplicateReport(result.date)
    if result.status == ReportJobStatus.FAILED:
        raise ServerFault("Could not generate the daily report.")
    return result.report
