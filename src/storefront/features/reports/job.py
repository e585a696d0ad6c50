"""Daily report generation.

``generate_daily_report`` is the single entry point used by the scheduler
and by the manual admin trigger. A run moves through
``computing -> persisted | skipped | failed``; the outcome is returned, never
raised, so a failed run cannot take down the scheduler loop.

The Report insert is the commit point. Records are flagged as processed only
after it succeeds; if flagging fails the report stands and the leftover
records stay eligible for a later run.
"""
import datetime
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tortoise.exceptions import IntegrityError

from ...core.dates import business_today, day_bounds
from ..expenses.models import Expense
from ..sales.models import Sale
from .aggregation import aggregate
from .models import Report, ReportType

logger = logging.getLogger(__name__)

JOB_NAME = "daily-report"


class ReportJobStatus(str, Enum):
    IDLE = "idle"
    COMPUTING = "computing"
    PERSISTED = "persisted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ReportJobResult:
    date: str
    status: ReportJobStatus = ReportJobStatus.IDLE
    report: Optional[Report] = None
    error: Optional[str] = None
    sales_processed: int = 0
    expenses_processed: int = 0


async def generate_daily_report(target_date: Optional[datetime.date] = None) -> ReportJobResult:
    """Build and persist the daily report for ``target_date`` (default: today).

    Only sales and expenses not yet marked ``is_processed`` are counted.
    """
    day = target_date or business_today()
    date_key = day.isoformat()
    start, end = day_bounds(day)
    result = ReportJobResult(date=date_key)
    logger.info(f"Generating daily report for {date_key}")

    try:
        if await Report.filter(date=date_key, type=ReportType.DAILY).exists():
            logger.warning(f"Report already exists for {date_key}")
            result.status = ReportJobStatus.SKIPPED
            return result

        result.status = ReportJobStatus.COMPUTING
        sales = await Sale.filter(date__gte=start, date__lt=end, is_processed=False).prefetch_related("items")
        expenses = await Expense.filter(date__gte=start, date__lt=end, is_processed=False)
        totals = aggregate(sales, expenses)

        try:
            report = await Report.create(date=date_key, type=ReportType.DAILY, **totals.model_dump())
        except IntegrityError:
            # A concurrent run inserted the same date first.
            logger.warning(f"Report already exists for {date_key}")
            result.status = ReportJobStatus.SKIPPED
            return result
    except Exception as e:
        logger.error(f"Error generating daily report for {date_key}: {e}", exc_info=True)
        result.status = ReportJobStatus.FAILED
        result.error = str(e)
        return result

    result.status = ReportJobStatus.PERSISTED
    result.report = report
    try:
        sale_ids = [sale.id for sale in sales]
        expense_ids = [expense.id for expense in expenses]
        if sale_ids:
            result.sales_processed = await Sale.filter(id__in=sale_ids).update(is_processed=True)
        if expense_ids:
            result.expenses_processed = await Expense.filter(id__in=expense_ids).update(is_processed=True)
    except Exception as e:
        logger.error(
            f"Report {date_key} saved but marking records as processed failed: {e}", exc_info=True
        )
        result.error = str(e)

    logger.info(
        f"Daily report for {date_key} saved: {result.sales_processed} sales, "
        f"{result.expenses_processed} expenses processed"
    )
    return result


async def run_scheduled_daily_report() -> ReportJobResult:
    """Scheduler hook; today's business date is resolved at run time."""
    return await generate_daily_report()
