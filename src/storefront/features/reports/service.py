"""
Reports Service Module

On-demand report queries. Every function here is read-only: it aggregates
Sale and Expense rows over a business-timezone window and never touches the
persisted daily snapshots or the ``is_processed`` flags.
"""

import datetime
import logging
from typing import List, Tuple

from ...core.dates import window_bounds
from ...core.errors import ReportNotFound, ValidationFailed
from ..expenses.models import Expense
from ..products.models import Product
from ..sales.models import Sale
from .aggregation import aggregate, sum_by
from .models import Report, ReportType
from .schemas import (
    CategoryStock,
    ExpensesReportResponse,
    ReportWindowQuery,
    SalesReportResponse,
    StockReportResponse,
    SummaryReportResponse,
    WindowType,
)

logger = logging.getLogger(__name__)


def resolve_window(query: ReportWindowQuery) -> Tuple[datetime.date, datetime.date, datetime.datetime, datetime.datetime]:
    """Calendar days and UTC bounds covered by a report query.

    Returns:
        (first_day, last_day, start, end) where ``[start, end)`` spans the
        business-local days ``first_day`` through ``last_day`` inclusive.
    """
    days = 1 if query.type == WindowType.DAILY else query.days
    try:
        start, end = window_bounds(query.date, days)
        first_day = query.date - datetime.timedelta(days=days - 1)
    except (ValueError, OverflowError) as e:
        raise ValidationFailed(f"Invalid report window: {e}")
    return first_day, query.date, start, end


async def _sales_between(start: datetime.datetime, end: datetime.datetime) -> List[Sale]:
    return await Sale.filter(date__gte=start, date__lt=end).prefetch_related("items")


async def _expenses_between(start: datetime.datetime, end: datetime.datetime) -> List[Expense]:
    return await Expense.filter(date__gte=start, date__lt=end)


async def generate_summary_report(query: ReportWindowQuery) -> SummaryReportResponse:
    """
    Aggregates sales and expenses for a single day or a trailing window.

    Args:
        query: The last day of the window, its type and (for range) length.

    Returns:
        SummaryReportResponse: totals, net profit and sales by payment method.
        A window without records yields zero-valued aggregates.
    """
    first_day, last_day, start, end = resolve_window(query)
    sales = await _sales_between(start, end)
    expenses = await _expenses_between(start, end)
    totals = aggregate(sales, expenses)
    logger.debug(f"Summary {first_day}..{last_day}: {len(sales)} sales, {len(expenses)} expenses")
    return SummaryReportResponse(
        type=query.type, start_date=first_day, end_date=last_day, **totals.model_dump()
    )


async def generate_sales_report(query: ReportWindowQuery) -> SalesReportResponse:
    first_day, last_day, start, end = resolve_window(query)
    sales = await _sales_between(start, end)
    totals = aggregate(sales, [])
    return SalesReportResponse(
        type=query.type,
        start_date=first_day,
        end_date=last_day,
        total_sales=totals.total_sales,
        total_products_sold=totals.total_products_sold,
        sale_count=len(sales),
        sales_by_payment_method=totals.sales_by_payment_method,
    )


async def generate_expenses_report(query: ReportWindowQuery) -> ExpensesReportResponse:
    first_day, last_day, start, end = resolve_window(query)
    expenses = await _expenses_between(start, end)
    return ExpensesReportResponse(
        type=query.type,
        start_date=first_day,
        end_date=last_day,
        total_expenses=sum((e.amount for e in expenses), 0.0),
        expense_count=len(expenses),
        expenses_by_type=sum_by(expenses, "type", "amount"),
    )


async def generate_stock_report() -> StockReportResponse:
    """Current units in stock, grouped by product category."""
    products = await Product.all().only("category", "quantity")
    totals = sum_by(products, "category", "quantity")
    return StockReportResponse(
        categories=[
            CategoryStock(category=category, total_quantity=int(quantity))
            for category, quantity in sorted(totals.items())
        ]
    )


async def list_daily_reports(limit: int) -> List[Report]:
    return await Report.filter(type=ReportType.DAILY).order_by("-date").limit(limit)


async def get_daily_report(report_date: datetime.date) -> Report:
    report = await Report.get_or_none(date=report_date.isoformat(), type=ReportType.DAILY)
    if not report:
        raise ReportNotFound(report_date.isoformat())
    return report
