"""Report API Schemas

Pydantic models for the reporting endpoints:

1. Report query parameters (single day or trailing window)
2. Aggregate summaries (sales, expenses, net profit)
3. Sales-only and expenses-only breakdowns
4. Stock by category
5. Persisted daily report snapshots"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List
import datetime

from .models import ReportType


class WindowType(str, Enum):
    DAILY = "daily"
    RANGE = "range"


class ReportWindowQuery(BaseModel):
    date: datetime.date = Field(..., description="Last day of the window (YYYY-MM-DD)")
    type: WindowType = Field(WindowType.DAILY, description="daily or range")
    days: int = Field(20, ge=1, le=366, description="Window length for range reports")


class ReportAggregates(BaseModel):
    total_products_sold: int = 0
    total_sales: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    sales_by_payment_method: Dict[str, float] = Field(default_factory=dict)


class SummaryReportResponse(ReportAggregates):
    type: WindowType
    start_date: datetime.date
    end_date: datetime.date


class SalesReportResponse(BaseModel):
    type: WindowType
    start_date: datetime.date
    end_date: datetime.date
    total_sales: float
    total_products_sold: int
    sale_count: int
    sales_by_payment_method: Dict[str, float]


class ExpensesReportResponse(BaseModel):
    type: WindowType
    start_date: datetime.date
    end_date: datetime.date
    total_expenses: float
    expense_count: int
    expenses_by_type: Dict[str, float]


class CategoryStock(BaseModel):
    category: str
    total_quantity: int


class StockReportResponse(BaseModel):
    categories: List[CategoryStock]


class DailyReportResponse(ReportAggregates):
    public_id: str
    date: str
    type: ReportType
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
