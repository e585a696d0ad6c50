import datetime
import logging
from typing import List, Optional

from ...core.dates import business_today, day_bounds, local_midnight
from ...core.errors import ExpenseNotFound
from .models import Expense
from .schemas import ExpenseCreateSchema

logger = logging.getLogger(__name__)

EXPENSES_LIST_LIMIT = 100


async def create_expense(expense_in: ExpenseCreateSchema, created_by: Optional[str] = None) -> Expense:
    """Records an expense on the given business-local calendar day."""
    expense = await Expense.create(
        type=expense_in.type,
        description=expense_in.description,
        amount=expense_in.amount,
        date=local_midnight(expense_in.date),
        created_by=created_by,
    )
    logger.info(f"Expense {expense.public_id} created by user {created_by}: {expense.amount:.2f}")
    return expense


async def list_expenses(limit: int = EXPENSES_LIST_LIMIT) -> List[Expense]:
    return await Expense.all().order_by("-date", "-created_at").limit(limit)


async def list_expenses_for_day(day: Optional[datetime.date] = None) -> List[Expense]:
    start, end = day_bounds(day or business_today())
    return await Expense.filter(date__gte=start, date__lt=end).order_by("date", "created_at")


async def get_expense(expense_public_id: str) -> Expense:
    expense = await Expense.get_or_none(public_id=expense_public_id)
    if not expense:
        raise ExpenseNotFound(expense_public_id)
    return expense


async def delete_expense(expense_public_id: str) -> None:
    expense = await get_expense(expense_public_id)
    await expense.delete()
    logger.info(f"Expense {expense_public_id} deleted")
