from typing import Iterable, Sequence

from .schemas import ReportAggregates


def aggregate(sales: Iterable, expenses: Iterable) -> ReportAggregates:
    """Fold sales (with prefetched ``items``) and expenses into report totals.

    Works on plain sequences so the same arithmetic backs the on-demand
    queries and the persisted daily snapshots.
    """
    total_products_sold = 0
    total_sales = 0.0
    by_method: dict[str, float] = {}
    for sale in sales:
        total_products_sold += sum(item.quantity for item in sale.items)
        total_sales += sale.total
        method = _enum_value(sale.payment_method)
        by_method[method] = by_method.get(method, 0.0) + sale.total

    total_expenses = sum((expense.amount for expense in expenses), 0.0)
    return ReportAggregates(
        total_products_sold=total_products_sold,
        total_sales=total_sales,
        total_expenses=total_expenses,
        net_profit=total_sales - total_expenses,
        sales_by_payment_method=by_method,
    )


def sum_by(records: Sequence, key: str, value: str) -> dict[str, float]:
    totals: dict[str, float] = {}
    for record in records:
        k = _enum_value(getattr(record, key))
        totals[k] = totals.get(k, 0.0) + getattr(record, value)
    return totals


def _enum_value(value) -> str:
    return getattr(value, "value", value)
