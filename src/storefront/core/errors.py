"""HTTP-aware error taxonomy shared by the services and routers.

Every error is an ``HTTPException`` so services can raise it directly (also
from inside a transaction, which rolls the transaction back) and FastAPI
renders it with the right status code.
"""
from typing import Any, Optional

from fastapi import HTTPException, status


class Unauthenticated(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Operation not permitted for this user role."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ValidationFailed(HTTPException):
    def __init__(self, detail: Any = "Invalid data"):
        super().__init__(status_code=422, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ProductNotFound(NotFound):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(detail=f"Product {product_id} not found.")


class SaleNotFound(NotFound):
    def __init__(self, sale_id: str):
        self.sale_id = sale_id
        super().__init__(detail=f"Sale {sale_id} not found.")


class ExpenseNotFound(NotFound):
    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(detail=f"Expense {expense_id} not found.")


class ReportNotFound(NotFound):
    def __init__(self, report_date: str):
        self.report_date = report_date
        super().__init__(detail=f"No report stored for {report_date}.")


class InsufficientStock(HTTPException):
    def __init__(self, product_id: str, available: int, requested: int):
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": f"Not enough stock for product {product_id}.",
                "product_id": product_id,
                "available": available,
                "requested": requested,
            },
        )


class DuplicateReport(HTTPException):
    def __init__(self, report_date: str):
        self.report_date = report_date
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A daily report for {report_date} already exists.",
        )


class ServerFault(HTTPException):
    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail or "Internal server error.",
        )
