from fastapi import APIRouter, Depends, status
from typing import List, Annotated

from .schemas import ExpenseCreateSchema, ExpensePublicSchema
from . import service
from ..auth.authorization import Identity, authorize, get_current_identity

router = APIRouter(
    prefix="/expenses",
    tags=["Expenses"],
    dependencies=[Depends(authorize)],
)


@router.post("", response_model=ExpensePublicSchema, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_in: ExpenseCreateSchema,
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    return await service.create_expense(expense_in, created_by=identity.subject)


@router.get("", response_model=List[ExpensePublicSchema])
async def list_expenses():
    return await service.list_expenses()


@router.get("/today", response_model=List[ExpensePublicSchema])
async def list_todays_expenses():
    return await service.list_expenses_for_day()


@router.get("/{expense_id}", response_model=ExpensePublicSchema)
async def get_expense(expense_id: str):
    return await service.get_expense(expense_id)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(expense_id: str):
    await service.delete_expense(expense_id)
    return None
