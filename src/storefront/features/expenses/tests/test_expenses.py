import datetime

import pytest
from fastapi import status

from ....core.dates import business_today, local_midnight
from ....core.errors import ExpenseNotFound
from ....features.expenses.models import Expense, ExpenseType
from ....features.expenses.schemas import ExpenseCreateSchema
from ....features.expenses.service import (
    create_expense,
    delete_expense,
    get_expense,
    list_expenses_for_day,
)


@pytest.mark.asyncio
async def test_create_expense_is_stored_at_local_midnight():
    day = datetime.date(2024, 5, 10)
    expense = await create_expense(
        ExpenseCreateSchema(type="Alquiler", description="  Alquiler mayo ", amount=300.0, date=day),
        created_by="admin-1",
    )
    assert expense.type == ExpenseType.RENT
    assert expense.description == "Alquiler mayo"
    assert expense.is_processed is False

    stored = await Expense.get(public_id=expense.public_id)
    assert stored.date == local_midnight(day)
    assert [e.public_id for e in await list_expenses_for_day(day)] == [expense.public_id]
    assert await list_expenses_for_day(day + datetime.timedelta(days=1)) == []


def test_expense_amount_must_be_positive():
    with pytest.raises(ValueError):
        ExpenseCreateSchema(type="Otros", description="Nada", amount=0, date=datetime.date(2024, 5, 10))


@pytest.mark.asyncio
async def test_get_and_delete_expense():
    expense = await create_expense(
        ExpenseCreateSchema(type="Servicios", description="Luz", amount=40.0, date=datetime.date(2024, 5, 10))
    )
    assert (await get_expense(expense.public_id)).amount == 40.0

    await delete_expense(expense.public_id)
    with pytest.raises(ExpenseNotFound) as exc_info:
        await get_expense(expense.public_id)
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_expense_api_as_employee(client, employee_headers):
    today = business_today()
    payload = {
        "type": "Compra de Stock",
        "description": "Reposición de medias",
        "amount": 55.5,
        "date": today.isoformat(),
    }
    response = await client.post("/api/v1/expenses", json=payload, headers=employee_headers)
    assert response.status_code == status.HTTP_201_CREATED
    public_id = response.json()["public_id"]

    response = await client.get("/api/v1/expenses/today", headers=employee_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [e["public_id"] for e in response.json()] == [public_id]

    response = await client.delete(f"/api/v1/expenses/{public_id}", headers=employee_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = await client.get(f"/api/v1/expenses/{public_id}", headers=employee_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_expense_api_rejects_unknown_type(client, admin_headers):
    payload = {"type": "Viajes", "description": "x", "amount": 10, "date": "2024-05-10"}
    response = await client.post("/api/v1/expenses", json=payload, headers=admin_headers)
    assert response.status_code == 422


def test_blank_description_is_rejected():
    with pytest.raises(ValueError):
        ExpenseCreateSchema(type="Otros", description="  ", amount=10, date=datetime.date(2024, 5, 10))
