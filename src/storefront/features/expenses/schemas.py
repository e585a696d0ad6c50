from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from typing import Annotated, Optional
import datetime

from .models import ExpenseType


class ExpenseCreateSchema(BaseModel):
    type: ExpenseType
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    amount: float = Field(..., gt=0, description="Amount spent, greater than zero")
    date: datetime.date = Field(..., description="Calendar day of the expense (YYYY-MM-DD)")


class ExpensePublicSchema(BaseModel):
    public_id: str
    type: ExpenseType
    description: str
    amount: float
    date: datetime.datetime
    is_processed: bool
    created_by: Optional[str] = None
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())
