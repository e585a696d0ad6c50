from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class ExpenseType(str, Enum):
    SERVICES = "Servicios"
    STOCK_PURCHASE = "Compra de Stock"
    RENT = "Alquiler"
    OTHER = "Otros"


class Expense(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    type = fields.CharEnumField(ExpenseType, max_length=30)
    description = fields.CharField(max_length=200)
    amount = fields.FloatField()
    date = fields.DatetimeField(db_index=True)
    is_processed = fields.BooleanField(default=False, db_index=True)
    created_by = fields.CharField(max_length=27, null=True)

    def __str__(self):
        return f"Expense {self.public_id} - {self.type}: {self.amount:.2f}"

    class Meta:
        table = "expenses"
        ordering = ["-date"]
