from enum import Enum

from tortoise import fields, models

from ...common.models import TimestampMixin, generate_ksuid


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"


class Sale(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    total = fields.FloatField(default=0.0)
    payment_method = fields.CharEnumField(PaymentMethod, max_length=20)
    seller = fields.CharField(max_length=50)
    date = fields.DatetimeField(db_index=True)
    # Set once the sale has been folded into a persisted daily report.
    is_processed = fields.BooleanField(default=False, db_index=True)
    created_by = fields.CharField(max_length=27, null=True)

    items: fields.ReverseRelation["SaleItem"]

    def __str__(self):
        return f"Sale {self.public_id} - {self.total:.2f} ({self.payment_method})"

    class Meta:
        table = "sales"
        ordering = ["-date"]


class SaleItem(models.Model):
    id = fields.IntField(primary_key=True)
    sale: fields.ForeignKeyRelation[Sale] = fields.ForeignKeyField(
        "models.Sale",
        related_name="items",
        on_delete=fields.CASCADE,
    )
    # Nullable so a sale outlives the deletion of a product it sold.
    product: fields.ForeignKeyNullableRelation["Product"] = fields.ForeignKeyField(
        "models.Product",
        related_name="sale_items",
        on_delete=fields.SET_NULL,
        null=True,
    )
    product_public_id = fields.CharField(max_length=27)
    product_name = fields.CharField(max_length=100)
    position = fields.IntField()
    quantity = fields.IntField()
    unit_price = fields.FloatField()

    def __str__(self):
        return f"{self.quantity} x {self.product_name} @ {self.unit_price:.2f}"

    class Meta:
        table = "sale_items"
        ordering = ["position"]
