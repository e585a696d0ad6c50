from enum import Enum

from tortoise import fields, models

from ...common.models import generate_ksuid


class ReportType(str, Enum):
    DAILY = "daily"
    RANGE = "range"


class Report(models.Model):
    """Immutable aggregate snapshot; one daily report per calendar date."""

    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    date = fields.CharField(max_length=10, description="Business calendar day, YYYY-MM-DD")
    type = fields.CharEnumField(ReportType, max_length=10, default=ReportType.DAILY)
    total_products_sold = fields.IntField(default=0)
    total_sales = fields.FloatField(default=0.0)
    total_expenses = fields.FloatField(default=0.0)
    net_profit = fields.FloatField(default=0.0)
    sales_by_payment_method = fields.JSONField(default=dict)
    created_at = fields.DatetimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.type} report {self.date}: net {self.net_profit:.2f}"

    class Meta:
        table = "reports"
        unique_together = (("date", "type"),)
        ordering = ["-date"]
