"""Data models for the clothing catalogue."""
from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, generate_ksuid


class Category(str, Enum):
    BABY = "Bebé"
    KIDS = "Nene/Nena"


class ProductType(str, Enum):
    BOY = "Varón"
    GIRL = "Mujer"
    UNISEX = "Unisex"


class Garment(str, Enum):
    TSHIRT = "Camiseta"
    JEANS = "Jeans"
    SWEATSHIRT = "Buzos"
    SOCKS = "Medias"
    JACKET = "Camperas"
    TROUSERS = "Pantalones"


class Product(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )
    name = fields.CharField(max_length=100)
    category = fields.CharEnumField(Category, max_length=20, db_index=True)
    type = fields.CharEnumField(ProductType, max_length=20)
    garment = fields.CharEnumField(Garment, max_length=20)
    size = fields.CharField(max_length=20)
    color = fields.CharField(max_length=30)
    # Only mutated inside a sale transaction or by an explicit admin edit.
    quantity = fields.IntField(default=0)
    cost_price = fields.FloatField(default=0.0)
    sale_price = fields.FloatField(default=0.0)
    created_by = fields.CharField(max_length=27, null=True)
    updated_by = fields.CharField(max_length=27, null=True)

    def __str__(self):
        return f"{self.name} {self.size} {self.color} (Stock: {self.quantity}, Price: ${self.sale_price:.2f})"

    class Meta:
        table = "products"
        ordering = ["-created_at"]
