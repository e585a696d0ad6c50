from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from typing import Annotated, List, Optional
import datetime

from .models import PaymentMethod


class SaleItemCreateSchema(BaseModel):
    product_id: str = Field(..., min_length=1, max_length=27, description="Public id of the product")
    quantity: int = Field(..., ge=1, description="Units sold")


class SaleCreateSchema(BaseModel):
    items: List[SaleItemCreateSchema] = Field(..., min_length=1)
    payment_method: PaymentMethod
    seller: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class SaleItemPublicSchema(BaseModel):
    product_id: str = Field(..., description="Public id of the product at sale time")
    product_name: str
    quantity: int
    unit_price: float = Field(..., description="Sale price captured when the sale was made")

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class SalePublicSchema(BaseModel):
    public_id: str
    items: List[SaleItemPublicSchema]
    total: float
    payment_method: PaymentMethod
    seller: str
    date: datetime.datetime
    is_processed: bool
    created_by: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())


class StockRestorationSchema(BaseModel):
    product_id: str
    quantity: int
    stock_restored: bool


class SaleDeletedSchema(BaseModel):
    message: str
    sale: SalePublicSchema
    restorations: List[StockRestorationSchema]
    stock_restored: bool = Field(..., description="True when every item's stock was restored")
