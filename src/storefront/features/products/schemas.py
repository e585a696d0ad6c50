from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import datetime

from .models import Category, Garment, ProductType


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Name of the product")
    category: Category = Field(..., description="Catalogue category")
    type: ProductType = Field(..., description="Who the garment is for")
    garment: Garment = Field(..., description="Kind of garment")
    size: str = Field(..., min_length=1, max_length=20)
    color: str = Field(..., min_length=1, max_length=30)
    quantity: int = Field(default=0, ge=0, description="Current stock quantity")
    cost_price: float = Field(default=0.0, ge=0, description="Purchase cost per unit")
    sale_price: float = Field(default=0.0, ge=0, description="Current sale price per unit")


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[Category] = None
    type: Optional[ProductType] = None
    garment: Optional[Garment] = None
    size: Optional[str] = Field(None, min_length=1, max_length=20)
    color: Optional[str] = Field(None, min_length=1, max_length=30)
    quantity: Optional[int] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)
    sale_price: Optional[float] = Field(None, ge=0)


class ProductResponse(ProductBase):
    public_id: str = Field(..., description="Public unique identifier for the product (KSUID)")
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
    )


class PaginatedProductResponse(BaseModel):
    items: List[ProductResponse]
    total: int
    page: int
    size: int
