"""API routes for managing the product catalogue."""
from fastapi import APIRouter, status, Query, Depends
from typing import Optional, Annotated

from .models import Category
from .schemas import (
    PaginatedProductResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from . import service
from ..auth.authorization import Identity, authorize, get_current_identity

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(authorize)],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
)
async def create_product(
    product_in: ProductCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    return await service.create_product(product_in, created_by=identity.subject)


@router.get("", response_model=PaginatedProductResponse, summary="List products")
async def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(50, ge=1, le=200, description="Number of products per page"),
    category: Optional[Category] = Query(None, description="Filter by category"),
):
    return await service.list_products(page, size, category)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
async def get_product(product_id: str):
    return await service.get_product(product_id)


@router.put("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(
    product_id: str,
    product_in: ProductUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
):
    return await service.update_product(product_id, product_in, updated_by=identity.subject)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a product")
async def delete_product(product_id: str):
    await service.delete_product(product_id)
    return None
