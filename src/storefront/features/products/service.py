import logging
from typing import Optional

from fastapi import HTTPException, status
from tortoise.transactions import in_transaction

from ...core.errors import ProductNotFound, ServerFault
from .models import Category, Product
from .schemas import (
    PaginatedProductResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)

logger = logging.getLogger(__name__)


def _to_product_response(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product)


def _apply_update(product: Product, update_data: dict, updated_by: Optional[str]) -> None:
    for key, value in update_data.items():
        setattr(product, key, value)
    product.updated_by = updated_by


async def create_product(product_in: ProductCreate, created_by: Optional[str] = None) -> ProductResponse:
    """
    Creates a new product.

    Args:
        product_in: The data for the new product.
        created_by: Public id of the user creating it.

    Returns:
        The created product.
    """
    try:
        product = await Product.create(**product_in.model_dump(), created_by=created_by)
    except Exception as e:
        logger.error(f"Error creating product: {e}", exc_info=True)
        raise ServerFault("Failed to create product.")
    logger.info(f"Product {product.public_id} created by {created_by}")
    return _to_product_response(product)


async def list_products(page: int, size: int, category: Optional[Category]) -> PaginatedProductResponse:
    offset = (page - 1) * size
    filters = {}
    if category:
        filters["category"] = category

    products = await Product.filter(**filters).order_by("-created_at").offset(offset).limit(size)
    total = await Product.filter(**filters).count()
    return PaginatedProductResponse(
        items=[_to_product_response(p) for p in products], total=total, page=page, size=size
    )


async def get_product(product_public_id: str) -> ProductResponse:
    product = await Product.get_or_none(public_id=product_public_id)
    if not product:
        raise ProductNotFound(product_public_id)
    return _to_product_response(product)


async def update_product(
    product_public_id: str, product_in: ProductUpdate, updated_by: Optional[str] = None
) -> ProductResponse:
    """
    Updates a product. A quantity given here overwrites the stock level
    (manual stock correction) under the same row lock sales take; any
    other edit writes only the fields it changes, so stock moved by a
    concurrent sale is never written back.

    Args:
        product_public_id: The public ID of the product to update.
        product_in: The fields to change.
        updated_by: Public id of the user making the change.

    Returns:
        The updated product.
    """
    update_data = product_in.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update"
        )
    update_fields = [*update_data, "updated_by", "updated_at"]

    if "quantity" in update_data:
        async with in_transaction() as conn:
            product = await Product.filter(public_id=product_public_id).select_for_update().using_db(conn).first()
            if not product:
                raise ProductNotFound(product_public_id)
            _apply_update(product, update_data, updated_by)
            await product.save(using_db=conn, update_fields=update_fields)
    else:
        product = await Product.get_or_none(public_id=product_public_id)
        if not product:
            raise ProductNotFound(product_public_id)
        _apply_update(product, update_data, updated_by)
        await product.save(update_fields=update_fields)
        await product.refresh_from_db(fields=["quantity"])

    logger.info(f"Product {product.public_id} updated by {updated_by}: {sorted(update_data)}")
    return _to_product_response(product)


async def delete_product(product_public_id: str):
    """
    Deletes a product. Sales that reference it keep their captured name and
    price; deleting such a sale later skips the stock restoration.
    """
    product = await Product.get_or_none(public_id=product_public_id)
    if not product:
        raise ProductNotFound(product_public_id)
    await product.delete()
    logger.info(f"Product {product_public_id} deleted")
    return None
