"""Sale transactions.

Creating a sale reserves stock from every product it lists and deleting a
sale gives that stock back. Both run inside a single database transaction:
any exception raised inside ``in_transaction()`` rolls back every write made
so far, so a failed request never leaves a partial sale or a partial stock
change behind.
"""
import datetime
import logging
from typing import List, Optional

from tortoise.expressions import F
from tortoise.transactions import in_transaction

from ...core.dates import business_today, day_bounds, utc_now
from ...core.errors import InsufficientStock, ProductNotFound, SaleNotFound
from ..products.models import Product
from .models import Sale, SaleItem
from .schemas import (
    SaleCreateSchema,
    SaleDeletedSchema,
    SaleItemPublicSchema,
    SalePublicSchema,
    StockRestorationSchema,
)

logger = logging.getLogger(__name__)

SALES_LIST_LIMIT = 100


async def _lock_product(conn, **filters) -> Optional[Product]:
    # SELECT ... FOR UPDATE on backends that support it; SQLite serialises
    # write transactions on its own.
    return await Product.filter(**filters).select_for_update().using_db(conn).first()


async def create_sale(sale_data: SaleCreateSchema, created_by: Optional[str] = None) -> Sale:
    """Validate stock, decrement it and record the sale as one atomic unit.

    Items are processed in the order given. Each product row is locked before
    its stock is compared, and the decrement itself is guarded by
    ``quantity >= requested`` so concurrent sales of the same product can
    never drive stock below zero.

    Raises:
        ProductNotFound: an item references a product that does not exist.
        InsufficientStock: an item asks for more units than are available.
    """
    async with in_transaction() as conn:
        total = 0.0
        reserved = []
        for item_data in sale_data.items:
            product = await _lock_product(conn, public_id=item_data.product_id)
            if not product:
                logger.warning(f"Product not found: {item_data.product_id} (user {created_by})")
                raise ProductNotFound(item_data.product_id)
            if product.quantity < item_data.quantity:
                logger.warning(
                    f"Insufficient stock for product {product.public_id} (user {created_by}): "
                    f"available {product.quantity}, requested {item_data.quantity}"
                )
                raise InsufficientStock(product.public_id, product.quantity, item_data.quantity)

            updated = (
                await Product.filter(id=product.id, quantity__gte=item_data.quantity)
                .using_db(conn)
                .update(quantity=F("quantity") - item_data.quantity)
            )
            if updated != 1:
                # Another transaction took the stock between the read and the write.
                await product.refresh_from_db(fields=["quantity"], using_db=conn)
                raise InsufficientStock(product.public_id, product.quantity, item_data.quantity)

            unit_price = product.sale_price
            total += unit_price * item_data.quantity
            reserved.append((product, item_data.quantity, unit_price))

        sale = await Sale.create(
            total=total,
            payment_method=sale_data.payment_method,
            seller=sale_data.seller,
            date=utc_now(),
            created_by=created_by,
            using_db=conn,
        )
        for position, (product, quantity, unit_price) in enumerate(reserved):
            await SaleItem.create(
                sale=sale,
                product_id=product.id,
                product_public_id=product.public_id,
                product_name=product.name,
                position=position,
                quantity=quantity,
                unit_price=unit_price,
                using_db=conn,
            )
        # No explicit commit needed, transaction context manager handles it.

    logger.info(f"Sale {sale.public_id} created by user {created_by}: total {total:.2f}")
    return await Sale.get(id=sale.id).prefetch_related("items")


async def delete_sale(sale_public_id: str) -> SaleDeletedSchema:
    """Delete a sale and return its reserved stock to the products.

    Products deleted since the sale are skipped; that never fails the
    deletion. The restorations and the delete commit together.

    Raises:
        SaleNotFound: no sale with that public id.
    """
    async with in_transaction() as conn:
        sale = await Sale.filter(public_id=sale_public_id).select_for_update().using_db(conn).first()
        if not sale:
            logger.warning(f"Sale not found: {sale_public_id}")
            raise SaleNotFound(sale_public_id)

        items = await SaleItem.filter(sale_id=sale.id).using_db(conn).order_by("position")
        restorations: List[StockRestorationSchema] = []
        for item in items:
            product = None
            if item.product_id is not None:
                product = await _lock_product(conn, id=item.product_id)
            if product:
                await Product.filter(id=product.id).using_db(conn).update(
                    quantity=F("quantity") + item.quantity
                )
            else:
                logger.info(
                    f"Product {item.product_public_id} no longer exists; "
                    f"skipping stock restoration for sale {sale.public_id}"
                )
            restorations.append(
                StockRestorationSchema(
                    product_id=item.product_public_id,
                    quantity=item.quantity,
                    stock_restored=product is not None,
                )
            )

        sale_snapshot = _to_sale_public_schema(sale, items)
        await SaleItem.filter(sale_id=sale.id).using_db(conn).delete()
        await sale.delete(using_db=conn)

    logger.info(f"Sale {sale_public_id} deleted; restored stock for {sum(r.stock_restored for r in restorations)} item(s)")
    return SaleDeletedSchema(
        message="Sale deleted successfully.",
        sale=sale_snapshot,
        restorations=restorations,
        stock_restored=all(r.stock_restored for r in restorations),
    )


async def get_sale(sale_public_id: str) -> Sale:
    sale = await Sale.get_or_none(public_id=sale_public_id).prefetch_related("items")
    if not sale:
        raise SaleNotFound(sale_public_id)
    return sale


async def list_sales(limit: int = SALES_LIST_LIMIT) -> List[Sale]:
    return await Sale.all().order_by("-date").limit(limit).prefetch_related("items")


async def list_sales_for_day(day: Optional[datetime.date] = None) -> List[Sale]:
    start, end = day_bounds(day or business_today())
    return await Sale.filter(date__gte=start, date__lt=end).order_by("-date").prefetch_related("items")


def _to_sale_public_schema(sale: Sale, items: List[SaleItem]) -> SalePublicSchema:
    return SalePublicSchema(
        public_id=sale.public_id,
        items=[
            SaleItemPublicSchema(
                product_id=item.product_public_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in sorted(items, key=lambda i: i.position)
        ],
        total=sale.total,
        payment_method=sale.payment_method,
        seller=sale.seller,
        date=sale.date,
        is_processed=sale.is_processed,
        created_by=sale.created_by,
        created_at=sale.created_at,
        updated_at=sale.updated_at,
    )


def to_sale_public_schema(sale: Sale) -> SalePublicSchema:
    """Requires ``items`` to have been prefetched."""
    return _to_sale_public_schema(sale, list(sale.items))
