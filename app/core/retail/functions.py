from typing import Optional
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_

from app.core import models
from app.core.config import settings


# -----------------------------------------------------------------------------
# FUNCTIONS MODULE
# Purpose: scalar lookups against the retail schema (names, stock, counts, sums).
# Every lookup is read-only and falls back to zero/False when nothing matches.
# -----------------------------------------------------------------------------

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """Coerce a SUM() result into a DECIMAL(12,2)-style value, NULL becomes 0.00.

    Halves round away from zero, like MySQL DECIMAL columns.
    """
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


async def fn_customer_fullname(customer_id: int, db: AsyncSession) -> Optional[str]:
    """
    Return "<first_name> <last_name>" for a customer.

    Args:
        customer_id: Customer to look up
        db: Database session

    Returns:
        The full name, or None when the customer does not exist.

    Example:
        name = await fn_customer_fullname(1, db)  # "Jane Doe"
    """
    stmt = select(
        (
            models.Customer.first_name + " " + models.Customer.last_name
        ).label("full_name")
    ).where(models.Customer.customer_id == customer_id)

    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def fn_product_stock(product_id: int, db: AsyncSession) -> int:
    """Current stock_quantity of a product, 0 for an unknown product."""
    stmt = select(models.Product.stock_quantity).where(
        models.Product.product_id == product_id
    )
    result = await db.execute(stmt)
    qty = result.scalar_one_or_none()
    return qty if qty is not None else 0


async def fn_order_exists(order_id: int, db: AsyncSession) -> bool:
    stmt = (
        select(func.count())
        .select_from(models.Order)
        .where(models.Order.order_id == order_id)
    )
    result = await db.execute(stmt)
    return (result.scalar() or 0) > 0


async def fn_review_count(product_id: int, db: AsyncSession) -> int:
    """Number of reviews left for a product."""
    stmt = select(func.count(models.Review.review_id)).where(
        models.Review.product_id == product_id
    )
    result = await db.execute(stmt)
    return result.scalar() or 0


async def fn_customer_orders(customer_id: int, db: AsyncSession) -> int:
    """Number of orders a customer has placed."""
    stmt = select(func.count(models.Order.order_id)).where(
        models.Order.customer_id == customer_id
    )
    result = await db.execute(stmt)
    return result.scalar() or 0


async def fn_order_quantity(order_id: int, db: AsyncSession) -> int:
    """Total units across all items of an order."""
    stmt = select(func.coalesce(func.sum(models.OrderItem.quantity), 0)).where(
        models.OrderItem.order_id == order_id
    )
    result = await db.execute(stmt)
    return int(result.scalar() or 0)


async def fn_customer_spending(customer_id: int, db: AsyncSession) -> Decimal:
    """
    Lifetime spending of a customer.

    Only payments whose status is COMPLETED_PAYMENT_STATUS ("Completed" by
    default) are counted; pending or failed payments are ignored.

    Args:
        customer_id: Customer to analyze
        db: Database session

    Returns:
        Sum of completed payment amounts, Decimal("0.00") if none.
    """
    stmt = (
        select(func.sum(models.Payment.amount))
        .join(models.Order, models.Payment.order_id == models.Order.order_id)
        .where(
            and_(
                models.Order.customer_id == customer_id,
                models.Payment.status == settings.COMPLETED_PAYMENT_STATUS,
            )
        )
    )
    result = await db.execute(stmt)
    return to_money(result.scalar())


async def fn_order_total(order_id: int, db: AsyncSession) -> Decimal:
    """
    Order total recomputed from its line items.

    Computed from order_items rather than orders.total_amount:
    SUM(quantity * unit_price) over order_items.

    Example:
        total = await fn_order_total(8, db)  # Decimal("149.97")
    """
    stmt = select(
        func.sum(models.OrderItem.quantity * models.OrderItem.unit_price)
    ).where(models.OrderItem.order_id == order_id)
    result = await db.execute(stmt)
    return to_money(result.scalar())


async def fn_category_revenue(category_id: int, db: AsyncSession) -> Decimal:
    """Revenue of every order item whose product belongs to the category."""
    stmt = (
        select(func.sum(models.OrderItem.quantity * models.OrderItem.unit_price))
        .join(
            models.Product,
            models.OrderItem.product_id == models.Product.product_id,
        )
        .where(models.Product.category_id == category_id)
    )
    result = await db.execute(stmt)
    return to_money(result.scalar())
