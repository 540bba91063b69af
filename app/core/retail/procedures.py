import logging
from typing import Dict, Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func, desc, asc

from app.core import models
from app.core.retail.functions import to_money

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PROCEDURES MODULE
# Purpose: row-returning reports and the two writes (stock decrement, reviews).
# Each procedure is a single statement; nothing spans more than one commit.
# -----------------------------------------------------------------------------

MIN_RATING = 1
MAX_RATING = 5


class InvalidRatingError(ValueError):
    """Raised by sp_add_review when the rating is outside [1, 5]."""

    def __init__(self, message: str = "Rating must be between 1 and 5"):
        super().__init__(message)


def _check_limit(limit: int) -> None:
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")


async def sp_all_products(db: AsyncSession) -> List[Dict[str, Any]]:
    """List every product with its price and stock level."""
    stmt = select(
        models.Product.product_id,
        models.Product.product_name,
        models.Product.price,
        models.Product.stock_quantity,
    ).order_by(asc(models.Product.product_id))

    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def sp_customer_details(
    customer_id: int, db: AsyncSession
) -> Optional[Dict[str, Any]]:
    """Every column of a single customer row, or None."""
    stmt = select(models.Customer.__table__).where(
        models.Customer.customer_id == customer_id
    )
    result = await db.execute(stmt)
    row = result.mappings().first()
    return dict(row) if row else None


async def sp_orders_by_status(status: str, db: AsyncSession) -> List[Dict[str, Any]]:
    stmt = (
        select(models.Order.__table__)
        .where(models.Order.status == status)
        .order_by(asc(models.Order.order_id))
    )
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def sp_update_stock(product_id: int, qty: int, db: AsyncSession) -> int:
    """
    Reduce a product's stock after a purchase.

    The decrement is unconditional: there is no check against the current
    stock, so stock_quantity goes negative when qty exceeds it.

    Args:
        product_id: Product whose stock is reduced
        qty: Units to subtract
        db: Database session

    Returns:
        Number of product rows updated (0 when the product does not exist).

    Example:
        await sp_update_stock(4, 2, db)
    """
    stmt = (
        update(models.Product)
        .where(models.Product.product_id == product_id)
        .values(stock_quantity=models.Product.stock_quantity - qty)
    )

    result = await db.execute(stmt)
    await db.commit()

    logger.info(f"Decremented stock of product {product_id} by {qty}")
    return result.rowcount


async def sp_latest_orders(
    customer_id: int, limit: int, db: AsyncSession
) -> List[Dict[str, Any]]:
    """
    Most recent orders of a customer, newest first.

    Example:
        [
            {"order_id": 12, "order_date": ..., "total_amount": Decimal("59.90"), "status": "Shipped"},
            {"order_id": 7, "order_date": ..., "total_amount": Decimal("12.00"), "status": "Delivered"}
        ]
    """
    _check_limit(limit)

    stmt = (
        select(
            models.Order.order_id,
            models.Order.order_date,
            models.Order.total_amount,
            models.Order.status,
        )
        .where(models.Order.customer_id == customer_id)
        .order_by(desc(models.Order.order_date))
        .limit(limit)
    )

    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


async def sp_add_review(
    customer_id: int,
    product_id: int,
    rating: int,
    comment: Optional[str],
    db: AsyncSession,
) -> models.Review:
    """
    Insert a review after validating its rating.

    Raises:
        InvalidRatingError: rating is not between 1 and 5 (inclusive).
    """
    # bool is an int subclass, True would otherwise be stored as rating 1
    if (
        rating is None
        or isinstance(rating, bool)
        or not MIN_RATING <= rating <= MAX_RATING
    ):
        raise InvalidRatingError()

    review = models.Review(
        customer_id=customer_id,
        product_id=product_id,
        rating=rating,
        comment=comment,
    )
    db.add(review)
    await db.commit()
    await db.refresh(review)

    logger.info(
        f"Customer {customer_id} reviewed product {product_id} with rating {rating}"
    )
    return review


async def sp_customer_summary(
    customer_id: int, db: AsyncSession
) -> Optional[Dict[str, Any]]:
    """
    Purchase summary for one customer.

    Customers without orders still get a row, with zero totals.

    Returns:
        {"first_name", "last_name", "total_orders", "total_items", "total_spent"}
        or None when the customer does not exist.
    """
    stmt = (
        select(
            models.Customer.first_name,
            models.Customer.last_name,
            func.count(models.Order.order_id.distinct()).label("total_orders"),
            func.sum(models.OrderItem.quantity).label("total_items"),
            func.sum(models.OrderItem.quantity * models.OrderItem.unit_price).label(
                "total_spent"
            ),
        )
        .select_from(models.Customer)
        .outerjoin(
            models.Order, models.Customer.customer_id == models.Order.customer_id
        )
        .outerjoin(
            models.OrderItem, models.Order.order_id == models.OrderItem.order_id
        )
        .where(models.Customer.customer_id == customer_id)
        .group_by(
            models.Customer.customer_id,
            models.Customer.first_name,
            models.Customer.last_name,
        )
    )

    result = await db.execute(stmt)
    row = result.first()
    if row is None:
        return None

    return {
        "first_name": row.first_name,
        "last_name": row.last_name,
        "total_orders": row.total_orders or 0,
        "total_items": int(row.total_items or 0),
        "total_spent": to_money(row.total_spent),
    }


async def sp_top_products(limit: int, db: AsyncSession) -> List[Dict[str, Any]]:
    """
    Best-selling products by units sold.

    Args:
        limit: Maximum number of products to return
        db: Database session

    Returns:
        Products ordered by units_sold descending, ties broken by product_id.

    Example:
        [
            {"product_id": 3, "product_name": "Wireless Mouse", "units_sold": 42},
            {"product_id": 1, "product_name": "USB-C Cable", "units_sold": 30}
        ]
    """
    _check_limit(limit)

    units_sold = func.sum(models.OrderItem.quantity).label("units_sold")
    stmt = (
        select(models.Product.product_id, models.Product.product_name, units_sold)
        .select_from(models.OrderItem)
        .join(
            models.Product,
            models.OrderItem.product_id == models.Product.product_id,
        )
        .group_by(models.Product.product_id, models.Product.product_name)
        .order_by(desc(units_sold), asc(models.Product.product_id))
        .limit(limit)
    )

    result = await db.execute(stmt)
    return [
        {
            "product_id": row.product_id,
            "product_name": row.product_name,
            "units_sold": int(row.units_sold or 0),
        }
        for row in result.all()
    ]
