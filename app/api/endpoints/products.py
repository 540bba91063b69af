import logging
from typing import Annotated, List
from fastapi import APIRouter, HTTPException, status, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import schemas
from app.core.config import settings
from app.core.database import get_db
from app.core.retail import functions, procedures

router = APIRouter(prefix="/products", tags=["Products"])

db_dep = Annotated[AsyncSession, Depends(get_db)]


# Product catalogue
@router.get("", response_model=List[schemas.ProductResponse])
async def list_products(db: db_dep):
    return await procedures.sp_all_products(db)


# Top sellers report
@router.get("/top", response_model=List[schemas.TopProductResponse])
async def top_products(
    db: db_dep,
    limit: int = Query(
        default=settings.DEFAULT_REPORT_LIMIT, ge=1, le=settings.MAX_REPORT_LIMIT
    ),
):
    """Best-selling products ordered by units sold."""
    return await procedures.sp_top_products(limit, db)


@router.get("/{product_id}/stock", response_model=schemas.ProductStockResponse)
async def get_product_stock(product_id: int, db: db_dep):
    qty = await functions.fn_product_stock(product_id, db)
    return {"product_id": product_id, "stock_quantity": qty}


@router.get(
    "/{product_id}/review-count", response_model=schemas.ProductReviewCountResponse
)
async def get_review_count(product_id: int, db: db_dep):
    total = await functions.fn_review_count(product_id, db)
    return {"product_id": product_id, "review_count": total}


# Reduce stock after a purchase
@router.post(
    "/{product_id}/stock/decrement", response_model=schemas.ProductStockResponse
)
async def decrement_stock(
    product_id: int, payload: schemas.StockDecrement, db: db_dep
):
    try:
        updated = await procedures.sp_update_stock(product_id, payload.quantity, db)
    except Exception as error:
        await db.rollback()
        logging.error(f"Failed to update stock of product {product_id}: {error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update stock",
        )

    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )

    qty = await functions.fn_product_stock(product_id, db)
    return {"product_id": product_id, "stock_quantity": qty}
