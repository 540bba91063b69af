from typing import Annotated, List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import schemas
from app.core.database import get_db
from app.core.retail import functions, procedures

router = APIRouter(prefix="/orders", tags=["Orders"])

db_dep = Annotated[AsyncSession, Depends(get_db)]


# Orders by status ("Pending", "Shipped", ...)
@router.get("", response_model=List[schemas.OrderResponse])
async def list_orders_by_status(status: str, db: db_dep):
    return await procedures.sp_orders_by_status(status, db)


@router.get("/{order_id}/exists", response_model=schemas.OrderExistsResponse)
async def order_exists(order_id: int, db: db_dep):
    exists = await functions.fn_order_exists(order_id, db)
    return {"order_id": order_id, "exists": exists}


@router.get("/{order_id}/quantity", response_model=schemas.OrderQuantityResponse)
async def order_quantity(order_id: int, db: db_dep):
    qty = await functions.fn_order_quantity(order_id, db)
    return {"order_id": order_id, "total_quantity": qty}


@router.get("/{order_id}/total", response_model=schemas.OrderTotalResponse)
async def order_total(order_id: int, db: db_dep):
    """Order total computed from its line items."""
    total = await functions.fn_order_total(order_id, db)
    return {"order_id": order_id, "total": total}
