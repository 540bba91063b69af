from typing import Annotated, List
from fastapi import APIRouter, HTTPException, status, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import schemas
from app.core.config import settings
from app.core.database import get_db
from app.core.retail import functions, procedures

router = APIRouter(prefix="/customers", tags=["Customers"])

db_dep = Annotated[AsyncSession, Depends(get_db)]


# Customer details
@router.get("/{customer_id}", response_model=schemas.CustomerResponse)
async def get_customer(customer_id: int, db: db_dep):
    customer = await procedures.sp_customer_details(customer_id, db)

    if not customer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found"
        )
    return customer


@router.get("/{customer_id}/full-name", response_model=schemas.CustomerFullNameResponse)
async def get_customer_full_name(customer_id: int, db: db_dep):
    full_name = await functions.fn_customer_fullname(customer_id, db)

    if full_name is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found"
        )
    return {"customer_id": customer_id, "full_name": full_name}


@router.get(
    "/{customer_id}/order-count", response_model=schemas.CustomerOrderCountResponse
)
async def get_customer_order_count(customer_id: int, db: db_dep):
    total = await functions.fn_customer_orders(customer_id, db)
    return {"customer_id": customer_id, "total_orders": total}


@router.get("/{customer_id}/spending", response_model=schemas.CustomerSpendingResponse)
async def get_customer_spending(customer_id: int, db: db_dep):
    """Lifetime spending, counting completed payments only."""
    spent = await functions.fn_customer_spending(customer_id, db)
    return {"customer_id": customer_id, "total_spent": spent}


@router.get("/{customer_id}/summary", response_model=schemas.CustomerSummaryResponse)
async def get_customer_summary(customer_id: int, db: db_dep):
    """Orders, items and amount spent for a single customer."""
    summary = await procedures.sp_customer_summary(customer_id, db)

    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found"
        )
    return summary


@router.get(
    "/{customer_id}/latest-orders",
    response_model=List[schemas.LatestOrderResponse],
)
async def get_latest_orders(
    customer_id: int,
    db: db_dep,
    limit: int = Query(
        default=settings.DEFAULT_REPORT_LIMIT, ge=1, le=settings.MAX_REPORT_LIMIT
    ),
):
    return await procedures.sp_latest_orders(customer_id, limit, db)
