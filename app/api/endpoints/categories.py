from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import schemas
from app.core.database import get_db
from app.core.retail import functions

router = APIRouter(prefix="/categories", tags=["Categories"])

db_dep = Annotated[AsyncSession, Depends(get_db)]


@router.get("/{category_id}/revenue", response_model=schemas.CategoryRevenueResponse)
async def category_revenue(category_id: int, db: db_dep):
    revenue = await functions.fn_category_revenue(category_id, db)
    return {"category_id": category_id, "revenue": revenue}
