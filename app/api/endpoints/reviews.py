import logging
from typing import Annotated
from fastapi import APIRouter, HTTPException, status, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import schemas
from app.core.database import get_db
from app.core.retail import procedures

router = APIRouter(prefix="/reviews", tags=["Reviews"])

db_dep = Annotated[AsyncSession, Depends(get_db)]


# Add review
@router.post(
    "",
    response_model=schemas.ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_review(review: schemas.ReviewCreate, db: db_dep):
    try:
        return await procedures.sp_add_review(
            review.customer_id,
            review.product_id,
            review.rating,
            review.comment,
            db,
        )
    except procedures.InvalidRatingError as error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    except IntegrityError as error:
        # Unknown customer_id or product_id
        await db.rollback()
        logging.error(f"Rejected review with dangling reference: {error}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Customer or product not found",
        )
    except Exception as error:
        await db.rollback()
        logging.error(f"Failed to add a review: {error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add a review",
        )
