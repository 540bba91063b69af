from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =========================
# CUSTOMER
# =========================
class CustomerResponse(BaseModel):
    customer_id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CustomerFullNameResponse(BaseModel):
    customer_id: int
    full_name: str


class CustomerOrderCountResponse(BaseModel):
    customer_id: int
    total_orders: int


class CustomerSpendingResponse(BaseModel):
    customer_id: int
    total_spent: Decimal


class CustomerSummaryResponse(BaseModel):
    first_name: str
    last_name: str
    total_orders: int
    total_items: int
    total_spent: Decimal


# =========================
# PRODUCT
# =========================
class ProductResponse(BaseModel):
    product_id: int
    product_name: str
    price: Decimal
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


class ProductStockResponse(BaseModel):
    product_id: int
    stock_quantity: int


class ProductReviewCountResponse(BaseModel):
    product_id: int
    review_count: int


class StockDecrement(BaseModel):
    # No lower bound on the resulting stock, it may go negative.
    # A negative quantity would add stock, so it is rejected here.
    quantity: int = Field(ge=0)


class TopProductResponse(BaseModel):
    product_id: int
    product_name: str
    units_sold: int


# =========================
# ORDER
# =========================
class OrderResponse(BaseModel):
    order_id: int
    customer_id: int
    order_date: datetime
    total_amount: Decimal
    status: str

    model_config = ConfigDict(from_attributes=True)


class LatestOrderResponse(BaseModel):
    order_id: int
    order_date: datetime
    total_amount: Decimal
    status: str


class OrderExistsResponse(BaseModel):
    order_id: int
    exists: bool


class OrderQuantityResponse(BaseModel):
    order_id: int
    total_quantity: int


class OrderTotalResponse(BaseModel):
    order_id: int
    total: Decimal


# =========================
# CATEGORY
# =========================
class CategoryRevenueResponse(BaseModel):
    category_id: int
    revenue: Decimal


# =========================
# REVIEW
# =========================
class ReviewCreate(BaseModel):
    customer_id: int
    product_id: int
    rating: int  # range checked by sp_add_review
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReviewResponse(BaseModel):
    review_id: int
    customer_id: int
    product_id: int
    rating: int
    comment: Optional[str] = None
    review_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
