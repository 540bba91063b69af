from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    Numeric,
    TIMESTAMP,
    Text,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.core.database import Base


# =========================
# Category
# =========================
class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    category_name = Column(String(100), nullable=False)

    products = relationship("Product", back_populates="category")


# =========================
# Customer
# =========================
class Customer(Base):
    __tablename__ = "customers"

    customer_id = Column(Integer, primary_key=True, autoincrement=True)

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=True, unique=True)

    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # Relationships
    orders = relationship("Order", back_populates="customer")
    reviews = relationship("Review", back_populates="customer")


# =========================
# Product
# =========================
class Product(Base):
    """
    Catalogue entry.

    stock_quantity has no floor: sp_update_stock subtracts unconditionally,
    so the value can go negative.
    """

    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, autoincrement=True)

    product_name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)

    category_id = Column(
        Integer,
        ForeignKey("categories.category_id"),
        nullable=True,
        index=True,
    )

    # Relationships
    category = relationship("Category", back_populates="products")
    order_items = relationship("OrderItem", back_populates="product")
    reviews = relationship("Review", back_populates="product")


# =========================
# Order
# =========================
class Order(Base):
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, autoincrement=True)

    customer_id = Column(
        Integer,
        ForeignKey("customers.customer_id"),
        nullable=False,
        index=True,
    )

    order_date = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, server_default="Pending")

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    items = relationship("OrderItem", back_populates="order")
    payments = relationship("Payment", back_populates="order")


class OrderItem(Base):
    __tablename__ = "order_items"

    order_item_id = Column(Integer, primary_key=True, autoincrement=True)

    order_id = Column(
        Integer, ForeignKey("orders.order_id"), nullable=False, index=True
    )
    product_id = Column(
        Integer, ForeignKey("products.product_id"), nullable=False, index=True
    )

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")


# =========================
# Payment
# =========================
class Payment(Base):
    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, autoincrement=True)

    order_id = Column(
        Integer, ForeignKey("orders.order_id"), nullable=False, index=True
    )

    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(30), nullable=True)  # Card/PayPal/Cash
    status = Column(String(20), nullable=False)  # Completed/Pending/Failed

    payment_date = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    order = relationship("Order", back_populates="payments")


# =========================
# Review
# =========================
class Review(Base):
    __tablename__ = "reviews"

    review_id = Column(Integer, primary_key=True, autoincrement=True)

    customer_id = Column(
        Integer, ForeignKey("customers.customer_id"), nullable=False, index=True
    )
    product_id = Column(
        Integer, ForeignKey("products.product_id"), nullable=False, index=True
    )

    rating = Column(Integer, nullable=False)  # 1..5, checked by sp_add_review
    comment = Column(Text)

    review_date = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # Relationships
    customer = relationship("Customer", back_populates="reviews")
    product = relationship("Product", back_populates="reviews")
