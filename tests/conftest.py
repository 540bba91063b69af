import os
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from app.main import app
from app.core import models
from app.core.database import Base, get_db, enable_sqlite_foreign_keys

# Force to use a throwaway db for tests
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL", "sqlite+aiosqlite:///./test_retail.db"
)

# No pooling so that every test's event loop gets its own connections
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
enable_sqlite_foreign_keys(test_engine)
TestingSessionLocal = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


# Create the tables for every test and drop them after, so each test starts empty
@pytest_asyncio.fixture(scope="function", autouse=True)
async def set_up_db():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield  # Tests happens here
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# Create session and rollback once it is done
@pytest_asyncio.fixture(scope="function")
async def db_session():
    async with TestingSessionLocal() as session:
        yield session
        await session.rollback()
        await session.close()


# Client
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# Category
@pytest_asyncio.fixture(scope="function")
async def test_category(db_session: AsyncSession):
    category = models.Category(category_name="Electronics")
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


# Customer
@pytest_asyncio.fixture(scope="function")
async def test_customer(db_session: AsyncSession):
    # Unique email for each test to avoid duplicates
    customer = models.Customer(
        first_name="Jane",
        last_name="Doe",
        email=f"jane_{uuid.uuid4().hex[:8]}@example.com",
    )
    db_session.add(customer)
    await db_session.commit()
    await db_session.refresh(customer)
    return customer


# Products: a mouse (stock 10) and a cable (stock 3), both in test_category
@pytest_asyncio.fixture(scope="function")
async def test_products(db_session: AsyncSession, test_category):
    mouse = models.Product(
        product_name="Wireless Mouse",
        price=Decimal("19.99"),
        stock_quantity=10,
        category_id=test_category.category_id,
    )
    cable = models.Product(
        product_name="USB-C Cable",
        price=Decimal("5.50"),
        stock_quantity=3,
        category_id=test_category.category_id,
    )
    db_session.add_all([mouse, cable])
    await db_session.commit()
    await db_session.refresh(mouse)
    await db_session.refresh(cable)
    return mouse, cable


# Two orders for test_customer:
#   older "Delivered" order: 2 x mouse @ 19.99 + 1 x cable @ 5.50, completed payment
#   newer "Pending" order:   4 x cable @ 5.50, pending payment
@pytest_asyncio.fixture(scope="function")
async def test_orders(db_session: AsyncSession, test_customer, test_products):
    mouse, cable = test_products
    now = datetime.now(timezone.utc)

    delivered = models.Order(
        customer_id=test_customer.customer_id,
        order_date=now - timedelta(days=5),
        total_amount=Decimal("45.48"),
        status="Delivered",
    )
    pending = models.Order(
        customer_id=test_customer.customer_id,
        order_date=now - timedelta(days=1),
        total_amount=Decimal("22.00"),
        status="Pending",
    )
    db_session.add_all([delivered, pending])
    await db_session.commit()
    await db_session.refresh(delivered)
    await db_session.refresh(pending)

    db_session.add_all(
        [
            models.OrderItem(
                order_id=delivered.order_id,
                product_id=mouse.product_id,
                quantity=2,
                unit_price=Decimal("19.99"),
            ),
            models.OrderItem(
                order_id=delivered.order_id,
                product_id=cable.product_id,
                quantity=1,
                unit_price=Decimal("5.50"),
            ),
            models.OrderItem(
                order_id=pending.order_id,
                product_id=cable.product_id,
                quantity=4,
                unit_price=Decimal("5.50"),
            ),
            models.Payment(
                order_id=delivered.order_id,
                amount=Decimal("45.48"),
                payment_method="Card",
                status="Completed",
            ),
            models.Payment(
                order_id=pending.order_id,
                amount=Decimal("22.00"),
                payment_method="Card",
                status="Pending",
            ),
        ]
    )
    await db_session.commit()
    return delivered, pending
