import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_products_empty(client: AsyncClient):
    response = await client.get("/products")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_products(client: AsyncClient, test_products):
    response = await client.get("/products")

    assert response.status_code == 200
    data = response.json()
    assert [p["product_name"] for p in data] == ["Wireless Mouse", "USB-C Cable"]
    assert data[0]["price"] == "19.99"


@pytest.mark.asyncio
async def test_product_stock(client: AsyncClient, test_products):
    mouse, _ = test_products
    response = await client.get(f"/products/{mouse.product_id}/stock")
    assert response.json() == {"product_id": mouse.product_id, "stock_quantity": 10}


@pytest.mark.asyncio
async def test_unknown_product_stock_is_zero(client: AsyncClient):
    response = await client.get("/products/999/stock")
    assert response.status_code == 200
    assert response.json()["stock_quantity"] == 0


@pytest.mark.asyncio
async def test_review_count(client: AsyncClient, test_products):
    mouse, _ = test_products
    response = await client.get(f"/products/{mouse.product_id}/review-count")
    assert response.json()["review_count"] == 0


@pytest.mark.asyncio
async def test_decrement_stock(client: AsyncClient, test_products):
    mouse, _ = test_products
    response = await client.post(
        f"/products/{mouse.product_id}/stock/decrement", json={"quantity": 4}
    )

    assert response.status_code == 200
    assert response.json()["stock_quantity"] == 6


@pytest.mark.asyncio
async def test_decrement_stock_below_zero(client: AsyncClient, test_products):
    """Stock is not floored at zero"""
    _, cable = test_products
    response = await client.post(
        f"/products/{cable.product_id}/stock/decrement", json={"quantity": 5}
    )

    assert response.status_code == 200
    assert response.json()["stock_quantity"] == -2


@pytest.mark.asyncio
async def test_decrement_stock_unknown_product(client: AsyncClient):
    response = await client.post("/products/999/stock/decrement", json={"quantity": 1})
    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"


@pytest.mark.asyncio
async def test_top_products(client: AsyncClient, test_products, test_orders):
    mouse, cable = test_products
    response = await client.get("/products/top", params={"limit": 5})

    assert response.status_code == 200
    data = response.json()
    assert [p["product_id"] for p in data] == [cable.product_id, mouse.product_id]
    assert data[0]["units_sold"] == 5


@pytest.mark.asyncio
async def test_top_products_limit_too_large(client: AsyncClient):
    response = await client.get("/products/top", params={"limit": 10_000})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_decrement_stock_negative_quantity(client: AsyncClient, test_products):
    """A negative quantity is rejected instead of adding stock"""
    mouse, _ = test_products
    response = await client.post(
        f"/products/{mouse.product_id}/stock/decrement", json={"quantity": -5}
    )
    assert response.status_code == 422

    stock = await client.get(f"/products/{mouse.product_id}/stock")
    assert stock.json()["stock_quantity"] == 10
