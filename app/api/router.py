from fastapi import APIRouter
from app.api.endpoints import customers, products, orders, categories, reviews

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(customers.router)
api_router.include_router(products.router)
api_router.include_router(orders.router)
api_router.include_router(categories.router)
api_router.include_router(reviews.router)
