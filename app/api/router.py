from fastapi import APIRouter
from app.api.endpoints import (
    auth, users, merchants, branches, products, customers, orders, reports,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(merchants.router, prefix="/merchants", tags=["merchants"])

# Catalog, scoped by ?merchant_id=
api_router.include_router(branches.router, prefix="/branches", tags=["branches"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(customers.router, prefix="/customers", tags=["customers"])

api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
