# Import every model so Base.metadata knows all tables
from app.models.user import User, UserRole
from app.models.merchant import Merchant
from app.models.catalog import Branch, Product, Customer
from app.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "User",
    "UserRole",
    "Merchant",
    "Branch",
    "Product",
    "Customer",
    "Order",
    "OrderItem",
    "OrderStatus",
]
