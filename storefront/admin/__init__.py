"""Admin catalog package."""
from .models import Order, OrderItem, OrderStatus, Product, ShippingAddress
from .service import AdminService, default_products

__all__ = [
    "AdminService",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
    "ShippingAddress",
    "default_products",
]
