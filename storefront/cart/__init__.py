"""Cart package: models and manager."""
from .models import CartLineItem, CartTotals
from .service import CartManager

__all__ = [
    "CartLineItem",
    "CartTotals",
    "CartManager",
]
