"""Wishlist package."""
from .models import WishlistEntry
from .service import WishlistManager

__all__ = ["WishlistEntry", "WishlistManager"]
