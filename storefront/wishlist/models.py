"""Wishlist models."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from storefront.money import to_decimal, to_json_number


@dataclass
class WishlistEntry:
    """Saved product reference."""
    product_id: str
    name: str
    price: Decimal
    image: str
    original_price: Optional[Decimal] = None
    category: Optional[str] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    in_stock: Optional[bool] = None

    def __post_init__(self):
        self.price = to_decimal(self.price)
        if self.original_price is not None:
            self.original_price = to_decimal(self.original_price)

    def to_dict(self) -> dict:
        data = {
            "id": self.product_id,
            "name": self.name,
            "price": to_json_number(self.price),
            "image": self.image,
        }
        optional = {
            "originalPrice": to_json_number(self.original_price) if self.original_price is not None else None,
            "category": self.category,
            "rating": self.rating,
            "reviews": self.review_count,
            "inStock": self.in_stock,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WishlistEntry":
        original_price = data.get("originalPrice")
        return cls(
            product_id=str(data["id"]),
            name=data["name"],
            price=to_decimal(data["price"]),
            image=data.get("image", ""),
            original_price=to_decimal(original_price) if original_price is not None else None,
            category=data.get("category"),
            rating=data.get("rating"),
            review_count=data.get("reviews"),
            in_stock=data.get("inStock"),
        )
