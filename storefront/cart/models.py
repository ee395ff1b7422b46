"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from storefront.money import multiply, to_decimal, to_json_number

LineKey = Tuple[str, str, str]


@dataclass
class CartLineItem:
    """One cart entry: a product in a given size and firmness."""
    product_id: str
    name: str
    unit_price: Decimal
    image: str
    size: str
    firmness: str
    quantity: int = 1
    original_unit_price: Optional[Decimal] = None
    max_quantity: Optional[int] = None

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        if self.original_unit_price is not None:
            self.original_unit_price = to_decimal(self.original_unit_price)

    @property
    def key(self) -> LineKey:
        """Uniqueness key within a cart."""
        return (self.product_id, self.size, self.firmness)

    @property
    def line_total(self) -> Decimal:
        return multiply(self.unit_price, self.quantity)

    def matches(self, product_id: str, size: str, firmness: str) -> bool:
        return self.key == (product_id, size, firmness)

    def to_dict(self) -> dict:
        """Convert to the storefront's persisted JSON shape."""
        data = {
            "id": self.product_id,
            "name": self.name,
            "price": to_json_number(self.unit_price),
            "image": self.image,
            "size": self.size,
            "firmness": self.firmness,
            "quantity": self.quantity,
        }
        if self.original_unit_price is not None:
            data["originalPrice"] = to_json_number(self.original_unit_price)
        if self.max_quantity is not None:
            data["maxQuantity"] = self.max_quantity
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        """Create from the persisted JSON shape."""
        max_quantity = data.get("maxQuantity")
        original_price = data.get("originalPrice")
        return cls(
            product_id=str(data["id"]),
            name=data["name"],
            unit_price=to_decimal(data["price"]),
            image=data.get("image", ""),
            size=data["size"],
            firmness=data["firmness"],
            quantity=int(data["quantity"]),
            original_unit_price=to_decimal(original_price) if original_price is not None else None,
            max_quantity=int(max_quantity) if max_quantity is not None else None,
        )


@dataclass(frozen=True)
class CartTotals:
    """Totals derived from a list of line items."""
    total: Decimal
    item_count: int

    def to_dict(self) -> dict:
        return {"total": to_json_number(self.total), "itemCount": self.item_count}
