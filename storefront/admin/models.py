"""Admin catalog entities (camelCase on disk, snake_case in Python)."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class OrderStatus(str, Enum):
    """Order status lifecycle."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Product(_CamelModel):
    """Catalog product."""

    id: str
    name: str
    description: str = ""
    price: float
    original_price: Optional[float] = Field(default=None, alias="originalPrice")
    images: List[str] = Field(default_factory=list)
    category: str = ""
    sizes: List[str] = Field(default_factory=list)
    firmness: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    in_stock: bool = Field(default=True, alias="inStock")
    stock_count: int = Field(default=0, alias="stockCount")
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")
    updated_at: str = Field(default_factory=utc_now_iso, alias="updatedAt")

    @property
    def is_out_of_stock(self) -> bool:
        return not self.in_stock or self.stock_count == 0


class OrderItem(_CamelModel):
    product_id: str = Field(alias="productId")
    product_name: str = Field(alias="productName")
    size: str
    firmness: str
    quantity: int
    price: float


class ShippingAddress(_CamelModel):
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    address: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    phone: str = ""


class Order(_CamelModel):
    """Customer order as seen by the admin console."""

    id: str
    user_id: str = Field(alias="userId")
    user_email: str = Field(default="", alias="userEmail")
    user_name: str = Field(default="", alias="userName")
    items: List[OrderItem] = Field(default_factory=list)
    total: float = 0
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: Optional[ShippingAddress] = Field(default=None, alias="shippingAddress")
    payment_method: str = Field(default="", alias="paymentMethod")
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")
    updated_at: str = Field(default_factory=utc_now_iso, alias="updatedAt")
