"""Admin Catalog Service.

Local product and order management for the admin console, persisted in the
same store as the customer state.
"""

import uuid
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from storefront.errors import ERROR_ORDER_INVALID_STATUS
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.storage import JsonStore, StorageKeys
from .models import Order, OrderStatus, Product, utc_now_iso

logger = get_logger(__name__)

DEFAULT_PRODUCT_IMAGE = "/luxury-bedroom-with-premium-mattress--modern-minim.jpg"


def default_products() -> List[Product]:
    """Demo catalog used when nothing has been stored yet."""
    return [
        Product(
            id="1",
            name="Nexa Rest Premium Memory Foam",
            description="Experience ultimate comfort with our premium memory foam mattress",
            price=45000,
            original_price=60000,
            images=[DEFAULT_PRODUCT_IMAGE],
            category="Memory Foam",
            sizes=["Single", "Double", "Queen", "King"],
            firmness=["Soft", "Medium", "Firm"],
            features=["Memory Foam", "Cooling Gel", "10 Year Warranty", "Free Delivery"],
            in_stock=True,
            stock_count=50,
        ),
        Product(
            id="2",
            name="Nexa Rest Hybrid Luxury",
            description="Perfect blend of memory foam and pocket springs",
            price=55000,
            original_price=75000,
            images=[DEFAULT_PRODUCT_IMAGE],
            category="Hybrid",
            sizes=["Single", "Double", "Queen", "King"],
            firmness=["Medium", "Firm"],
            features=["Hybrid Technology", "Edge Support", "10 Year Warranty", "Free Setup"],
            in_stock=True,
            stock_count=30,
        ),
    ]


class AdminService:
    """Admin console operations over products and orders."""

    def __init__(self, store: JsonStore) -> None:
        self.store = store

    # Products

    def _load_products(self) -> Optional[List[Product]]:
        if self.store.read_text(StorageKeys.PRODUCTS) is None:
            return None
        rows = self.store.read(StorageKeys.PRODUCTS)
        products = []
        for row in rows:
            try:
                products.append(Product.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping invalid product record: %s errors", e.error_count())
        return products

    def _save_products(self, products: List[Product]) -> None:
        self.store.write(StorageKeys.PRODUCTS, [p.to_record() for p in products])

    def products(self) -> List[Product]:
        """Stored products, seeding the demo catalog on first use."""
        products = self._load_products()
        if products is None:
            products = default_products()
            self._save_products(products)
        return products

    def get_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products() if p.id == product_id), None)

    def add_product(self, data: Dict[str, Any]) -> Product:
        """Create a product; ``id`` and timestamps are assigned here."""
        now = utc_now_iso()
        fields = {k: v for k, v in data.items() if k not in ("id", "createdAt", "updatedAt", "created_at", "updated_at")}
        product = Product.model_validate({**fields, "id": uuid.uuid4().hex, "createdAt": now, "updatedAt": now})

        products = self.products()
        products.append(product)
        self._save_products(products)
        logger.info("Added product %s", sanitize_id_for_logging(product.id))
        return product

    def update_product(self, product_id: str, updates: Dict[str, Any]) -> Optional[Product]:
        """Merge ``updates`` into a product. Returns None if it does not exist."""
        products = self.products()
        for index, product in enumerate(products):
            if product.id != product_id:
                continue
            record = product.to_record()
            for key, value in updates.items():
                field = Product.model_fields.get(key)
                record[(field.alias or key) if field else key] = value
            record["id"] = product_id
            record["updatedAt"] = utc_now_iso()
            products[index] = Product.model_validate(record)
            self._save_products(products)
            return products[index]
        return None

    def delete_product(self, product_id: str) -> bool:
        products = self.products()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return False
        self._save_products(remaining)
        return True

    # Orders

    def orders(self) -> List[Order]:
        orders = []
        for row in self.store.read(StorageKeys.ORDERS):
            try:
                orders.append(Order.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping invalid order record: %s errors", e.error_count())
        return orders

    def _save_orders(self, orders: List[Order]) -> None:
        self.store.write(StorageKeys.ORDERS, [o.to_record() for o in orders])

    def add_order(self, order: Order) -> Order:
        """Record an order placed at checkout."""
        orders = self.orders()
        orders.append(order)
        self._save_orders(orders)
        return order

    def update_order_status(self, order_id: str, status: OrderStatus | str) -> Optional[Order]:
        """Set an order's status. Returns None if the order does not exist."""
        try:
            new_status = OrderStatus(status)
        except ValueError as e:
            raise ValueError(f"{ERROR_ORDER_INVALID_STATUS}: {status}") from e

        orders = self.orders()
        for index, order in enumerate(orders):
            if order.id == order_id:
                orders[index] = order.model_copy(update={"status": new_status, "updated_at": utc_now_iso()})
                self._save_orders(orders)
                return orders[index]
        return None

    # Analytics

    def analytics(self) -> Dict[str, Any]:
        """Dashboard figures for the admin home page."""
        orders = self.orders()
        products = self.products()

        return {
            "total_revenue": sum(o.total for o in orders if o.status != OrderStatus.CANCELLED),
            "total_orders": len(orders),
            "pending_orders": sum(1 for o in orders if o.status == OrderStatus.PENDING),
            "total_products": len(products),
            "out_of_stock_products": sum(1 for p in products if p.is_out_of_stock),
            "recent_orders": list(reversed(orders[-5:])),
        }
