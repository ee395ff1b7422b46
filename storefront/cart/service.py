"""Cart manager persisting line items through the JSON store."""
from decimal import Decimal
from typing import Iterable, List, Optional

from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.storage import JsonStore, StorageKeys
from .models import CartLineItem, CartTotals

logger = get_logger(__name__)


class CartManager:
    """
    Manages the shopping cart stored under ``StorageKeys.CART``.

    Features:
    - Lines keyed by (product_id, size, firmness); re-adding accumulates
    - Quantity clamped to ``max_quantity`` on add
    - Every mutation writes the whole collection back before returning

    Totals are never cached; call ``calculate_totals`` after each mutation.
    """

    def __init__(self, store: JsonStore, key: str = StorageKeys.CART):
        self.store = store
        self.key = key

    def items(self) -> List[CartLineItem]:
        """Load the persisted lines, skipping unparseable rows and empty quantities."""
        items = []
        for row in self.store.read(self.key):
            try:
                item = CartLineItem.from_dict(row)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping corrupted cart line: {type(e).__name__}: {e}")
                continue
            if item.quantity < 1:
                logger.warning(f"Skipping cart line {sanitize_id_for_logging(item.product_id)} with quantity {item.quantity}")
                continue
            items.append(item)
        return items

    def _save(self, items: List[CartLineItem]) -> List[CartLineItem]:
        self.store.write(self.key, [item.to_dict() for item in items])
        return items

    @staticmethod
    def _find(items: List[CartLineItem], product_id: str, size: str, firmness: str) -> Optional[CartLineItem]:
        return next((item for item in items if item.matches(product_id, size, firmness)), None)

    def add(self, item: CartLineItem, quantity: int = 1) -> List[CartLineItem]:
        """Add ``quantity`` units of ``item``; the item's own quantity is ignored."""
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValueError("quantity must be a positive integer")

        items = self.items()
        existing = self._find(items, *item.key)

        if existing:
            existing.quantity += quantity
            max_quantity = item.max_quantity or existing.max_quantity
            if max_quantity and existing.quantity > max_quantity:
                existing.quantity = max_quantity
        else:
            line = CartLineItem(
                product_id=item.product_id,
                name=item.name,
                unit_price=item.unit_price,
                image=item.image,
                size=item.size,
                firmness=item.firmness,
                quantity=quantity,
                original_unit_price=item.original_unit_price,
                max_quantity=item.max_quantity,
            )
            if line.max_quantity and line.quantity > line.max_quantity:
                line.quantity = line.max_quantity
            items.append(line)

        logger.debug(f"Cart add {sanitize_id_for_logging(item.product_id)} x{quantity}")
        return self._save(items)

    def set_quantity(self, product_id: str, size: str, firmness: str, new_quantity: int) -> List[CartLineItem]:
        """
        Set a line's quantity verbatim; ``<= 0`` removes the line.

        Unlike ``add`` this does not clamp against ``max_quantity``.
        """
        items = self.items()
        existing = self._find(items, product_id, size, firmness)

        if existing:
            if new_quantity <= 0:
                items.remove(existing)
            else:
                existing.quantity = int(new_quantity)

        return self._save(items)

    def remove(self, product_id: str, size: str, firmness: str) -> List[CartLineItem]:
        """Remove a line if present."""
        items = [item for item in self.items() if not item.matches(product_id, size, firmness)]
        return self._save(items)

    def clear(self) -> None:
        """Empty the cart."""
        self._save([])

    @staticmethod
    def calculate_totals(items: Iterable[CartLineItem]) -> CartTotals:
        """Sum of unit_price x quantity and of quantities."""
        total = Decimal("0")
        item_count = 0
        for item in items:
            total += item.line_total
            item_count += item.quantity
        return CartTotals(total=total, item_count=item_count)

    def summary(self) -> dict:
        """Current lines with freshly computed totals."""
        items = self.items()
        totals = self.calculate_totals(items)
        return {
            "items": items,
            "total": totals.total,
            "item_count": totals.item_count,
            "is_empty": not items,
        }
