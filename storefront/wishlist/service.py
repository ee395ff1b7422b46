"""Wishlist manager.

Entries are unique by product id and ordered newest first: ``add`` prepends.
The membership set is rebuilt from every load and mutation, so
``contains`` always reflects the latest write.
"""
from typing import List, Set

from storefront.logging import get_logger
from storefront.storage import JsonStore, StorageKeys
from .models import WishlistEntry

logger = get_logger(__name__)


class WishlistManager:
    """Manages saved products stored under ``StorageKeys.WISHLIST``."""

    def __init__(self, store: JsonStore, key: str = StorageKeys.WISHLIST) -> None:
        self.store = store
        self.key = key
        self._ids: Set[str] = set()
        self.items()

    def items(self) -> List[WishlistEntry]:
        """Load saved entries, newest first."""
        entries = []
        for row in self.store.read(self.key):
            try:
                entries.append(WishlistEntry.from_dict(row))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Skipping corrupted wishlist entry: %s: %s", type(e).__name__, e)
        self._ids = {entry.product_id for entry in entries}
        return entries

    def _save(self, entries: List[WishlistEntry]) -> List[WishlistEntry]:
        self.store.write(self.key, [entry.to_dict() for entry in entries])
        self._ids = {entry.product_id for entry in entries}
        return entries

    @property
    def count(self) -> int:
        return len(self.items())

    def add(self, entry: WishlistEntry) -> List[WishlistEntry]:
        """Prepend ``entry`` unless its product is already saved."""
        entries = self.items()
        if entry.product_id not in self._ids:
            entries.insert(0, entry)
        return self._save(entries)

    def remove(self, product_id: str) -> List[WishlistEntry]:
        entries = [entry for entry in self.items() if entry.product_id != product_id]
        return self._save(entries)

    def clear(self) -> None:
        self._save([])

    def contains(self, product_id: str) -> bool:
        return product_id in self._ids
