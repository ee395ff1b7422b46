"""JSON key-value store used by the cart, wishlist and session modules."""
import json
from typing import Any, Optional

from storefront.errors import StorageDecodeError
from storefront.logging import get_logger
from .backends import NullBackend, StorageBackend

logger = get_logger(__name__)


class JsonStore:
    """
    JSON adapter over a raw storage backend.

    Reads never raise: absent, corrupt or wrongly-shaped values come back as
    empty state, and a failing backend degrades to empty reads and skipped
    writes.
    """

    def __init__(self, backend: Optional[StorageBackend] = None):
        self.backend = backend if backend is not None else NullBackend()

    @property
    def is_durable(self) -> bool:
        return not isinstance(self.backend, NullBackend)

    def _get_raw(self, key: str) -> Optional[str]:
        try:
            return self.backend.get(key)
        except Exception as e:
            logger.error(f"Storage read failed for '{key}': {type(e).__name__}: {e}")
            return None

    def _set_raw(self, key: str, value: str) -> None:
        try:
            self.backend.set(key, value)
        except Exception as e:
            logger.error(f"Storage write failed for '{key}': {type(e).__name__}: {e}")

    def _decode(self, key: str, raw: str) -> Any:
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise StorageDecodeError(key, str(e)) from e

    def read(self, key: str) -> list:
        """Read a JSON array; anything else reads as ``[]``."""
        raw = self._get_raw(key)
        if not raw:
            return []
        try:
            value = self._decode(key, raw)
        except StorageDecodeError as e:
            logger.warning(f"{e}; treating as empty")
            return []
        if not isinstance(value, list):
            logger.warning(f"Expected a list under '{key}', got {type(value).__name__}; treating as empty")
            return []
        return value

    def write(self, key: str, items: list) -> None:
        """Replace the whole collection stored under ``key``."""
        self._set_raw(key, json.dumps(list(items), ensure_ascii=False))

    def read_object(self, key: str) -> Optional[dict]:
        """Read a JSON object; anything else reads as ``None``."""
        raw = self._get_raw(key)
        if not raw:
            return None
        try:
            value = self._decode(key, raw)
        except StorageDecodeError as e:
            logger.warning(f"{e}; treating as absent")
            return None
        return value if isinstance(value, dict) else None

    def write_object(self, key: str, value: dict) -> None:
        self._set_raw(key, json.dumps(value, ensure_ascii=False))

    def read_text(self, key: str) -> Optional[str]:
        """Read a raw string value (tokens are stored unencoded)."""
        return self._get_raw(key) or None

    def write_text(self, key: str, value: str) -> None:
        self._set_raw(key, value)

    def remove(self, key: str) -> None:
        try:
            self.backend.delete(key)
        except Exception as e:
            logger.error(f"Storage delete failed for '{key}': {type(e).__name__}: {e}")
