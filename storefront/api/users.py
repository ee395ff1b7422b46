"""
User API Client

Async client for the backend's ``/users/*`` routes (dashboard, profile,
addresses, server-side cart and wishlist, orders). Responses are unwrapped
from the ``data`` envelope; failures raise ``ApiError`` with the server's
message.
"""

from typing import Any, Optional

import httpx

from storefront.errors import ApiError
from storefront.logging import get_logger
from storefront.storage import JsonStore, StorageKeys
from .envelope import error_message, unwrap
from .http import send_json

logger = get_logger(__name__)


class UserApiClient:
    """Client for the authenticated ``/users`` REST family."""

    def __init__(
        self,
        base_url: str,
        store: JsonStore,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.client = client
        self.timeout = timeout

    def _auth_headers(self) -> dict:
        token = self.store.read_text(StorageKeys.TOKEN)
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(self, path: str, method: str = "GET", body: Any = None) -> Any:
        """Send a request and return the unwrapped payload."""
        response = await send_json(
            self.client,
            method,
            f"{self.base_url}{path}",
            body,
            timeout=self.timeout,
            headers=self._auth_headers(),
        )
        if response.error is not None:
            raise ApiError(response.error)
        if not response.ok:
            message = error_message(response.body, f"Request failed ({response.status})")
            logger.warning(f"{method} {path} -> {response.status}: {message}")
            raise ApiError(message, response.status)
        return unwrap(response.body)

    # Dashboard
    async def get_dashboard_stats(self) -> dict:
        return await self.request("/users/dashboard/stats")

    async def get_recent_orders(self) -> list:
        return await self.request("/users/orders/recent")

    # Profile
    async def get_profile(self) -> dict:
        return await self.request("/users/profile")

    async def update_profile(self, name: str) -> dict:
        return await self.request("/users/profile", "PATCH", {"name": name})

    # Addresses
    async def get_addresses(self) -> list:
        return await self.request("/users/address")

    async def add_address(self, address: dict) -> list:
        return await self.request("/users/address", "POST", address)

    async def update_address(self, address_id: str, address: dict) -> list:
        return await self.request(f"/users/address/{address_id}", "PATCH", address)

    async def delete_address(self, address_id: str) -> list:
        return await self.request(f"/users/address/{address_id}", "DELETE")

    # Wishlist
    async def get_wishlist(self) -> list:
        return await self.request("/users/wishlist")

    async def add_to_wishlist(self, product_id: str) -> list:
        return await self.request("/users/wishlist", "POST", {"productId": product_id})

    async def remove_from_wishlist(self, product_id: str) -> list:
        return await self.request(f"/users/wishlist/{product_id}", "DELETE")

    # Cart
    async def get_cart(self) -> list:
        return await self.request("/users/cart")

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> list:
        return await self.request("/users/cart", "POST", {"productId": product_id, "quantity": quantity})

    async def remove_from_cart(self, cart_item_id: str) -> list:
        return await self.request(f"/users/cart/{cart_item_id}", "DELETE")

    async def update_cart_quantity(self, product_id: str, quantity: int) -> list:
        return await self.request(f"/users/cart/quantity/{product_id}", "PATCH", {"quantity": quantity})

    # Orders
    async def place_order(self, address_id: str) -> dict:
        return await self.request("/users/orders", "POST", {"addressId": address_id})

    async def get_orders(self) -> list:
        return await self.request("/users/orders")

    async def get_order(self, order_id: str) -> dict:
        return await self.request(f"/users/orders/{order_id}")
