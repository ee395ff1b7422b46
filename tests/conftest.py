"""Pytest configuration and fixtures"""
import os
from typing import Callable

import httpx
import pytest

# Keep tests off any real backend configured in the environment
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("API_BASE_URL", "http://api.test")
os.environ.setdefault("PAYMENT_DELAY_SCALE", "0")

from storefront.auth import ChangeNotifier
from storefront.cart import CartLineItem
from storefront.config import Settings
from storefront.storage import JsonStore, MemoryBackend
from storefront.wishlist import WishlistEntry


@pytest.fixture
def settings():
    """Settings pointing at fake hosts, no simulated latency"""
    return Settings(
        api_base_url="http://api.test",
        login_url="http://primary.test/api/auth/login",
        login_fallback_url="http://fallback.test/api/auth/login",
        request_timeout=2.0,
        storage_backend="memory",
        payment_delay_scale=0,
    )


@pytest.fixture
def backend():
    """In-memory storage backend"""
    return MemoryBackend()


@pytest.fixture
def store(backend):
    """JSON store over the in-memory backend"""
    return JsonStore(backend)


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler``"""
    def _make(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def sample_user():
    """User record as returned by the auth backend"""
    return {
        "id": "user-001",
        "email": "user@nexarest.com",
        "name": "Test User",
        "role": "user",
        "phone": "+91 9876543211",
        "address": {
            "street": "456 User Street",
            "city": "Delhi",
            "state": "Delhi",
            "pincode": "110001",
        },
        "createdAt": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def queen_medium():
    """Queen / Medium mattress line"""
    return CartLineItem(
        product_id="P1",
        name="Nexa Rest Premium Memory Foam",
        unit_price=50000,
        image="/mattress.jpg",
        size="Queen",
        firmness="Medium",
    )


@pytest.fixture
def make_entry():
    """Build a wishlist entry for a product id"""
    def _make(product_id: str, price: int = 45000) -> WishlistEntry:
        return WishlistEntry(
            product_id=product_id,
            name=f"Mattress {product_id}",
            price=price,
            image="/mattress.jpg",
        )

    return _make
