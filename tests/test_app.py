"""Tests for the composition root and settings"""
import httpx
import pytest

from storefront import create_storefront
from storefront.app import create_backend
from storefront.config import Settings
from storefront.storage import FileBackend, MemoryBackend, NullBackend, RedisBackend


def test_settings_from_env(monkeypatch):
    """Settings are read from environment variables"""
    monkeypatch.setenv("API_BASE_URL", "https://api.nexarest.test/")
    monkeypatch.setenv("REQUEST_TIMEOUT", "7.5")
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("STORAGE_PATH", "/tmp/nexa.json")

    settings = Settings.from_env()

    assert settings.api_base_url == "https://api.nexarest.test"
    assert settings.request_timeout == 7.5
    assert settings.storage_backend == "file"
    assert settings.storage_path == "/tmp/nexa.json"


def test_settings_reject_bad_timeout():
    """A non-positive timeout is rejected"""
    with pytest.raises(ValueError):
        Settings(request_timeout=0)


@pytest.mark.parametrize(
    "name,backend_type",
    [("memory", MemoryBackend), ("file", FileBackend), ("null", NullBackend)],
)
def test_create_backend(name, backend_type):
    """Each backend name builds its backend"""
    assert isinstance(create_backend(Settings(storage_backend=name)), backend_type)


def test_create_redis_backend():
    """Redis backend gets credentials and prefix from settings"""
    backend = create_backend(
        Settings(
            storage_backend="redis",
            upstash_redis_rest_url="https://example.upstash.io",
            upstash_redis_rest_token="token",
            storage_prefix="nexa:",
        )
    )

    assert isinstance(backend, RedisBackend)
    assert backend.prefix == "nexa:"


def test_storefront_shares_one_store(settings, queen_medium, make_entry):
    """Cart, wishlist and session share one store"""
    shop = create_storefront(settings, backend=MemoryBackend())

    shop.cart.add(queen_medium, 2)
    shop.wishlist.add(make_entry("W1"))

    assert shop.cart.store is shop.wishlist.store is shop.session.store
    assert shop.cart.calculate_totals(shop.cart.items()).item_count == 2
    assert shop.wishlist.contains("W1")


@pytest.mark.asyncio
async def test_session_views_follow_login(settings, make_client, sample_user):
    """Extra session views track login and logout"""
    client = make_client(lambda request: httpx.Response(200, json={"user": sample_user, "token": "t"}))
    shop = create_storefront(settings, backend=MemoryBackend(), http_client=client)
    header = shop.new_session_view()

    result = await shop.session.login("user@nexarest.com", "user123")

    assert result.ok
    assert header.is_authenticated
    shop.session.logout()
    assert not header.is_authenticated


def test_null_backend_storefront(settings, queen_medium):
    """Null backend storefront keeps nothing"""
    shop = create_storefront(settings.model_copy(update={"storage_backend": "null"}))

    shop.cart.add(queen_medium, 1)

    assert shop.store.is_durable is False
    assert shop.cart.items() == []
