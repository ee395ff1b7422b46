"""
Storefront composition root.

``create_storefront()`` is the single place where the store, the change
notifier and the state managers are built and wired together. Callers keep
the returned ``Storefront`` for the lifetime of the page/session; there is
no module-level state.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from storefront.admin import AdminService
from storefront.api import UserApiClient
from storefront.auth import ChangeNotifier, SessionManager
from storefront.cart import CartManager
from storefront.config import Settings, get_settings
from storefront.logging import get_logger
from storefront.payments import PaymentSimulator
from storefront.storage import (
    FileBackend,
    JsonStore,
    MemoryBackend,
    NullBackend,
    RedisBackend,
    StorageBackend,
)
from storefront.wishlist import WishlistManager

logger = get_logger(__name__)


def create_backend(settings: Settings) -> StorageBackend:
    """Build the storage backend named in settings."""
    name = settings.storage_backend
    if name == "memory":
        return MemoryBackend()
    if name == "file":
        return FileBackend(settings.storage_path)
    if name == "redis":
        return RedisBackend(
            settings.upstash_redis_rest_url,
            settings.upstash_redis_rest_token,
            prefix=settings.storage_prefix,
        )
    return NullBackend()


@dataclass
class Storefront:
    """Everything one browsing context needs, built once."""

    settings: Settings
    store: JsonStore
    notifier: ChangeNotifier
    cart: CartManager
    wishlist: WishlistManager
    session: SessionManager
    users: UserApiClient
    admin: AdminService
    payments: PaymentSimulator

    def new_session_view(self) -> SessionManager:
        """Another session consumer kept in sync through the shared notifier."""
        return SessionManager(self.store, self.notifier, self.settings, client=self.session.client)


def create_storefront(
    settings: Optional[Settings] = None,
    backend: Optional[StorageBackend] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Storefront:
    """
    Build and wire the storefront state.

    Args:
        settings: Defaults to ``get_settings()``
        backend: Overrides the backend named in settings
        http_client: Shared client for remote calls; a short-lived client is
            opened per request when omitted
    """
    settings = settings or get_settings()
    store = JsonStore(backend if backend is not None else create_backend(settings))
    if not store.is_durable:
        logger.info("No durable storage configured; state will not be persisted")

    notifier = ChangeNotifier()
    return Storefront(
        settings=settings,
        store=store,
        notifier=notifier,
        cart=CartManager(store),
        wishlist=WishlistManager(store),
        session=SessionManager(store, notifier, settings, client=http_client),
        users=UserApiClient(settings.api_base_url, store, client=http_client, timeout=settings.request_timeout),
        admin=AdminService(store),
        payments=PaymentSimulator(delay_scale=settings.payment_delay_scale),
    )
