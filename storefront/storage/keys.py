"""Durable storage keys.

These names are the on-device contract shared with the web storefront; do
not rename them.
"""


class StorageKeys:
    """Keys owned by the state modules (one owner per key)."""

    CART = "nexa_rest_cart"
    WISHLIST = "nexa_rest_wishlist"
    CURRENT_USER = "nexa_rest_current_user"
    TOKEN = "nexa_rest_token"
    ACCESS_TOKEN = "accessToken"

    # Local admin catalog
    PRODUCTS = "nexa_rest_products"
    ORDERS = "nexa_rest_orders"

    @staticmethod
    def session_keys() -> tuple[str, ...]:
        """Keys cleared on logout."""
        return (StorageKeys.CURRENT_USER, StorageKeys.TOKEN, StorageKeys.ACCESS_TOKEN)
