"""
Nexa Rest Storefront

Client-side state for the Nexa Rest mattress storefront:
- storage: JSON key-value store over memory / file / Upstash Redis
- cart: line items keyed by product, size and firmness
- wishlist: saved products, newest first
- auth: session user, login/logout and change notifications
- api: response envelopes and the /users REST client
- admin: local product and order management
- payments: mock payment gateway

Build everything through ``storefront.app.create_storefront``.
"""

__all__ = ["create_storefront", "Storefront"]


def __getattr__(name):
    """Lazy access to the composition root."""
    if name in ("create_storefront", "Storefront"):
        from storefront import app
        return getattr(app, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
