"""
Common Errors

Shared error messages and the exception types raised at the storage and
API boundaries.
"""

# Session errors
ERROR_LOGIN_FAILED = "Login failed"
ERROR_LOGIN_NO_USER = "Login response did not include a user"
ERROR_LOGIN_SUPERSEDED = "Login superseded by a newer attempt"
ERROR_REGISTRATION_FAILED = "Registration failed"
ERROR_VERIFICATION_FAILED = "Verification failed"
ERROR_NETWORK = "Network error"

# Catalog errors
ERROR_ORDER_INVALID_STATUS = "Invalid order status"

# Payment errors
ERROR_CARD_DECLINED = "Your card was declined. Please try a different payment method."
ERROR_INVALID_CVV = "Invalid CVV. Please check your card details."
ERROR_INVALID_UPI = "Invalid UPI ID format"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class StorageDecodeError(StorefrontError):
    """A persisted value could not be decoded.

    Raised by the decoder and always recovered by ``JsonStore`` as empty
    state.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not decode '{key}': {reason}")


class ApiError(StorefrontError):
    """Remote call failed with a non-2xx status or a transport error."""

    def __init__(self, message: str, status: int | None = None):
        self.message = message
        self.status = status
        super().__init__(message)
