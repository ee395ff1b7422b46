"""Remote API boundary: envelope handling and HTTP clients."""
from .envelope import Bare, Enveloped, api_root, error_message, pick, resolve_envelope, unwrap
from .http import ApiResponse, post_json, send_json
from .users import UserApiClient

__all__ = [
    "ApiResponse",
    "Bare",
    "Enveloped",
    "UserApiClient",
    "api_root",
    "error_message",
    "pick",
    "post_json",
    "resolve_envelope",
    "send_json",
    "unwrap",
]
