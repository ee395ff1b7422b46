"""
Response envelope handling.

The backend answers either with a bare payload or with the payload nested
under ``data``. The shape is resolved once here so call sites only ever see
the payload.
"""

import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

_API_SUFFIX = re.compile(r"/(api)(?:/v\d+)?$")


@dataclass(frozen=True)
class Bare(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Enveloped(Generic[T]):
    payload: T


Envelope = Union[Bare[Any], Enveloped[Any]]


def resolve_envelope(body: Any) -> Envelope:
    """Classify a decoded response body."""
    if isinstance(body, dict) and body.get("data") is not None:
        return Enveloped(body["data"])
    return Bare(body)


def unwrap(body: Any) -> Any:
    """Return the payload whichever shape the body has."""
    return resolve_envelope(body).payload


def pick(body: Any, name: str) -> Any:
    """
    Look up ``name`` on the body, then inside its envelope.

    ``{"user": u}`` and ``{"data": {"user": u}}`` both yield ``u``.
    """
    if not isinstance(body, dict):
        return None
    value = body.get(name)
    if value:
        return value
    envelope = resolve_envelope(body)
    if isinstance(envelope, Enveloped) and isinstance(envelope.payload, dict):
        return envelope.payload.get(name) or None
    return None


def error_message(body: Any, fallback: str) -> str:
    """Human-readable error from a ``{message|error}`` body, else ``fallback``."""
    if isinstance(body, dict):
        for field in ("message", "error"):
            value = body.get(field)
            if isinstance(value, str) and value:
                return value
    return fallback


def api_root(base_url: str) -> str:
    """Strip trailing slashes and a trailing ``/api`` or ``/api/vN`` segment."""
    return _API_SUFFIX.sub("", base_url.rstrip("/"))
