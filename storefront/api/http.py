"""HTTP helpers shared by the auth and user API clients."""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Optional

import httpx

from storefront.errors import ERROR_NETWORK
from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


@dataclass
class ApiResponse:
    """Outcome of one request. ``status`` is 0 when no response arrived."""

    status: int = 0
    body: Any = field(default_factory=dict)
    is_json: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300


def decode_body(response: httpx.Response) -> tuple[Any, bool]:
    """
    Decode a body as JSON; undecodable or empty bodies become ``{}``.

    The flag reports whether the server declared a JSON content type.
    """
    is_json = "json" in response.headers.get("content-type", "")
    try:
        return response.json(), is_json
    except ValueError:
        return {}, is_json


@asynccontextmanager
async def borrow_client(client: Optional[httpx.AsyncClient], timeout: float) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the shared client, or a short-lived one when none is configured."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as own_client:
        yield own_client


async def send_json(
    client: Optional[httpx.AsyncClient],
    method: str,
    url: str,
    payload: Any = None,
    timeout: float = 5.0,
    headers: Optional[dict] = None,
) -> ApiResponse:
    """Send a JSON request. Transport failures are returned, never raised."""
    request_headers = dict(JSON_HEADERS)
    if headers:
        request_headers.update(headers)

    try:
        async with borrow_client(client, timeout) as http:
            response = await http.request(
                method,
                url,
                json=payload,
                headers=request_headers,
                timeout=timeout,
            )
    except httpx.TimeoutException:
        logger.warning(f"Timeout calling {method} {sanitize_string_for_logging(url, max_length=120)}")
        return ApiResponse(error=f"Request timed out after {timeout:g}s")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(
            f"Request to {sanitize_string_for_logging(url, max_length=120)} failed: {type(e).__name__}: "
            f"{sanitize_string_for_logging(str(e))}"
        )
        return ApiResponse(error=str(e) or ERROR_NETWORK)

    body, is_json = decode_body(response)
    return ApiResponse(status=response.status_code, body=body, is_json=is_json)


async def post_json(
    client: Optional[httpx.AsyncClient],
    url: str,
    payload: dict,
    timeout: float = 5.0,
) -> ApiResponse:
    return await send_json(client, "POST", url, payload, timeout=timeout)
