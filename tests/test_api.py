"""Tests for response envelopes and the /users API client"""
import json

import httpx
import pytest

from storefront.api import (
    Bare,
    Enveloped,
    UserApiClient,
    api_root,
    error_message,
    pick,
    resolve_envelope,
    unwrap,
)
from storefront.errors import ApiError
from storefront.storage import StorageKeys


class TestEnvelope:
    def test_bare_payload(self):
        """Payloads without a data key resolve as bare"""
        assert resolve_envelope({"user": {"id": 1}}) == Bare({"user": {"id": 1}})
        assert resolve_envelope([1, 2]) == Bare([1, 2])

    def test_enveloped_payload(self):
        """A data key marks the payload as enveloped"""
        assert resolve_envelope({"data": [1]}) == Enveloped([1])

    def test_null_data_is_bare(self):
        """A null data value does not count as an envelope"""
        assert isinstance(resolve_envelope({"data": None, "ok": True}), Bare)

    def test_unwrap(self):
        """Unwrap returns the inner payload either way"""
        assert unwrap({"data": {"total": 3}}) == {"total": 3}
        assert unwrap({"total": 3}) == {"total": 3}

    def test_pick_prefers_top_level(self):
        """Top-level fields win over enveloped ones"""
        body = {"token": "top", "data": {"token": "nested"}}

        assert pick(body, "token") == "top"
        assert pick({"data": {"token": "nested"}}, "token") == "nested"
        assert pick({"data": [1]}, "token") is None
        assert pick("not a dict", "token") is None

    def test_error_message(self):
        """Message, then error, then the fallback text"""
        assert error_message({"message": "m", "error": "e"}, "fb") == "m"
        assert error_message({"error": "e"}, "fb") == "e"
        assert error_message({}, "fb") == "fb"
        assert error_message([], "fb") == "fb"

    @pytest.mark.parametrize(
        "base,expected",
        [
            ("http://localhost:8000", "http://localhost:8000"),
            ("http://localhost:8000/", "http://localhost:8000"),
            ("http://localhost:8000/api", "http://localhost:8000"),
            ("http://localhost:8000/api/v1/", "http://localhost:8000"),
            ("https://shop.example/backend/api/v2", "https://shop.example/backend"),
        ],
    )
    def test_api_root(self, base, expected):
        """Version suffixes are stripped from the API root"""
        assert api_root(base) == expected


class TestUserApiClient:
    @pytest.mark.asyncio
    async def test_unwraps_envelope_and_sends_token(self, store, make_client):
        """Stored token goes out as a bearer header"""
        store.write_text(StorageKeys.TOKEN, "tok-9")

        def handler(request):
            assert request.headers["Authorization"] == "Bearer tok-9"
            assert request.url.path == "/users/dashboard/stats"
            return httpx.Response(200, json={"data": {"pendingOrders": 2, "cartItems": 1}})

        api = UserApiClient("http://api.test", store, client=make_client(handler))

        assert await api.get_dashboard_stats() == {"pendingOrders": 2, "cartItems": 1}

    @pytest.mark.asyncio
    async def test_bare_payload(self, store, make_client):
        """Bare responses are returned as-is"""
        api = UserApiClient("http://api.test/", store, client=make_client(lambda r: httpx.Response(200, json=[{"id": "a1"}])))

        assert await api.get_addresses() == [{"id": "a1"}]

    @pytest.mark.asyncio
    async def test_no_token_no_auth_header(self, store, make_client):
        """No Authorization header without a stored token"""
        def handler(request):
            assert "Authorization" not in request.headers
            return httpx.Response(200, json=[])

        assert await UserApiClient("http://api.test", store, client=make_client(handler)).get_orders() == []

    @pytest.mark.asyncio
    async def test_request_method_path_and_body(self, store, make_client):
        """Method, path and JSON body reach the backend"""
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path, json.loads(request.content) if request.content else None))
            return httpx.Response(200, json={"data": []})

        api = UserApiClient("http://api.test", store, client=make_client(handler))
        await api.add_to_cart("P1", 2)
        await api.update_cart_quantity("P1", 5)
        await api.remove_from_wishlist("P1")
        await api.place_order("addr-1")

        assert seen == [
            ("POST", "/users/cart", {"productId": "P1", "quantity": 2}),
            ("PATCH", "/users/cart/quantity/P1", {"quantity": 5}),
            ("DELETE", "/users/wishlist/P1", None),
            ("POST", "/users/orders", {"addressId": "addr-1"}),
        ]

    @pytest.mark.asyncio
    async def test_error_body_message(self, store, make_client):
        """Non-2xx responses raise ApiError with the body message"""
        api = UserApiClient(
            "http://api.test", store, client=make_client(lambda r: httpx.Response(401, json={"message": "Token expired"}))
        )

        with pytest.raises(ApiError) as exc_info:
            await api.get_profile()

        assert exc_info.value.message == "Token expired"
        assert exc_info.value.status == 401

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, store, make_client):
        """HTML error pages still raise ApiError with the status"""
        api = UserApiClient(
            "http://api.test", store, client=make_client(lambda r: httpx.Response(500, text="<html>oops</html>"))
        )

        with pytest.raises(ApiError, match=r"Request failed \(500\)"):
            await api.get_order("o-1")

    @pytest.mark.asyncio
    async def test_transport_error(self, store, make_client):
        """Transport failures raise ApiError without a status"""
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        api = UserApiClient("http://api.test", store, client=make_client(handler))

        with pytest.raises(ApiError) as exc_info:
            await api.get_cart()
        assert exc_info.value.status is None
