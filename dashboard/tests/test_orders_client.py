import asyncio

import httpx
import pytest

from dashboard.app.integrations.orders.client import FetchError, fetch_orders, normalize_orders

URL = "http://upstream.test:3001/api/orders/"

ORDERS = [
    {"id": 1, "customer_name": "Alice", "total_amount": 9.99, "status": "created"},
    {"id": 2, "customer_name": "Bob", "total_amount": 15, "status": "delivered"},
]


def _fetch(handler):
    return asyncio.run(fetch_orders(URL, transport=httpx.MockTransport(handler)))


def test_normalize_array_is_returned_unchanged():
    assert normalize_orders(ORDERS) is ORDERS


def test_normalize_results_wrapper():
    assert normalize_orders({"results": ORDERS, "count": 2}) is ORDERS


@pytest.mark.parametrize(
    "data",
    [{}, {"results": None}, {"results": {"id": 1}}, {"items": ORDERS}, "orders", 42, None],
)
def test_normalize_other_shapes_are_empty(data):
    assert normalize_orders(data) == []


def test_fetch_array_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        return httpx.Response(200, json=ORDERS)

    assert _fetch(handler) == ORDERS
    assert seen == {"method": "GET", "url": URL}


def test_fetch_wrapped_body():
    assert _fetch(lambda req: httpx.Response(200, json={"results": ORDERS})) == ORDERS


def test_fetch_unexpected_shape_is_empty_not_error():
    assert _fetch(lambda req: httpx.Response(200, json={"detail": "ok"})) == []


def test_fetch_non_success_status():
    with pytest.raises(FetchError) as ei:
        _fetch(lambda req: httpx.Response(500, text="boom"))
    assert ei.value.status_code == 500
    assert str(ei.value) == "Failed to fetch orders: 500"


def test_fetch_404_also_fails():
    with pytest.raises(FetchError, match="404"):
        _fetch(lambda req: httpx.Response(404))


def test_fetch_malformed_json():
    with pytest.raises(FetchError) as ei:
        _fetch(lambda req: httpx.Response(200, content=b"<html>nope</html>"))
    assert ei.value.status_code == 200
    assert str(ei.value)


def test_fetch_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(FetchError, match="Connection refused") as ei:
        _fetch(handler)
    assert ei.value.status_code is None


@pytest.mark.parametrize("bad_url", ["http://[::1/api/orders/", "http://localhost:3001/api/\x00orders/"])
def test_fetch_malformed_url(bad_url):
    transport = httpx.MockTransport(lambda req: httpx.Response(200, json=ORDERS))
    with pytest.raises(FetchError) as ei:
        asyncio.run(fetch_orders(bad_url, transport=transport))
    assert str(ei.value)
    assert ei.value.status_code is None


def _seen_timeout(monkeypatch, configured, **kwargs):
    from dashboard.app.core.config import settings

    monkeypatch.setattr(settings, "orders_timeout_seconds", configured)
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.extensions["timeout"])
        return httpx.Response(200, json=[])

    asyncio.run(fetch_orders(URL, transport=httpx.MockTransport(handler), **kwargs))
    return seen


def test_timeout_defaults_to_settings(monkeypatch):
    seen = _seen_timeout(monkeypatch, 2.5)
    assert seen["read"] == 2.5


def test_explicit_none_disables_configured_timeout(monkeypatch):
    seen = _seen_timeout(monkeypatch, 2.5, timeout=None)
    assert seen == {"connect": None, "read": None, "write": None, "pool": None}


def test_explicit_timeout_wins(monkeypatch):
    seen = _seen_timeout(monkeypatch, None, timeout=1.0)
    assert seen["connect"] == 1.0
