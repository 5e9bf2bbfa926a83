import asyncio

import httpx
import pytest

from dashboard.app.core.metrics import order_fetch_counter
from dashboard.app.integrations.orders.client import FetchError
from dashboard.app.services.order_dashboard import OrderDashboard

ORDERS = [{"id": 1, "customer_name": "Alice", "total_amount": 9.99, "status": "CREATED"}]


def _transport(handler):
    return httpx.MockTransport(handler)


def test_initial_state_before_mount():
    board = OrderDashboard()
    assert board.state.theme == "light"
    assert board.state.loading is True
    assert board.state.orders == []
    assert board.state.error == ""
    assert board.mounted is False


def test_mount_loads_orders_once():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json=ORDERS)

    board = OrderDashboard(transport=_transport(handler))
    asyncio.run(board.mount())

    assert calls == ["/api/orders/"]
    assert board.state.orders == ORDERS
    assert board.state.loading is False
    assert board.state.error == ""
    assert board.mounted is True


def test_orders_are_stored_unmodified():
    payload = {"results": [{"id": "x", "extra": {"nested": [1, 2]}, "status": "weird"}]}
    board = OrderDashboard(transport=_transport(lambda r: httpx.Response(200, json=payload)))
    asyncio.run(board.mount())
    assert board.state.orders == payload["results"]


def test_http_500_sets_error_and_keeps_orders_empty():
    board = OrderDashboard(transport=_transport(lambda r: httpx.Response(500)))
    asyncio.run(board.mount())
    assert "500" in board.state.error
    assert board.state.orders == []
    assert board.state.loading is False


def test_empty_failure_message_falls_back():
    async def failing(url, *, timeout=None, transport=None):
        raise FetchError("")

    board = OrderDashboard(fetcher=failing)
    asyncio.run(board.mount())
    assert board.state.error == "Unknown error while fetching orders"


def test_mount_twice_without_unmount_is_rejected():
    async def scenario():
        board = OrderDashboard(transport=_transport(lambda r: httpx.Response(200, json=[])))
        await board.mount()
        with pytest.raises(RuntimeError):
            await board.mount()

    asyncio.run(scenario())


def test_each_mount_fetches_again():
    calls = []

    def handler(request):
        calls.append(1)
        return httpx.Response(200, json=ORDERS)

    async def scenario():
        board = OrderDashboard(transport=_transport(handler))
        async with board:
            pass
        async with board:
            pass

    asyncio.run(scenario())
    assert len(calls) == 2


def test_unmount_before_fetch_resolves_discards_result():
    before = order_fetch_counter.value({"result": "discarded"})

    async def scenario():
        started = asyncio.Event()
        gate = asyncio.Event()

        async def slow(url, *, timeout=None, transport=None):
            started.set()
            await gate.wait()
            return ORDERS

        board = OrderDashboard(fetcher=slow)
        task = asyncio.create_task(board.mount())
        await started.wait()
        assert board.state.loading is True
        board.unmount()
        gate.set()
        await task
        return board

    board = asyncio.run(scenario())
    # nothing written after unmount: still the pre-resolution state
    assert board.state.orders == []
    assert board.state.loading is True
    assert board.state.error == ""
    assert order_fetch_counter.value({"result": "discarded"}) == before + 1


def test_unmount_before_failure_resolves_discards_error():
    async def scenario():
        started = asyncio.Event()
        gate = asyncio.Event()

        async def slow_fail(url, *, timeout=None, transport=None):
            started.set()
            await gate.wait()
            raise FetchError("Failed to fetch orders: 503", status_code=503)

        board = OrderDashboard(fetcher=slow_fail)
        task = asyncio.create_task(board.mount())
        await started.wait()
        board.unmount()
        gate.set()
        await task
        return board

    board = asyncio.run(scenario())
    assert board.state.error == ""
    assert board.state.loading is True


def test_toggle_theme_updates_state_and_render():
    board = OrderDashboard(transport=_transport(lambda r: httpx.Response(200, json=[])))
    asyncio.run(board.mount())
    assert board.toggle_theme() == "dark"
    assert board.state.theme == "dark"
    assert 'data-theme="dark"' in board.render()
    assert board.toggle_theme() == "light"
    assert board.state.theme == "light"


def test_rows_derive_from_state():
    board = OrderDashboard(transport=_transport(lambda r: httpx.Response(200, json=ORDERS)))
    asyncio.run(board.mount())
    (row,) = board.rows()
    assert row.order_id == "#1"
    assert row.total == "$9.99"
    assert row.status_label == "Created"


def test_malformed_url_becomes_error_state():
    board = OrderDashboard(url="http://[::1/api/orders/")
    asyncio.run(board.mount())
    assert board.state.error
    assert board.state.loading is False
    assert board.state.orders == []
    assert "Error: " in board.render()
