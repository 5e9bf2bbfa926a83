# dashboard/app/services/order_dashboard.py
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

import httpx

from dashboard.app.core.lifetime import Lifetime
from dashboard.app.core.metrics import order_fetch_counter, order_fetch_duration
from dashboard.app.core.theme import ThemeStore
from dashboard.app.integrations.orders.client import (
    UNKNOWN_FETCH_ERROR,
    USE_SETTINGS,
    FetchError,
    fetch_orders,
)
from dashboard.app.models.order import DashboardState, Order, OrderRow
from dashboard.app.services.formatting import to_row
from dashboard.app.services.renderer import render_dashboard

log = logging.getLogger(__name__)

OrdersFetcher = Callable[..., Awaitable[List[Order]]]


class OrderDashboard:
    """
    The order dashboard component.

    Lifecycle:
      mount()   -> binds a fresh Lifetime and runs the single fetch cycle
      unmount() -> cancels the Lifetime; a fetch still in flight is discarded
    Theme changes go through `self.theme` (ThemeStore) and are mirrored into state.
    """

    def __init__(
        self,
        *,
        theme: str = "light",
        url: Optional[str] = None,
        timeout: Union[float, None, Any] = USE_SETTINGS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        fetcher: OrdersFetcher = fetch_orders,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.transport = transport
        self._fetcher = fetcher
        self._lifetime: Optional[Lifetime] = None
        self._mounts = 0

        self.theme = ThemeStore(theme)
        self.state = DashboardState(theme=self.theme.mode)
        self.theme.subscribe(self._on_theme)

    # ---------- lifecycle ----------

    @property
    def mounted(self) -> bool:
        return self._lifetime is not None and self._lifetime.alive

    async def mount(self) -> "OrderDashboard":
        if self.mounted:
            raise RuntimeError("OrderDashboard is already mounted")
        self._mounts += 1
        lifetime = Lifetime(f"order-dashboard#{self._mounts}")
        self._lifetime = lifetime
        await self._load_orders(lifetime)
        return self

    def unmount(self) -> None:
        if self._lifetime is not None:
            self._lifetime.cancel("unmounted")

    async def __aenter__(self) -> "OrderDashboard":
        return await self.mount()

    async def __aexit__(self, *exc: Any) -> None:
        self.unmount()

    # ---------- theme ----------

    def _on_theme(self, mode: str) -> None:
        self.state.theme = mode

    def toggle_theme(self) -> str:
        return self.theme.toggle()

    # ---------- data ----------

    def _write(self, lifetime: Lifetime, **changes: Any) -> bool:
        if not lifetime.alive:
            log.debug("%r: dropped state write %s", lifetime, sorted(changes))
            return False
        for name, value in changes.items():
            setattr(self.state, name, value)
        return True

    async def _load_orders(self, lifetime: Lifetime) -> None:
        self._write(lifetime, loading=True, error="")
        log.debug("fetching orders url=%s", self.url or "<default>")
        stop = order_fetch_duration.timer()
        try:
            orders = await self._fetcher(self.url, timeout=self.timeout, transport=self.transport)
        except FetchError as e:
            stop()
            if not lifetime.alive:
                order_fetch_counter.inc({"result": "discarded"})
                log.debug("%r: discarded failed fetch: %s", lifetime, e)
                return
            order_fetch_counter.inc({"result": "error"})
            log.warning("orders fetch failed: %s", e)
            self._write(lifetime, error=str(e) or UNKNOWN_FETCH_ERROR, loading=False)
            return
        stop()

        if not lifetime.alive:
            order_fetch_counter.inc({"result": "discarded"})
            log.debug("%r: discarded %d orders", lifetime, len(orders))
            return
        order_fetch_counter.inc({"result": "ok"})
        log.info("loaded %d orders", len(orders))
        self._write(lifetime, orders=orders, loading=False)

    # ---------- view ----------

    def rows(self) -> List[OrderRow]:
        return [to_row(o) for o in self.state.orders]

    def render(self) -> str:
        return render_dashboard(self.state)
