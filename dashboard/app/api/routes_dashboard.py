# dashboard/app/api/routes_dashboard.py
from __future__ import annotations

from typing import Literal, Optional

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse

from dashboard.app.core.config import settings
from dashboard.app.core.metrics import render_counter
from dashboard.app.services.order_dashboard import OrderDashboard

router = APIRouter(tags=["dashboard"])

ThemeParam = Optional[Literal["light", "dark"]]


def get_orders_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for the upstream client; None means real network I/O."""
    return None


def _new_dashboard(
    theme: Optional[str], transport: Optional[httpx.AsyncBaseTransport]
) -> OrderDashboard:
    return OrderDashboard(
        theme=theme or settings.default_theme,
        url=settings.orders_api_url,
        timeout=settings.orders_timeout_seconds,
        transport=transport,
    )


@router.get("/", response_class=HTMLResponse)
async def dashboard_page(
    theme: ThemeParam = Query(default=None, description="light|dark (defaults to settings.default_theme)"),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_orders_transport),
) -> HTMLResponse:
    """
    Mount a dashboard, run its single fetch, render, unmount.
    A failed fetch is still a 200 page with the error banner.
    """
    async with _new_dashboard(theme, transport) as board:
        html = board.render()
        render_counter.inc({"theme": board.state.theme})
    return HTMLResponse(html)


@router.get("/api/dashboard")
async def dashboard_state(
    theme: ThemeParam = Query(default=None),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_orders_transport),
) -> JSONResponse:
    """JSON view of the same state the page renders from."""
    async with _new_dashboard(theme, transport) as board:
        st = board.state
        payload = {
            "theme": st.theme,
            "data_theme": board.theme.data_theme,
            "loading": st.loading,
            "error": st.error,
            "count": len(st.orders),
            "orders": st.orders,
            "rows": [r.model_dump() for r in board.rows()],
            "empty": st.is_empty,
        }
    return JSONResponse(payload)
