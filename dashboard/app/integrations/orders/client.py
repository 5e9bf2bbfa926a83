from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from dashboard.app.core.config import settings

log = logging.getLogger(__name__)

UNKNOWN_FETCH_ERROR = "Unknown error while fetching orders"

# timeout default: read settings.orders_timeout_seconds at call time
USE_SETTINGS: Any = object()


class FetchError(RuntimeError):
    """Any failure acquiring the order list (network, HTTP status, bad JSON)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def normalize_orders(data: Any) -> List[Dict[str, Any]]:
    """
    Accept either a bare JSON array or an object wrapping it in `results`.
    Anything else yields an empty list (no error). Items are returned as-is.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        results = data.get("results")
        if isinstance(results, list):
            return results
    return []


async def fetch_orders(
    url: Optional[str] = None,
    *,
    timeout: Union[float, None, Any] = USE_SETTINGS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[Dict[str, Any]]:
    """
    GET the orders endpoint once and return the normalized collection.
    Raises FetchError for every failure mode.
    `timeout=None` disables the timeout; omit it to use settings.
    """
    url = url or settings.orders_api_url
    if timeout is USE_SETTINGS:
        timeout = settings.orders_timeout_seconds
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            r = await client.get(url, headers={"accept": "application/json"})
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.warning("orders fetch failed url=%s error=%r", url, e)
        raise FetchError(str(e) or UNKNOWN_FETCH_ERROR) from e

    if not r.is_success:
        raise FetchError(f"Failed to fetch orders: {r.status_code}", status_code=r.status_code)

    try:
        data = r.json()
    except ValueError as e:
        raise FetchError(str(e) or UNKNOWN_FETCH_ERROR, status_code=r.status_code) from e

    return normalize_orders(data)
