from __future__ import annotations

from fastapi import APIRouter, Response

from dashboard.app.core.metrics import REGISTRY
from dashboard.app.core.config import settings

router = APIRouter(prefix="/api", tags=["metrics"])


@router.get("/metrics")
def metrics() -> Response:
    payload = REGISTRY.render_prometheus()

    # expose which upstream we read from
    url_label = settings.orders_api_url.replace("\\", "\\\\").replace('"', '\\"')
    extra = [
        "# HELP dashboard_upstream_info Configured orders endpoint (as label)\n# TYPE dashboard_upstream_info gauge\n",
        f'dashboard_upstream_info{{url="{url_label}"}} 1\n',
    ]
    return Response(content=payload + "".join(extra), media_type="text/plain; version=0.0.4")
