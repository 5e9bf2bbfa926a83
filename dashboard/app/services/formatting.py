from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dashboard.app.models.order import Order, OrderRow

PLACEHOLDER = "—"

PALETTE: Dict[str, str] = {
    "primary": "#2563EB",    # created
    "success": "#F59E0B",    # delivered (amber)
    "error": "#EF4444",
    "background": "#f9fafb",
    "surface": "#ffffff",
    "text": "#111827",
}

STATUS_STYLES: Dict[str, Dict[str, str]] = {
    "created": {
        "chip_bg": "rgba(37, 99, 235, 0.12)",
        "chip_text": PALETTE["primary"],
        "border": "1px solid rgba(37, 99, 235, 0.25)",
    },
    "delivered": {
        "chip_bg": "rgba(245, 158, 11, 0.12)",
        "chip_text": PALETTE["success"],
        "border": "1px solid rgba(245, 158, 11, 0.25)",
    },
    "invoiced": {
        "chip_bg": "rgba(156, 163, 175, 0.15)",
        "chip_text": "#6B7280",
        "border": "1px solid rgba(156, 163, 175, 0.3)",
    },
}

_STATUS_LABELS = {"created": "Created", "delivered": "Delivered", "invoiced": "Invoiced"}


def status_label(status: Any) -> str:
    if not status:
        return "Unknown"
    return _STATUS_LABELS.get(str(status).lower(), str(status))


def status_style_key(status: Any) -> str:
    """Known statuses map to themselves; anything else borrows 'created'."""
    key = str(status or "").lower()
    return key if key in STATUS_STYLES else "created"


def format_total(amount: Any) -> str:
    if isinstance(amount, (int, float)) and not isinstance(amount, bool):
        return f"${amount:.2f}"
    if not amount:
        return PLACEHOLDER
    return str(amount)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO-8601 strings (trailing 'Z' allowed) or epoch milliseconds."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_timestamp(dt: datetime) -> str:
    # en-US style: 1/15/2024, 2:05:09 PM
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


def format_updated(order: Order) -> str:
    raw = order.get("updated_at") or order.get("created_at") or ""
    if not raw:
        return PLACEHOLDER
    dt = parse_timestamp(raw)
    return format_timestamp(dt) if dt is not None else str(raw)


def format_order_id(order_id: Any) -> str:
    return f"#{'' if order_id is None else order_id}"


def to_row(order: Order) -> OrderRow:
    """Derive the display row; tolerates missing or odd fields."""
    if not isinstance(order, dict):
        order = {}
    oid = order.get("id")
    return OrderRow(
        key="" if oid is None else str(oid),
        order_id=format_order_id(oid),
        customer=str(order.get("customer_name") or PLACEHOLDER),
        total=format_total(order.get("total_amount")),
        status_label=status_label(order.get("status")),
        status_style=status_style_key(order.get("status")),
        updated=format_updated(order),
    )
