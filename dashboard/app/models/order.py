from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from pydantic import BaseModel, Field

# Orders are kept exactly as decoded from the upstream JSON:
#   {id, customer_name, total_amount, status, created_at?, updated_at?}
Order = Dict[str, Any]


class OrderRow(BaseModel):
    """Display-only projection of one order (one table row)."""

    key: str = Field(description="Row key (stringified order id)")
    order_id: str = Field(description="'#<id>'")
    customer: str
    total: str
    status_label: str
    status_style: str = Field(description="created|delivered|invoiced")
    updated: str


@dataclass
class DashboardState:
    theme: str = "light"
    orders: List[Order] = field(default_factory=list)
    loading: bool = True
    error: str = ""

    @property
    def is_empty(self) -> bool:
        """True when the 'No orders found.' row should show."""
        return not self.loading and not self.error and len(self.orders) == 0
