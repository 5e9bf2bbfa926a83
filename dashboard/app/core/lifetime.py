from __future__ import annotations

from typing import Optional


class Lifetime:
    """
    Cancellation token tied to one mount of a component.

    Work started during the mount checks `alive` before writing state; once
    `cancel()` runs (unmount), late results are dropped. The token never
    interrupts the awaited I/O itself.
    """

    def __init__(self, name: str = "component") -> None:
        self.name = name
        self._reason: Optional[str] = None

    @property
    def alive(self) -> bool:
        return self._reason is None

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "unmounted") -> None:
        # first reason wins
        if self._reason is None:
            self._reason = reason

    def __repr__(self) -> str:
        state = "alive" if self.alive else f"cancelled({self._reason})"
        return f"<Lifetime {self.name} {state}>"
