from __future__ import annotations
import threading
import time
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Tuple

LabelKey = Tuple[Tuple[str, str], ...]


def _key(labels: Optional[Dict[str, str]]) -> LabelKey:
    return tuple(sorted((labels or {}).items()))


def _label_str(key: LabelKey) -> str:
    return ",".join(f'{k}="{v}"' for k, v in key)


# ---------- Primitives ----------

class _Counter:
    def __init__(self, name: str, help_: str = ""):
        self.name = name
        self.help = help_
        self._lock = threading.Lock()
        self._values: Dict[LabelKey, int] = defaultdict(int)

    def inc(self, labels: Optional[Dict[str, str]] = None, by: int = 1) -> None:
        with self._lock:
            self._values[_key(labels)] += by

    def value(self, labels: Optional[Dict[str, str]] = None) -> int:
        with self._lock:
            return self._values.get(_key(labels), 0)

    def render(self) -> Iterable[str]:
        if self.help:
            yield f"# HELP {self.name} {self.help}\n# TYPE {self.name} counter\n"
        with self._lock:
            snapshot = sorted(self._values.items())
        for key, v in snapshot:
            if key:
                yield f"{self.name}{{{_label_str(key)}}} {v}\n"
            else:
                yield f"{self.name} {v}\n"


class _Histogram:
    DEFAULT_BUCKETS = [0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10]  # seconds

    def __init__(self, name: str, help_: str = "", buckets: Optional[Iterable[float]] = None):
        self.name = name
        self.help = help_
        self._lock = threading.Lock()
        self._buckets = sorted(buckets or self.DEFAULT_BUCKETS)
        self._counts: Dict[LabelKey, Dict[float, int]] = defaultdict(lambda: defaultdict(int))
        self._sum: Dict[LabelKey, float] = defaultdict(float)
        self._obs: Dict[LabelKey, int] = defaultdict(int)

    def observe(self, value_seconds: float, labels: Optional[Dict[str, str]] = None) -> None:
        key = _key(labels)
        with self._lock:
            self._sum[key] += value_seconds
            self._obs[key] += 1
            for b in self._buckets:
                if value_seconds <= b + 1e-12:
                    self._counts[key][b] += 1
                    break
            else:  # +Inf
                self._counts[key][float("inf")] += 1

    def timer(self, labels: Optional[Dict[str, str]] = None) -> Callable[[], None]:
        start = time.perf_counter()

        def _stop() -> None:
            self.observe(time.perf_counter() - start, labels=labels)

        return _stop

    def render(self) -> Iterable[str]:
        if self.help:
            yield f"# HELP {self.name} {self.help}\n# TYPE {self.name} histogram\n"
        with self._lock:
            snapshot = [
                (key, dict(self._counts.get(key, {})), self._sum[key], self._obs[key])
                for key in sorted(self._obs.keys())
            ]
        for key, counts, sum_, obs in snapshot:
            label_str = _label_str(key)
            running = 0
            # cumulative buckets
            for b in self._buckets + [float("inf")]:
                running += counts.get(b, 0)
                le = "+Inf" if b == float("inf") else f"{b:.2f}"
                if label_str:
                    yield f'{self.name}_bucket{{{label_str},le="{le}"}} {running}\n'
                else:
                    yield f'{self.name}_bucket{{le="{le}"}} {running}\n'
            if label_str:
                yield f"{self.name}_sum{{{label_str}}} {sum_}\n"
                yield f"{self.name}_count{{{label_str}}} {obs}\n"
            else:
                yield f"{self.name}_sum {sum_}\n"
                yield f"{self.name}_count {obs}\n"


# ---------- Registry ----------

class MetricsRegistry:
    def __init__(self):
        self._items: List[object] = []

    def counter(self, name: str, help_: str = "") -> _Counter:
        c = _Counter(name, help_)
        self._items.append(c)
        return c

    def histogram(self, name: str, help_: str = "", buckets: Optional[Iterable[float]] = None) -> _Histogram:
        h = _Histogram(name, help_, buckets=buckets)
        self._items.append(h)
        return h

    def render_prometheus(self) -> str:
        out: List[str] = []
        for it in self._items:
            out.extend(it.render())
        return "".join(out)


REGISTRY = MetricsRegistry()

# ---------- App metrics ----------

order_fetch_counter = REGISTRY.counter(
    "dashboard_order_fetch_total", "Order fetch cycles by result (ok|error|discarded)"
)
order_fetch_duration = REGISTRY.histogram(
    "dashboard_order_fetch_duration_seconds", "Upstream order fetch duration in seconds"
)
render_counter = REGISTRY.counter("dashboard_renders_total", "Dashboard page renders by theme")
