"""Per-route request metrics for the HTTP surface."""
from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass
import time
from typing import Any, Deque, Dict, Mapping

UNMATCHED_ROUTE = "unmatched"


def route_key(scope: Mapping[str, Any]) -> str:
    """Name a request by its route template, e.g. ``POST /api/players/join``.

    The router stores the matched route in the scope. Requests that matched
    nothing, or matched a path under another method, share one bucket.
    """
    route = scope.get("route")
    method = scope.get("method", "")
    methods = getattr(route, "methods", None)
    if route is None or (methods and method not in methods):
        return UNMATCHED_ROUTE
    return f"{method} {route.path}"


@dataclass(frozen=True)
class RouteHit:
    status_code: int
    duration_ms: int

    @property
    def failed(self) -> bool:
        return self.status_code >= 500


class MetricsCollector:
    """Rolling window of responses per route template."""

    def __init__(self, window_size: int = 200) -> None:
        self._window_size = window_size
        self._hits: Dict[str, Deque[RouteHit]] = {}
        self._last_alert: Dict[str, float] = {}

    def record(self, route: str, *, status_code: int, duration_ms: int) -> None:
        window = self._hits.setdefault(route, deque(maxlen=self._window_size))
        window.append(RouteHit(status_code=status_code, duration_ms=duration_ms))

    def reset(self) -> None:
        self._hits.clear()
        self._last_alert.clear()

    def snapshot(self) -> dict[str, dict]:
        payload: dict[str, dict] = {}
        for route, window in self._hits.items():
            if not window:
                continue
            total = len(window)
            failed = sum(1 for hit in window if hit.failed)
            classes = Counter(f"{hit.status_code // 100}xx" for hit in window)
            payload[route] = {
                "count": total,
                "errors": failed,
                "errorRate": round(failed / total, 3),
                "avgMs": int(sum(hit.duration_ms for hit in window) / total),
                "maxMs": max(hit.duration_ms for hit in window),
                "statuses": dict(sorted(classes.items())),
            }
        return payload

    def should_alert(
        self,
        route: str,
        *,
        error_rate: float = 0.2,
        avg_ms: int = 2000,
        min_interval_s: int = 60,
    ) -> bool:
        window = self._hits.get(route)
        if not window or len(window) < 5:
            return False
        total = len(window)
        failed = sum(1 for hit in window if hit.failed)
        avg = int(sum(hit.duration_ms for hit in window) / total)
        if (failed / total) < error_rate and avg < avg_ms:
            return False
        now = time.time()
        if now - self._last_alert.get(route, 0.0) < min_interval_s:
            return False
        self._last_alert[route] = now
        return True


metrics = MetricsCollector()
