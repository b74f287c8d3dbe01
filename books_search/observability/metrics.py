from __future__ import annotations

from threading import Lock
from typing import Any

LabelKey = tuple[tuple[str, str], ...]

_ALLOWED_LABELS = {"operation", "status"}


def _label_key(labels: dict[str, Any] | None) -> LabelKey:
    if not labels:
        return ()
    return tuple(sorted((key, str(value)) for key, value in labels.items() if key in _ALLOWED_LABELS and value is not None))


def _series_name(name: str, labels: LabelKey) -> str:
    if not labels:
        return name
    return name + "{" + ",".join(f"{key}={value}" for key, value in labels) + "}"


class MetricsRegistry:
    """Process-local counters and millisecond timers for outbound calls."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._counters: dict[tuple[str, LabelKey], int] = {}
        self._timers: dict[tuple[str, LabelKey], list[float]] = {}

    def increment(self, name: str, value: int = 1, labels: dict[str, Any] | None = None) -> None:
        series = (name, _label_key(labels))
        with self._lock:
            self._counters[series] = self._counters.get(series, 0) + value

    def observe_ms(self, name: str, ms: float, labels: dict[str, Any] | None = None) -> None:
        series = (name, _label_key(labels))
        with self._lock:
            # count, sum, min, max
            stats = self._timers.setdefault(series, [0.0, 0.0, ms, ms])
            stats[0] += 1.0
            stats[1] += ms
            stats[2] = min(stats[2], ms)
            stats[3] = max(stats[3], ms)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            counters = {_series_name(name, labels): value for (name, labels), value in self._counters.items()}
            timers = {
                _series_name(name, labels): {
                    "count": int(count),
                    "sum": total,
                    "min": low,
                    "max": high,
                    "avg": total / count if count else 0.0,
                }
                for (name, labels), (count, total, low, high) in self._timers.items()
            }
        return {"counters": counters, "timers_ms": timers}

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timers.clear()


registry = MetricsRegistry()


def increment(name: str, value: int = 1, labels: dict[str, Any] | None = None) -> None:
    registry.increment(name, value=value, labels=labels)


def observe_ms(name: str, ms: float, labels: dict[str, Any] | None = None) -> None:
    registry.observe_ms(name, ms, labels=labels)


def snapshot() -> dict[str, Any]:
    return registry.snapshot()


def reset() -> None:
    registry.reset()
