"""Stage timings and counters for the measurement pipeline.

Telemetry is off unless ``SKY_HEIGHT_TELEMETRY=1`` (or ``DEBUG=1``) is set and
at least one reporter is attached. When off, every executor shares a single
stateless no-op context, so instrumented code pays only for a method call.
"""

from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os
import time
from types import TracebackType
from typing import Any, Protocol, Self, TypeAlias, runtime_checkable

log = logging.getLogger(__name__)

# Active scope names, innermost last; per task/thread via ContextVar
_active_scopes: ContextVar[tuple[str, ...]] = ContextVar("active_scopes", default=())


def telemetry_enabled() -> bool:
    """Return True when telemetry is switched on through the environment."""
    return os.getenv("SKY_HEIGHT_TELEMETRY") == "1" or os.getenv("DEBUG") == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Receives timings and metrics; any object with these two methods works."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...  # noqa: D102
    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class _NoOpTelemetryContext:
    """Accepts every call and records nothing."""

    def __call__(self, name: str, **metadata: Any) -> Self:  # noqa: ARG002
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        pass

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        pass


def _path_and_metadata(
    name: str, metadata: dict[str, Any]
) -> tuple[str, dict[str, Any]]:
    scopes = _active_scopes.get()
    return ".".join((*scopes, name)), {
        "depth": len(scopes),
        "parent_scope": ".".join(scopes) or None,
        **metadata,
    }


class _RecordingTelemetryContext:
    """Times scopes and forwards metrics to every attached reporter.

    A failing reporter is logged and skipped; it never breaks a measurement.
    """

    __slots__ = ("reporters",)

    def __init__(self, *reporters: TelemetryReporter):
        self.reporters = reporters

    @contextmanager
    def __call__(self, name: str, **metadata: Any) -> Iterator[Self]:
        if not name:
            raise ValueError("Scope name must be a non-empty string")

        path, enriched = _path_and_metadata(name, metadata)
        token = _active_scopes.set((*_active_scopes.get(), name))
        started = time.perf_counter()
        try:
            yield self
        finally:
            elapsed = time.perf_counter() - started
            _active_scopes.reset(token)
            self._emit("record_timing", path, elapsed, enriched)

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        """Record a value under the current scope path."""
        path, enriched = _path_and_metadata(name, metadata)
        self._emit("record_metric", path, value, enriched)

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        """Record a counter increment."""
        self.metric(name, increment, metric_type="counter", **metadata)

    def _emit(self, method: str, path: str, value: Any, metadata: dict[str, Any]) -> None:
        for reporter in self.reporters:
            try:
                getattr(reporter, method)(path, value, **metadata)
            except Exception:
                log.exception("Telemetry reporter %s failed", type(reporter).__name__)


_NO_OP = _NoOpTelemetryContext()

TelemetryContextProtocol: TypeAlias = _RecordingTelemetryContext | _NoOpTelemetryContext


def TelemetryContext(*reporters: TelemetryReporter) -> TelemetryContextProtocol:  # noqa: N802
    """Return a recording context, or the shared no-op one when disabled."""
    if reporters and telemetry_enabled():
        return _RecordingTelemetryContext(*reporters)
    return _NO_OP


class InMemoryReporter:
    """Keeps the most recent timings and metrics per scope in memory.

    Meant for development and tests; `get_report()` renders a short summary.
    """

    def __init__(self, max_entries_per_scope: int = 1000):
        self.max_entries = max_entries_per_scope
        self.timings: dict[str, deque[tuple[float, dict[str, Any]]]] = {}
        self.metrics: dict[str, deque[tuple[Any, dict[str, Any]]]] = {}

    def _bucket(self, store: dict[str, deque], scope: str) -> deque:
        return store.setdefault(scope, deque(maxlen=self.max_entries))

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        self._bucket(self.timings, scope).append((duration, metadata))

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        self._bucket(self.metrics, scope).append((value, metadata))

    def get_report(self) -> str:
        """One line per scope: call count and mean duration, or metric totals."""
        lines = ["=== Telemetry Report ==="]
        for scope, entries in sorted(self.timings.items()):
            mean = sum(d for d, _ in entries) / len(entries)
            lines.append(f"{scope:<32} calls={len(entries):<5} mean={mean * 1000:.3f}ms")
        for scope, entries in sorted(self.metrics.items()):
            total = sum(v for v, _ in entries if isinstance(v, int | float))
            lines.append(f"{scope:<32} events={len(entries):<5} total={total:g}")
        return "\n".join(lines)
