"""
In-memory per-event-type emission metrics.

Metrics are memory-only and reset on restart. The store is owned
by the validated emitter, which is its only writer.
"""

import sys
import threading
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, TextIO, Tuple

from .config import EnforcementMode
from .metrics import EventMetricsCollector


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class EmissionMetric:
    """Observability record for one event type."""
    type: str
    count: int = 0
    first_emitted: int = 0
    last_emitted: int = 0
    avg_validation_ms: float = 0.0
    total_validation_ms: float = 0.0
    failures: int = 0
    last_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type,
            "count": self.count,
            "firstEmitted": self.first_emitted,
            "lastEmitted": self.last_emitted,
            "avgValidationMs": self.avg_validation_ms,
            "totalValidationMs": self.total_validation_ms,
            "failures": self.failures,
            "lastError": self.last_error,
        }


@dataclass(frozen=True)
class EmissionMetricsSnapshot:
    """Immutable, JSON-serializable view of the metrics store."""
    timestamp: str
    catalogued_types: Tuple[str, ...]
    unknown_emission_count: int
    mode: EnforcementMode
    metrics: Tuple[EmissionMetric, ...]

    @property
    def catalog_size(self) -> int:
        return len(self.catalogued_types)

    @property
    def strict_mode(self) -> bool:
        return self.mode is EnforcementMode.STRICT

    def get(self, event_type: str) -> Optional[EmissionMetric]:
        for metric in self.metrics:
            if metric.type == event_type:
                return metric
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp,
            "cataloguedTypes": list(self.catalogued_types),
            "catalogSize": self.catalog_size,
            "unknownEmissionCount": self.unknown_emission_count,
            "mode": self.mode.value,
            "strictMode": self.strict_mode,
            "metrics": [metric.to_dict() for metric in self.metrics],
        }


class MetricsStore:
    """
    Per-type emission counters.

    Records are replaced rather than mutated, so snapshots never
    change after they are taken. A lock guards updates for callers
    that emit from several OS threads.
    """

    def __init__(self, collector: Optional[EventMetricsCollector] = None):
        self.collector = collector
        self._metrics: Dict[str, EmissionMetric] = {}
        self._unknown_emission_count = 0
        self._lock = threading.Lock()

    @property
    def unknown_emission_count(self) -> int:
        return self._unknown_emission_count

    def record_metric(
        self,
        event_type: str,
        elapsed_ms: float,
        success: bool,
        error: Optional[str] = None
    ) -> EmissionMetric:
        """Record one validated (or rejected) emission of a type."""
        now = _now_ms()
        with self._lock:
            metric = self._metrics.get(event_type)
            if metric is None:
                metric = EmissionMetric(type=event_type, first_emitted=now, last_emitted=now)

            if success:
                count = metric.count + 1
                total = metric.total_validation_ms + elapsed_ms
                metric = replace(
                    metric,
                    count=count,
                    total_validation_ms=total,
                    avg_validation_ms=total / count,
                    last_emitted=now,
                )
            else:
                metric = replace(
                    metric,
                    failures=metric.failures + 1,
                    last_error=error,
                    last_emitted=now,
                )
            self._metrics[event_type] = metric

        if self.collector is not None:
            self.collector.record_emission(event_type, success, elapsed_ms)
        return metric

    def record_unknown(self, event_type: str) -> None:
        """Count one emission of an uncatalogued type."""
        with self._lock:
            self._unknown_emission_count += 1
        if self.collector is not None:
            self.collector.record_unknown(event_type)

    def record_drop(self, event_type: str) -> None:
        if self.collector is not None:
            self.collector.record_drop(event_type)

    def get(self, event_type: str) -> Optional[EmissionMetric]:
        return self._metrics.get(event_type)

    def get_emission_metrics(
        self,
        catalogued_types: Iterable[str] = (),
        mode: EnforcementMode = EnforcementMode.SOFT
    ) -> EmissionMetricsSnapshot:
        """Snapshot of all metrics, sorted by event type."""
        with self._lock:
            metrics = tuple(sorted(self._metrics.values(), key=lambda m: m.type))
            unknown = self._unknown_emission_count
        return EmissionMetricsSnapshot(
            timestamp=datetime.now(timezone.utc).isoformat(),
            catalogued_types=tuple(catalogued_types),
            unknown_emission_count=unknown,
            mode=mode,
            metrics=metrics,
        )

    def reset(self) -> None:
        with self._lock:
            self._metrics.clear()
            self._unknown_emission_count = 0


def format_summary(snapshot: EmissionMetricsSnapshot) -> str:
    """Render a human-readable digest of a metrics snapshot."""
    lines = [
        f"Event Emission Summary @ {snapshot.timestamp}",
        f"  Catalogued Types: {snapshot.catalog_size}",
        f"  Unknown Emissions: {snapshot.unknown_emission_count}",
        f"  Strict Mode: {'ON' if snapshot.strict_mode else 'off'}",
        "  Metrics:",
    ]
    for m in snapshot.metrics:
        lines.append(
            f"   - {m.type}: count={m.count}, avgValMs={m.avg_validation_ms:.3f}, failures={m.failures}"
        )
    return "\n".join(lines)


def print_summary(snapshot: EmissionMetricsSnapshot, stream: Optional[TextIO] = None) -> None:
    print(format_summary(snapshot), file=stream or sys.stdout)
