"""
Core framework components for the validated event layer.

Provides the validated emitter that fronts a raw event bus,
its configuration, and the metrics it records.
"""

from .config import EmitterConfig, ObservabilityConfig, EnforcementMode, LEGACY_ALLOW_UNCATALOGUED
from .metrics import EventMetricsCollector
from .metrics_store import MetricsStore, EmissionMetric, EmissionMetricsSnapshot, format_summary
from .emitter import ValidatedEmitter, EmitResult, RawEventBus

__all__ = [
    "EmitterConfig",
    "ObservabilityConfig",
    "EnforcementMode",
    "LEGACY_ALLOW_UNCATALOGUED",
    "EventMetricsCollector",
    "MetricsStore",
    "EmissionMetric",
    "EmissionMetricsSnapshot",
    "format_summary",
    "ValidatedEmitter",
    "EmitResult",
    "RawEventBus",
]
