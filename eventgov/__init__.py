"""
Schema-governed event layer.

Validation, governance and observability for events passing
through a raw publish/subscribe bus.
"""

from .schemas import SchemaCatalog, SchemaRegistry, CoverageAnalyzer, default_catalog, default_registry
from .framework import ValidatedEmitter, EmitterConfig, EnforcementMode, MetricsStore

__version__ = "0.1.0"

__all__ = [
    "SchemaCatalog",
    "SchemaRegistry",
    "CoverageAnalyzer",
    "default_catalog",
    "default_registry",
    "ValidatedEmitter",
    "EmitterConfig",
    "EnforcementMode",
    "MetricsStore",
]
