"""
Schema definitions for governed events.

Provides:
- Event envelope and payload schemas
- The runtime event catalog
- Catalog coverage analysis
- The documentation/fixture schema registry
"""

from .events import BaseEventEnvelope, CanonicalEvent, EVENT_SCHEMAS, parse_event, to_wire
from .catalog import SchemaCatalog, ValidationResult, default_catalog
from .coverage import CoverageAnalyzer, CoverageReport, diff_observed_events
from .registry import SchemaRegistry, RegistryEntry, RegistryStats, FixtureReport, default_registry

__all__ = [
    "BaseEventEnvelope",
    "CanonicalEvent",
    "EVENT_SCHEMAS",
    "parse_event",
    "to_wire",
    "SchemaCatalog",
    "ValidationResult",
    "default_catalog",
    "CoverageAnalyzer",
    "CoverageReport",
    "diff_observed_events",
    "SchemaRegistry",
    "RegistryEntry",
    "RegistryStats",
    "FixtureReport",
    "default_registry",
]
