"""
Schema registry for documentation, coverage and fixture checks.

Associates each schema with a human-readable name, a domain tag
and optional metadata. The registry is not used for runtime
dispatch; that is the catalog's job. Its key namespace (schema
names) is independent of wire event types.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from pydantic import BaseModel, ValidationError
import structlog

from .events import (
    BaseEventEnvelope,
    SystemHealthCheckEvent,
    ComputeJobQueuedEvent,
    ComputeJobCompletedEvent,
    ComputeJobFailedEvent,
    UserAuthSessionStartEvent,
)
from ..utils.errors import SchemaError, FixtureError


logger = structlog.get_logger()

DEFAULT_FIXTURES_DIR = Path(__file__).parent / "fixtures"


@dataclass(frozen=True)
class RegistryEntry:
    """Documentation and coverage metadata for one schema."""
    name: str
    schema: Type[BaseModel]
    domain: str
    version: Optional[str] = None
    description: Optional[str] = None
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RegistryStats:
    """Registry statistics, optionally with file coverage."""
    total_registered: int
    domains: Dict[str, int]
    names: List[str]
    discovered_file_count: Optional[int] = None
    coverage_pct: Optional[float] = None
    orphan_files: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalRegistered": self.total_registered,
            "domains": dict(self.domains),
            "names": list(self.names),
            "discoveredFileCount": self.discovered_file_count,
            "coveragePct": self.coverage_pct,
            "orphanFiles": self.orphan_files,
        }


@dataclass
class FixtureReport:
    """Result of validating registered schemas against sample payloads."""
    total_fixtures: int = 0
    validated: int = 0
    failures: List[Dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalFixtures": self.total_fixtures,
            "validated": self.validated,
            "failures": [dict(failure) for failure in self.failures],
        }


class SchemaRegistry:
    """
    Registry of named schemas with domain tagging.

    Used for coverage percentage reporting, documentation models
    and fixture-based regression checks.
    """

    def __init__(self, entries: Sequence[RegistryEntry] = ()):
        self.logger = structlog.get_logger("schema-registry")
        self._entries: Dict[str, RegistryEntry] = {}
        for entry in entries:
            self._register(entry)

    def _register(self, entry: RegistryEntry) -> None:
        if entry.name in self._entries:
            raise SchemaError(f"Duplicate registry entry {entry.name!r}", schema_name=entry.name)
        self._entries[entry.name] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Tuple[RegistryEntry, ...]:
        return tuple(self._entries.values())

    def list_schemas(self) -> List[str]:
        """Return all schema names."""
        return list(self._entries.keys())

    def get_schema(self, name: str) -> Optional[RegistryEntry]:
        """Find schema entry by name."""
        return self._entries.get(name)

    def get_registry_stats(
        self,
        discovered_file_count: Optional[int] = None,
        orphan_files: Optional[List[str]] = None
    ) -> RegistryStats:
        """
        Compute registry statistics.

        Does not discover files on disk itself; external tooling
        supplies the discovered count used for the coverage percentage.
        """
        domains: Dict[str, int] = {}
        for entry in self._entries.values():
            domains[entry.domain] = domains.get(entry.domain, 0) + 1

        coverage_pct = None
        if discovered_file_count is not None and discovered_file_count > 0:
            coverage_pct = round(len(self._entries) / discovered_file_count * 100, 2)

        return RegistryStats(
            total_registered=len(self._entries),
            domains=domains,
            names=self.list_schemas(),
            discovered_file_count=discovered_file_count,
            coverage_pct=coverage_pct,
            orphan_files=orphan_files,
        )

    def validate_fixtures(self, fixtures_dir: Optional[Union[str, Path]] = None) -> FixtureReport:
        """
        Validate the fixture of every registered schema.

        The fixture for a schema is ``<fixtures_dir>/<name>.json``.
        Missing fixtures are skipped; unreadable or rejected ones are
        reported as failures without aborting the batch.
        """
        directory = Path(fixtures_dir) if fixtures_dir is not None else DEFAULT_FIXTURES_DIR
        report = FixtureReport()

        if not directory.is_dir():
            self.logger.warning("Fixtures directory not found", fixtures_dir=str(directory))
            return report

        for entry in self._entries.values():
            fixture_path = directory / f"{entry.name}.json"
            if not fixture_path.exists():
                continue

            report.total_fixtures += 1
            try:
                raw = _load_fixture(fixture_path)
                entry.schema.model_validate(raw)
            except (FixtureError, ValidationError) as e:
                report.failures.append({"name": entry.name, "error": str(e)})
                self.logger.warning("Fixture validation failed", schema=entry.name, error=str(e))
                continue
            report.validated += 1

        self.logger.info(
            "Fixture validation completed",
            total=report.total_fixtures,
            validated=report.validated,
            failures=len(report.failures)
        )
        return report

    def get_schema_doc_model(self, include_json_schema: bool = False) -> List[Dict[str, Any]]:
        """Produce a lightweight documentation row for every registered schema."""
        rows = []
        for entry in self._entries.values():
            row = {
                "name": entry.name,
                "domain": entry.domain,
                "version": entry.version or "unversioned",
                "description": entry.description or "",
                "tags": list(entry.tags),
            }
            if include_json_schema:
                row["jsonSchema"] = entry.schema.model_json_schema(by_alias=True)
            rows.append(row)
        return rows

    def summary(self) -> Dict[str, Any]:
        """Minimal JSON summary for automation parsing."""
        stats = self.get_registry_stats()
        return {
            "totalRegistered": stats.total_registered,
            "domains": stats.domains,
            "names": stats.names,
        }


def _load_fixture(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise FixtureError(f"Cannot load fixture: {e}", fixture_path=str(path)) from e


def default_registry() -> SchemaRegistry:
    """Registry of the envelope and every seed event schema."""
    return SchemaRegistry([
        RegistryEntry(
            name="BaseEventEnvelope",
            schema=BaseEventEnvelope,
            domain="events",
            description="Envelope fields shared by every event payload",
            tags=("events", "envelope"),
        ),
        RegistryEntry(
            name="SystemHealthCheck",
            schema=SystemHealthCheckEvent,
            domain="system",
            version="1",
            description="Periodic health probe and readiness signal",
            tags=("system", "health"),
        ),
        RegistryEntry(
            name="ComputeJobQueued",
            schema=ComputeJobQueuedEvent,
            domain="compute",
            version="1",
            description="Compute workload accepted for processing",
            tags=("compute", "job"),
        ),
        RegistryEntry(
            name="ComputeJobCompleted",
            schema=ComputeJobCompletedEvent,
            domain="compute",
            version="1",
            description="Compute job finished successfully",
            tags=("compute", "job"),
        ),
        RegistryEntry(
            name="ComputeJobFailed",
            schema=ComputeJobFailedEvent,
            domain="compute",
            version="1",
            description="Compute job finished with an error",
            tags=("compute", "job"),
        ),
        RegistryEntry(
            name="UserAuthSessionStart",
            schema=UserAuthSessionStartEvent,
            domain="auth",
            version="1",
            description="User started a fresh authenticated session",
            tags=("auth", "session", "user"),
        ),
    ])
