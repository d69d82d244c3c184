"""
Catalog coverage analysis.

Compares event types observed at runtime (from logs or an
observation run) against the catalog and reports the gaps.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .catalog import SchemaCatalog


@dataclass(frozen=True)
class CoverageReport:
    """Diff between the catalog and an observed type list."""
    catalog_count: int
    observed_count: int
    unknown: Tuple[str, ...]
    unknown_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "catalogCount": self.catalog_count,
            "observedCount": self.observed_count,
            "unknown": list(self.unknown),
            "unknownCount": self.unknown_count,
        }


def diff_observed_events(catalog: SchemaCatalog, observed: Sequence[str]) -> CoverageReport:
    """Report observed event types that have no catalog entry.

    Every uncatalogued observation is listed, repeats included, in
    observation order.
    """
    catalog_types = set(catalog.list_types())
    unknown: List[str] = [event_type for event_type in observed if event_type not in catalog_types]

    return CoverageReport(
        catalog_count=len(catalog_types),
        observed_count=len(observed),
        unknown=tuple(unknown),
        unknown_count=len(unknown),
    )


class CoverageAnalyzer:
    """Coverage tooling bound to one catalog."""

    def __init__(self, catalog: SchemaCatalog):
        self.catalog = catalog

    def diff_observed_events(self, observed: Sequence[str]) -> CoverageReport:
        return diff_observed_events(self.catalog, observed)

    @staticmethod
    def observed_from_lines(lines: Iterable[str]) -> List[str]:
        """Parse an observation log: one event type per line, '#' comments skipped."""
        observed = []
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            observed.append(line)
        return observed

    @staticmethod
    def exceeds(report: CoverageReport, max_unknown: Optional[int]) -> bool:
        """Whether a report breaks the unknown-type threshold (None disables the gate)."""
        if max_unknown is None:
            return False
        return report.unknown_count > max_unknown
