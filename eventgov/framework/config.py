"""
Configuration management for the validated event layer.

Provides typed configuration classes with environment variable
injection and validation. Configuration is read once at startup
and threaded through constructors.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


# Event types permitted to bypass catalog validation while adoption is partial.
# Keep this list minimal and intentional.
LEGACY_ALLOW_UNCATALOGUED: Tuple[str, ...] = ()


class EnforcementMode(Enum):
    """Handling of uncatalogued event types."""
    SOFT = "soft"
    STRICT = "strict"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class ObservabilityConfig:
    """Observability configuration."""
    log_level: str = field(default_factory=lambda: os.getenv("EVENTGOV_LOG_LEVEL", "info"))
    log_format: str = field(default_factory=lambda: os.getenv("EVENTGOV_LOG_FORMAT", "json"))
    metrics_namespace: str = field(default_factory=lambda: os.getenv("EVENTGOV_METRICS_NAMESPACE", "eventgov"))

    def __post_init__(self):
        if self.log_level.lower() not in ["debug", "info", "warning", "error"]:
            raise ValueError(f"Invalid log level: {self.log_level}")
        if self.log_format not in ["json", "console"]:
            raise ValueError(f"Invalid log format: {self.log_format}")


@dataclass(frozen=True)
class EmitterConfig:
    """Validated emitter configuration."""
    strict_mode: bool = field(default_factory=lambda: _env_flag("EVENTGOV_EVENTS_STRICT"))
    allowlist: Tuple[str, ...] = field(
        default_factory=lambda: LEGACY_ALLOW_UNCATALOGUED + _env_list("EVENTGOV_EVENTS_ALLOWLIST")
    )
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def __post_init__(self):
        # accept any iterable of names, store as a tuple
        object.__setattr__(self, "allowlist", tuple(self.allowlist))

    @classmethod
    def from_env(cls) -> "EmitterConfig":
        """Create configuration from environment variables."""
        return cls()

    @property
    def mode(self) -> EnforcementMode:
        return EnforcementMode.STRICT if self.strict_mode else EnforcementMode.SOFT

    def is_allowlisted(self, event_type: str) -> bool:
        return event_type in self.allowlist

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "mode": self.mode.value,
            "strict_mode": self.strict_mode,
            "allowlist": list(self.allowlist),
            "observability": {
                "log_level": self.observability.log_level,
                "log_format": self.observability.log_format,
                "metrics_namespace": self.observability.metrics_namespace,
            },
        }
