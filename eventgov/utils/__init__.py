"""
Utility modules for the event governance layer.

Provides common utilities for:
- Structured logging
- Error handling
"""

from .logging import setup_logging, configure_logging, add_correlation_id
from .errors import (
    EventGovernanceError,
    ErrorContext,
    SchemaError,
    UnknownEventTypeError,
    FixtureError,
    create_error_context,
)

__all__ = [
    "setup_logging",
    "configure_logging",
    "add_correlation_id",
    "EventGovernanceError",
    "ErrorContext",
    "SchemaError",
    "UnknownEventTypeError",
    "FixtureError",
    "create_error_context",
]
