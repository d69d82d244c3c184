"""
Custom error classes for the event governance layer.

Provides structured error handling with error codes and
context information. Expected validation problems are returned
as results; the classes here cover the conditions that raise.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Error context information."""
    component: str
    operation: str
    event_type: Optional[str] = None
    correlation_id: Optional[str] = None
    metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


class EventGovernanceError(Exception):
    """Base exception for event governance errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        result = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

        if self.context:
            result["context"] = {
                "component": self.context.component,
                "operation": self.context.operation,
                "event_type": self.context.event_type,
                "correlation_id": self.context.correlation_id,
                "metadata": self.context.metadata,
            }

        return result


class SchemaError(EventGovernanceError):
    """Error raised when a catalog or registry is built from inconsistent schemas."""

    def __init__(
        self,
        message: str,
        schema_name: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="SCHEMA_ERROR",
            context=context,
            details=details or {}
        )
        self.schema_name = schema_name

        if schema_name:
            self.details["schema_name"] = schema_name


class UnknownEventTypeError(EventGovernanceError):
    """Error raised when an uncatalogued event type is emitted in strict mode."""

    def __init__(
        self,
        event_type: str,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"Unknown event type '{event_type}' emitted under strict mode",
            error_code="UNKNOWN_EVENT_TYPE",
            context=context,
            details=details or {}
        )
        self.event_type = event_type
        self.details["event_type"] = event_type


class FixtureError(EventGovernanceError):
    """Error raised when a fixture file cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        fixture_path: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="FIXTURE_ERROR",
            context=context,
            details=details or {}
        )
        self.fixture_path = fixture_path

        if fixture_path:
            self.details["fixture_path"] = fixture_path


def create_error_context(
    component: str,
    operation: str,
    event_type: Optional[str] = None,
    correlation_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> ErrorContext:
    """Create error context."""
    return ErrorContext(
        component=component,
        operation=operation,
        event_type=event_type,
        correlation_id=correlation_id,
        metadata=metadata or {}
    )
