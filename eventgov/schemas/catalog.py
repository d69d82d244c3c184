"""
Event catalog for runtime dispatch.

Maps event-type names to the schema that parses and validates
their payloads. The catalog is built once at startup and is
read-only afterwards; it is passed explicitly to the emitter,
the coverage analyzer and tooling.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, get_args

from pydantic import BaseModel, ValidationError
import structlog

from .events import EVENT_SCHEMAS
from ..utils.errors import SchemaError


logger = structlog.get_logger("event-catalog")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one payload."""
    success: bool
    data: Optional[BaseModel] = None
    issues: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    unknown_type: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "unknown_type": self.unknown_type,
            "error": self.error,
            "issues": [dict(issue) for issue in self.issues],
        }


def format_issues(exc: ValidationError) -> Tuple[Dict[str, Any], ...]:
    """Flatten a pydantic error into field-level issue records."""
    return tuple(
        {
            "path": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "code": err["type"],
        }
        for err in exc.errors()
    )


def describe_issues(issues: Tuple[Dict[str, Any], ...]) -> str:
    """Render issues as a single log-friendly line."""
    return "; ".join(f"{issue['path']} {issue['message']}".strip() for issue in issues)


def schema_type_literal(schema: Type[BaseModel]) -> Optional[str]:
    """Return the literal value pinned on a schema's ``type`` field, if any."""
    type_field = schema.model_fields.get("type")
    if type_field is None:
        return None
    values = get_args(type_field.annotation)
    if len(values) != 1 or not isinstance(values[0], str):
        return None
    return values[0]


class SchemaCatalog:
    """
    Immutable mapping from event type to payload schema.

    Every schema's ``type`` literal must equal its key; this is
    checked once when the catalog is built.
    """

    def __init__(self, schemas: Dict[str, Type[BaseModel]]):
        for event_type, schema in schemas.items():
            literal = schema_type_literal(schema)
            if literal != event_type:
                raise SchemaError(
                    f"Schema {schema.__name__} declares type {literal!r} "
                    f"but is catalogued under {event_type!r}",
                    schema_name=schema.__name__,
                )
        self._schemas = MappingProxyType(dict(schemas))

    @classmethod
    def from_schemas(cls, *schemas: Type[BaseModel]) -> "SchemaCatalog":
        """Build a catalog keyed by each schema's own type literal."""
        mapping: Dict[str, Type[BaseModel]] = {}
        for schema in schemas:
            event_type = schema_type_literal(schema)
            if event_type is None:
                raise SchemaError(
                    f"Schema {schema.__name__} has no literal type field",
                    schema_name=schema.__name__,
                )
            if event_type in mapping:
                raise SchemaError(
                    f"Duplicate catalog entry for {event_type!r}",
                    schema_name=schema.__name__,
                )
            mapping[event_type] = schema
        return cls(mapping)

    def __contains__(self, event_type: object) -> bool:
        return event_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def get_schema(self, event_type: str) -> Optional[Type[BaseModel]]:
        """Get schema for event type."""
        return self._schemas.get(event_type)

    def list_types(self) -> Tuple[str, ...]:
        """List catalogued event types in declaration order."""
        return tuple(self._schemas.keys())

    def validate(self, event_type: str, payload: Any) -> ValidationResult:
        """Validate a payload for an event type. Never raises."""
        schema = self.get_schema(event_type)
        if schema is None:
            return ValidationResult(
                success=False,
                unknown_type=True,
                error=f"Unknown event type: {event_type}",
            )
        return validate_with(schema, payload)

    def try_parse(self, event_type: str, payload: Any) -> Optional[BaseModel]:
        """Soft parse returning the typed payload, or None with a warning."""
        result = self.validate(event_type, payload)
        if result.success:
            return result.data
        logger.warning(
            "Invalid event payload",
            event_type=event_type,
            error=result.error or describe_issues(result.issues),
        )
        return None

    def to_summary(self) -> Dict[str, Any]:
        """JSON-ready catalog summary."""
        types: List[str] = list(self.list_types())
        return {"eventTypes": types, "count": len(types)}


def validate_with(schema: Type[BaseModel], payload: Any) -> ValidationResult:
    """Run a schema's structural validation and wrap the outcome."""
    try:
        data = schema.model_validate(payload)
    except ValidationError as exc:
        issues = format_issues(exc)
        return ValidationResult(success=False, issues=issues, error=describe_issues(issues))
    return ValidationResult(success=True, data=data)


def default_catalog() -> SchemaCatalog:
    """Build the catalog of seed event schemas."""
    return SchemaCatalog.from_schemas(*EVENT_SCHEMAS)
