"""
Event schema definitions for the governed event layer.

Defines the shared envelope and the concrete payload schemas
for every catalogued event type. Each concrete schema pins its
``type`` field to a literal matching its catalog key, so the
schemas together form a tagged union discriminated by ``type``.

Validation is strict: values are never coerced (``"12"`` is not a
number, ``1`` is not ``True``), and optional fields may be omitted
but not sent as ``null``.
"""

from typing import Annotated, Any, Dict, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class BaseEventEnvelope(BaseModel):
    """Envelope fields shared by every event payload."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True, strict=True)

    # concrete schemas narrow this to a literal
    type: str
    timestamp: str = Field(..., min_length=1, description="ISO-8601 timestamp (UTC preferred)")
    # UUIDs arrive as strings on the wire
    id: UUID = Field(None, strict=False)
    origin: str = None
    correlation_id: str = Field(None, alias="correlationId")


def _require_bool(value: Any) -> Any:
    # 1 and 0 are not booleans here
    if not isinstance(value, bool):
        raise ValueError("Input should be a valid boolean")
    return value


class SystemHealthCheckEvent(BaseEventEnvelope):
    """Emitted on periodic internal health probes and readiness signals."""

    type: Literal["system.health_check"] = "system.health_check"
    status: Literal["ok", "degraded", "error"]
    latency_ms: float = Field(None, ge=0, alias="latencyMs")
    details: Dict[str, Any] = None


class ComputeJobQueuedEvent(BaseEventEnvelope):
    """Emitted when a compute workload is accepted for processing."""

    type: Literal["compute.job_queued"] = "compute.job_queued"
    job_id: str = Field(..., alias="jobId")
    job_type: str = Field(..., alias="jobType")
    priority: Literal["low", "normal", "high"] = "normal"
    estimated_ms: int = Field(None, gt=0, alias="estimatedMs")


class ComputeJobCompletedEvent(BaseEventEnvelope):
    """Terminal success path for a compute job."""

    type: Literal["compute.job_completed"] = "compute.job_completed"
    job_id: str = Field(..., alias="jobId")
    duration_ms: int = Field(..., ge=0, alias="durationMs")
    result_ref: str = Field(None, alias="resultRef")
    success: Literal[True]

    @field_validator("success", mode="before")
    @classmethod
    def _strict_success(cls, value: Any) -> Any:
        return _require_bool(value)


class ComputeJobFailedEvent(BaseEventEnvelope):
    """Terminal failure path for a compute job."""

    type: Literal["compute.job_failed"] = "compute.job_failed"
    job_id: str = Field(..., alias="jobId")
    duration_ms: int = Field(None, ge=0, alias="durationMs")
    error_type: str = Field(None, alias="errorType")
    message: str = None
    retryable: bool = False
    success: Literal[False] = None

    @field_validator("success", mode="before")
    @classmethod
    def _strict_success(cls, value: Any) -> Any:
        return _require_bool(value)


class UserAuthSessionStartEvent(BaseEventEnvelope):
    """Emitted when a user initiates a fresh authenticated session."""

    type: Literal["auth.session_start"] = "auth.session_start"
    user_id: str = Field(..., alias="userId")
    session_id: str = Field(..., alias="sessionId")
    method: Literal["email", "oauth", "token", "other"] = "other"


# Declaration order is the catalog's listing order.
EVENT_SCHEMAS = (
    SystemHealthCheckEvent,
    ComputeJobQueuedEvent,
    ComputeJobCompletedEvent,
    ComputeJobFailedEvent,
    UserAuthSessionStartEvent,
)

CanonicalEvent = Annotated[
    Union[
        SystemHealthCheckEvent,
        ComputeJobQueuedEvent,
        ComputeJobCompletedEvent,
        ComputeJobFailedEvent,
        UserAuthSessionStartEvent,
    ],
    Field(discriminator="type"),
]

_canonical_adapter = TypeAdapter(CanonicalEvent)


def parse_event(payload: Any) -> BaseEventEnvelope:
    """Parse any canonical event, dispatching on its ``type`` field.

    Raises ``pydantic.ValidationError`` when the tag is missing, unknown,
    or the payload does not match the tagged schema.
    """
    return _canonical_adapter.validate_python(payload)


def to_wire(event: BaseModel) -> Dict[str, Any]:
    """Serialize a parsed event back to its JSON-compatible wire shape."""
    return event.model_dump(mode="json", by_alias=True, exclude_none=True)
