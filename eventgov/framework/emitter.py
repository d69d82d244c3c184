"""
Validated event emission layer.

Wraps a raw publish/subscribe bus with catalog validation,
payload normalization, enforcement of the strict/soft mode and
per-type metrics. The raw bus is an external collaborator; it may
be synchronous or asynchronous.
"""

import inspect
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Set, Tuple

from pydantic import BaseModel
import structlog

from .config import EmitterConfig, EnforcementMode
from .metrics import EventMetricsCollector
from .metrics_store import MetricsStore, EmissionMetricsSnapshot, format_summary, print_summary
from ..schemas.catalog import SchemaCatalog, describe_issues, validate_with
from ..schemas.events import to_wire
from ..utils.errors import UnknownEventTypeError, create_error_context
from ..utils.logging import add_correlation_id


logger = structlog.get_logger("validated-emitter")

Listener = Callable[[Any], Any]


class RawEventBus(Protocol):
    """The publish/subscribe primitive the emitter forwards to."""

    def emit(self, event_type: str, payload: Any) -> Any:
        ...

    def on(self, event_type: str, listener: Listener) -> Any:
        ...


@dataclass(frozen=True)
class EmitResult:
    """Outcome of one validated emission."""
    ok: bool
    error: Optional[str] = None
    issues: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    bus_result: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result: Dict[str, Any] = {"ok": self.ok}
        if not self.ok:
            result["error"] = self.error
            result["issues"] = [dict(issue) for issue in self.issues]
        return result


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _build_candidate(event_type: str, payload: Any, inject_timestamp: bool) -> Any:
    """Copy the payload, pinning its type and optionally stamping a timestamp.

    Non-mapping payloads are returned untouched so validation reports them.
    """
    if payload is None:
        payload = {}
    elif isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True, exclude_none=True)
    if not isinstance(payload, Mapping):
        return payload

    candidate = dict(payload)
    if candidate.get("type") != event_type:
        candidate["type"] = event_type
    if inject_timestamp and not candidate.get("timestamp"):
        candidate["timestamp"] = _utc_timestamp()
    return candidate


class ValidatedEmitter:
    """
    Catalog-aware front for a raw event bus.

    Sole writer of emission metrics and sole enforcement point for
    the catalog/strict-mode contract. Emission returns a result for
    every expected problem; the single raising path is an
    uncatalogued, non-allowlisted type under strict mode.
    """

    def __init__(
        self,
        bus: RawEventBus,
        catalog: SchemaCatalog,
        config: Optional[EmitterConfig] = None,
        metrics: Optional[MetricsStore] = None
    ):
        self.bus = bus
        self.catalog = catalog
        self.config = config or EmitterConfig.from_env()
        self.metrics = metrics or MetricsStore(
            EventMetricsCollector(self.config.observability.metrics_namespace)
        )
        self._warned_unvalidated: Set[str] = set()

    @property
    def mode(self) -> EnforcementMode:
        return self.config.mode

    def emit_validated(
        self,
        event_type: str,
        payload: Any = None,
        skip_validation: bool = False,
        inject_timestamp: bool = False
    ) -> EmitResult:
        """
        Validate and emit an event.

        Args:
            event_type: Wire event type
            payload: Event payload (mapping or pydantic model)
            skip_validation: Forward without validating even when a schema
                exists; still metered. Reserved for performance experiments.
            inject_timestamp: Stamp the current UTC time when the payload
                carries no timestamp

        Returns:
            EmitResult; ``bus_result`` carries the raw bus return value.

        Raises:
            UnknownEventTypeError: strict mode and an uncatalogued,
                non-allowlisted type.
        """
        start = time.perf_counter()
        schema = self.catalog.get_schema(event_type)

        if schema is None:
            return self._emit_uncatalogued(event_type, payload, start)

        if skip_validation:
            self.metrics.record_metric(event_type, _elapsed_ms(start), True)
            return EmitResult(ok=True, bus_result=self.bus.emit(event_type, payload))

        candidate = _build_candidate(event_type, payload, inject_timestamp)
        result = validate_with(schema, candidate)
        elapsed = _elapsed_ms(start)

        if not result.success:
            self.metrics.record_metric(event_type, elapsed, False, result.error)
            logger.warning(
                "Event validation failed",
                event_type=event_type,
                issues=describe_issues(result.issues)
            )
            return EmitResult(ok=False, error="validation_failed", issues=result.issues)

        self.metrics.record_metric(event_type, elapsed, True)
        bus_result = self.bus.emit(event_type, to_wire(result.data))
        return EmitResult(ok=True, bus_result=bus_result)

    def _emit_uncatalogued(self, event_type: str, payload: Any, start: float) -> EmitResult:
        self.metrics.record_unknown(event_type)
        allowed = self.config.is_allowlisted(event_type)

        if self.mode is EnforcementMode.STRICT and not allowed:
            self.metrics.record_metric(
                event_type, _elapsed_ms(start), False, "Unknown event in strict mode"
            )
            logger.error("Rejected uncatalogued event", event_type=event_type, mode=self.mode.value)
            raise UnknownEventTypeError(
                event_type,
                context=create_error_context(
                    component="validated-emitter",
                    operation="emit_validated",
                    event_type=event_type,
                ),
            )

        self.metrics.record_metric(event_type, _elapsed_ms(start), True)
        logger.warning("Emitting uncatalogued event", event_type=event_type, allowlisted=allowed)
        return EmitResult(ok=True, bus_result=self.bus.emit(event_type, payload))

    async def aemit_validated(
        self,
        event_type: str,
        payload: Any = None,
        skip_validation: bool = False,
        inject_timestamp: bool = False
    ) -> EmitResult:
        """Emit through an async bus, awaiting its result."""
        result = self.emit_validated(
            event_type,
            payload,
            skip_validation=skip_validation,
            inject_timestamp=inject_timestamp,
        )
        if inspect.isawaitable(result.bus_result):
            bus_result = await result.bus_result
            return EmitResult(ok=result.ok, error=result.error, issues=result.issues, bus_result=bus_result)
        return result

    def on_validated(self, event_type: str, listener: Listener) -> Any:
        """
        Subscribe with validation of every incoming payload.

        Invalid deliveries are logged and dropped; the listener only
        ever sees parsed payloads. Types without a schema are
        subscribed directly, with a one-time warning.
        """
        schema = self.catalog.get_schema(event_type)
        if schema is None:
            if event_type not in self._warned_unvalidated:
                self._warned_unvalidated.add(event_type)
                logger.warning(
                    "Listener attached without validation",
                    event_type=event_type
                )
            return self.bus.on(event_type, listener)

        def _parse(payload: Any) -> Optional[BaseModel]:
            result = validate_with(schema, payload)
            if result.success:
                return result.data
            self.metrics.record_drop(event_type)
            log = logger
            if isinstance(payload, Mapping) and payload.get("correlationId"):
                log = add_correlation_id(logger, str(payload["correlationId"]))
            log.warning(
                "Dropping invalid incoming event",
                event_type=event_type,
                issues=describe_issues(result.issues)
            )
            return None

        if inspect.iscoroutinefunction(listener):
            async def _async_wrapper(payload: Any) -> Any:
                parsed = _parse(payload)
                if parsed is None:
                    return None
                return await listener(parsed)

            return self.bus.on(event_type, _async_wrapper)

        def _wrapper(payload: Any) -> Any:
            parsed = _parse(payload)
            if parsed is None:
                return None
            return listener(parsed)

        return self.bus.on(event_type, _wrapper)

    def on_raw(self, event_type: str, listener: Listener) -> Any:
        """Direct pass-through subscription without validation."""
        return self.bus.on(event_type, listener)

    def get_emission_metrics(self) -> EmissionMetricsSnapshot:
        return self.metrics.get_emission_metrics(self.catalog.list_types(), self.mode)

    def format_summary(self) -> str:
        return format_summary(self.get_emission_metrics())

    def print_summary(self) -> None:
        print_summary(self.get_emission_metrics())
