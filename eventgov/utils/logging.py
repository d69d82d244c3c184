"""
Structured logging setup for the event governance layer.

Emitters, the catalog and the registry log through module-level
structlog loggers. Processes that embed the layer (or the schema
CLI) call ``setup_logging`` or ``configure_logging`` once at startup.
"""

import logging
import sys
from typing import TYPE_CHECKING, List, Optional

import structlog
from structlog.stdlib import LoggerFactory

if TYPE_CHECKING:
    from ..framework.config import ObservabilityConfig


def _processors(format_type: str) -> List[structlog.types.Processor]:
    processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def setup_logging(
    service_name: str,
    log_level: str = "info",
    format_type: str = "json"
) -> None:
    """
    Route structlog through stdlib logging on stderr.

    Args:
        service_name: Bound to every record as ``service``
        log_level: debug, info, warning or error
        format_type: json or console
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper())
    )

    structlog.configure(
        processors=_processors(format_type),
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service=service_name)


def configure_logging(
    service_name: str,
    observability: "ObservabilityConfig",
    log_level: Optional[str] = None,
    format_type: Optional[str] = None
) -> None:
    """Set up logging from configuration; explicit arguments win."""
    setup_logging(
        service_name,
        log_level=log_level or observability.log_level,
        format_type=format_type or observability.log_format,
    )


def add_correlation_id(logger: structlog.BoundLogger, correlation_id: str) -> structlog.BoundLogger:
    """Bind a correlation ID to a logger."""
    return logger.bind(correlation_id=correlation_id)
