"""Pytest configuration and fixtures."""

import pytest
from prometheus_client import CollectorRegistry

from eventgov.framework.config import EmitterConfig
from eventgov.framework.emitter import ValidatedEmitter
from eventgov.framework.metrics import EventMetricsCollector
from eventgov.framework.metrics_store import MetricsStore
from eventgov.schemas.catalog import default_catalog
from eventgov.schemas.registry import default_registry
from tests.fixtures.mock_bus import MockEventBus, AsyncMockEventBus


@pytest.fixture(autouse=True)
def clean_event_env(monkeypatch):
    """Keep host environment toggles out of the tests."""
    for name in (
        "EVENTGOV_EVENTS_STRICT",
        "EVENTGOV_EVENTS_ALLOWLIST",
        "EVENTGOV_LOG_LEVEL",
        "EVENTGOV_LOG_FORMAT",
        "EVENTGOV_METRICS_NAMESPACE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def mock_bus():
    return MockEventBus()


@pytest.fixture
def async_bus():
    return AsyncMockEventBus()


@pytest.fixture
def collector():
    """Prometheus collector on an isolated registry."""
    return EventMetricsCollector(namespace="test", registry=CollectorRegistry())


@pytest.fixture
def metrics_store(collector):
    return MetricsStore(collector=collector)


@pytest.fixture
def soft_emitter(mock_bus, catalog, metrics_store):
    """Emitter in soft mode."""
    return ValidatedEmitter(mock_bus, catalog, EmitterConfig(strict_mode=False), metrics_store)


@pytest.fixture
def strict_emitter(mock_bus, catalog, metrics_store):
    """Emitter in strict mode with one allow-listed legacy type."""
    config = EmitterConfig(strict_mode=True, allowlist=("legacy.allowed",))
    return ValidatedEmitter(mock_bus, catalog, config, metrics_store)


@pytest.fixture
def health_check_payload():
    """Valid system health check payload."""
    return {
        "type": "system.health_check",
        "timestamp": "2024-01-01T00:00:00Z",
        "status": "ok",
    }


@pytest.fixture
def job_queued_payload():
    """Valid compute job queued payload."""
    return {
        "type": "compute.job_queued",
        "timestamp": "2024-01-01T00:00:00Z",
        "correlationId": "job-1",
        "jobId": "job-1",
        "jobType": "embedding",
    }
