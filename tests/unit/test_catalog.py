"""Unit tests for the event catalog."""

from typing import Literal

import pytest

from eventgov.schemas.catalog import SchemaCatalog, default_catalog, schema_type_literal
from eventgov.schemas.events import BaseEventEnvelope, SystemHealthCheckEvent, ComputeJobQueuedEvent
from eventgov.utils.errors import SchemaError


class DeployStartedEvent(BaseEventEnvelope):
    type: Literal["deploy.started"] = "deploy.started"
    service: str


class TestCatalogConstruction:
    """Test catalog construction and the key/literal invariant."""

    def test_default_catalog_types(self, catalog):
        assert catalog.list_types() == (
            "system.health_check",
            "compute.job_queued",
            "compute.job_completed",
            "compute.job_failed",
            "auth.session_start",
        )
        assert len(catalog) == 5

    def test_every_key_matches_schema_literal(self, catalog):
        for event_type in catalog:
            assert schema_type_literal(catalog.get_schema(event_type)) == event_type

    def test_mismatched_key_rejected(self):
        with pytest.raises(SchemaError):
            SchemaCatalog({"system.health": SystemHealthCheckEvent})

    def test_schema_without_literal_rejected(self):
        with pytest.raises(SchemaError):
            SchemaCatalog.from_schemas(BaseEventEnvelope)

    def test_duplicate_schema_rejected(self):
        with pytest.raises(SchemaError):
            SchemaCatalog.from_schemas(SystemHealthCheckEvent, SystemHealthCheckEvent)

    def test_catalog_is_read_only(self):
        schemas = {"deploy.started": DeployStartedEvent}
        catalog = SchemaCatalog(schemas)
        schemas["compute.job_queued"] = ComputeJobQueuedEvent
        assert "compute.job_queued" not in catalog

    def test_independent_instances(self):
        assert default_catalog().list_types() == default_catalog().list_types()


class TestCatalogLookup:
    """Test lookup and validation."""

    def test_get_schema(self, catalog):
        assert catalog.get_schema("system.health_check") is SystemHealthCheckEvent
        assert catalog.get_schema("made.up.event") is None

    def test_validate_success(self, catalog, health_check_payload):
        result = catalog.validate("system.health_check", health_check_payload)
        assert result.success
        assert result.data.status == "ok"
        assert result.issues == ()

    def test_validate_failure_has_issues(self, catalog):
        result = catalog.validate("system.health_check", {"type": "system.health_check", "status": "bogus"})
        assert not result.success
        assert not result.unknown_type
        paths = {issue["path"] for issue in result.issues}
        assert {"timestamp", "status"} <= paths

    def test_validate_unknown_type(self, catalog):
        result = catalog.validate("made.up.event", {})
        assert not result.success
        assert result.unknown_type
        assert result.error == "Unknown event type: made.up.event"

    def test_validate_never_raises_on_garbage(self, catalog):
        result = catalog.validate("system.health_check", ["not", "a", "mapping"])
        assert not result.success
        assert result.issues

    def test_try_parse(self, catalog, health_check_payload):
        assert catalog.try_parse("system.health_check", health_check_payload) is not None
        assert catalog.try_parse("system.health_check", {"status": "bogus"}) is None
        assert catalog.try_parse("made.up.event", {}) is None

    def test_custom_catalog(self):
        catalog = SchemaCatalog.from_schemas(DeployStartedEvent)
        result = catalog.validate("deploy.started", {"type": "deploy.started", "timestamp": "t", "service": "api"})
        assert result.success

    def test_summary(self, catalog):
        summary = catalog.to_summary()
        assert summary["count"] == 5
        assert summary["eventTypes"][0] == "system.health_check"
