"""Unit tests for the schema registry."""

import json

import pytest

from eventgov.schemas.events import SystemHealthCheckEvent, UserAuthSessionStartEvent
from eventgov.schemas.registry import SchemaRegistry, RegistryEntry, DEFAULT_FIXTURES_DIR
from eventgov.utils.errors import SchemaError


@pytest.fixture
def small_registry():
    return SchemaRegistry([
        RegistryEntry(name="SystemHealthCheck", schema=SystemHealthCheckEvent, domain="system"),
        RegistryEntry(name="UserAuthSessionStart", schema=UserAuthSessionStartEvent, domain="auth", version="2"),
    ])


def write_fixture(directory, name, data):
    (directory / f"{name}.json").write_text(json.dumps(data), encoding="utf-8")


class TestSchemaRegistry:
    """Test registry lookups and statistics."""

    def test_default_registry_names(self, registry):
        assert registry.list_schemas() == [
            "BaseEventEnvelope",
            "SystemHealthCheck",
            "ComputeJobQueued",
            "ComputeJobCompleted",
            "ComputeJobFailed",
            "UserAuthSessionStart",
        ]

    def test_get_schema(self, registry):
        entry = registry.get_schema("SystemHealthCheck")
        assert entry.schema is SystemHealthCheckEvent
        assert entry.domain == "system"
        assert registry.get_schema("system.health_check") is None

    def test_duplicate_name_rejected(self):
        entry = RegistryEntry(name="Dup", schema=SystemHealthCheckEvent, domain="system")
        with pytest.raises(SchemaError):
            SchemaRegistry([entry, entry])

    def test_stats_per_domain(self, registry):
        stats = registry.get_registry_stats()
        assert stats.total_registered == 6
        assert stats.domains == {"events": 1, "system": 1, "compute": 3, "auth": 1}
        assert stats.coverage_pct is None

    def test_coverage_percentage(self, small_registry):
        stats = small_registry.get_registry_stats(discovered_file_count=3, orphan_files=["forms.py"])
        assert stats.coverage_pct == 66.67
        assert stats.to_dict()["orphanFiles"] == ["forms.py"]

    def test_coverage_skipped_for_zero_discovered(self, small_registry):
        assert small_registry.get_registry_stats(discovered_file_count=0).coverage_pct is None

    def test_doc_model(self, small_registry):
        rows = small_registry.get_schema_doc_model()
        assert rows[0] == {
            "name": "SystemHealthCheck",
            "domain": "system",
            "version": "unversioned",
            "description": "",
            "tags": [],
        }
        assert rows[1]["version"] == "2"

    def test_doc_model_json_schema(self, small_registry):
        rows = small_registry.get_schema_doc_model(include_json_schema=True)
        assert "status" in rows[0]["jsonSchema"]["properties"]
        assert "userId" in rows[1]["jsonSchema"]["properties"]

    def test_summary(self, registry):
        summary = registry.summary()
        assert summary["totalRegistered"] == 6
        assert "SystemHealthCheck" in summary["names"]


class TestFixtureValidation:
    """Test fixture-based regression checks."""

    def test_single_passing_fixture(self, small_registry, tmp_path):
        write_fixture(tmp_path, "SystemHealthCheck", {"type": "system.health_check", "timestamp": "t", "status": "ok"})
        report = small_registry.validate_fixtures(tmp_path)
        assert report.to_dict() == {"totalFixtures": 1, "validated": 1, "failures": []}
        assert report.ok

    def test_invalid_fixture_reported(self, small_registry, tmp_path):
        write_fixture(tmp_path, "SystemHealthCheck", {"type": "system.health_check", "timestamp": "t", "status": "bogus"})
        write_fixture(tmp_path, "UserAuthSessionStart", {"type": "auth.session_start", "timestamp": "t", "userId": "u", "sessionId": "s"})

        report = small_registry.validate_fixtures(str(tmp_path))
        assert report.total_fixtures == 2
        assert report.validated == 1
        assert [failure["name"] for failure in report.failures] == ["SystemHealthCheck"]
        assert "status" in report.failures[0]["error"]

    def test_malformed_json_reported(self, small_registry, tmp_path):
        (tmp_path / "SystemHealthCheck.json").write_text("{not json", encoding="utf-8")
        report = small_registry.validate_fixtures(tmp_path)
        assert report.total_fixtures == 1
        assert report.validated == 0
        assert report.failures[0]["name"] == "SystemHealthCheck"

    def test_missing_fixtures_skipped(self, small_registry, tmp_path):
        report = small_registry.validate_fixtures(tmp_path)
        assert report.to_dict() == {"totalFixtures": 0, "validated": 0, "failures": []}

    def test_missing_directory(self, small_registry, tmp_path):
        report = small_registry.validate_fixtures(tmp_path / "absent")
        assert report.total_fixtures == 0

    def test_bundled_fixtures_pass(self, registry):
        report = registry.validate_fixtures()
        assert report.ok
        assert report.total_fixtures == len(list(DEFAULT_FIXTURES_DIR.glob("*.json")))
        assert report.validated == report.total_fixtures
