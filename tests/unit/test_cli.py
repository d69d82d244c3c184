"""Unit tests for the schema tooling CLI."""

import json
from unittest.mock import patch

import pytest

from eventgov.cli import main


class TestValidateSchemasCli:
    """Test CLI flags and exit codes."""

    def test_summary(self, capsys):
        assert main(["--summary"]) == 0
        out = capsys.readouterr().out
        assert '"count": 5' in out
        assert '"totalRegistered": 6' in out
        assert "Event Emission Summary" in out

    def test_bundled_fixtures(self, capsys):
        assert main(["--fixtures"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["failures"] == []
        assert report["validated"] == report["totalFixtures"]

    def test_failing_fixtures_exit_non_zero(self, tmp_path, capsys):
        (tmp_path / "SystemHealthCheck.json").write_text(
            json.dumps({"type": "system.health_check", "timestamp": "t", "status": "bogus"}),
            encoding="utf-8"
        )
        assert main(["--fixtures", str(tmp_path)]) == 1
        report = json.loads(capsys.readouterr().out)
        assert report["failures"][0]["name"] == "SystemHealthCheck"

    @pytest.mark.parametrize("max_unknown,expected", [([], 0), (["--max-unknown", "0"], 1), (["--max-unknown", "1"], 0)])
    def test_observed(self, tmp_path, capsys, max_unknown, expected):
        observed = tmp_path / "observed.txt"
        observed.write_text("system.health_check\nmade.up.event\n", encoding="utf-8")

        assert main(["--observed", str(observed)] + max_unknown) == expected
        report = json.loads(capsys.readouterr().out)
        assert report["unknown"] == ["made.up.event"]

    def test_missing_observation_file(self, tmp_path):
        assert main(["--observed", str(tmp_path / "absent.txt")]) == 2

    def test_no_flags_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_logging_follows_environment(self, monkeypatch):
        monkeypatch.setenv("EVENTGOV_LOG_LEVEL", "error")
        monkeypatch.setenv("EVENTGOV_LOG_FORMAT", "console")
        with patch("eventgov.utils.logging.setup_logging") as setup:
            main([])
        setup.assert_called_once_with("validate-schemas", log_level="error", format_type="console")

    def test_logging_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("EVENTGOV_LOG_FORMAT", "console")
        with patch("eventgov.utils.logging.setup_logging") as setup:
            main(["--verbose", "--log-format", "json"])
        setup.assert_called_once_with("validate-schemas", log_level="debug", format_type="json")
